"""Error hierarchy for ezmime.

Every exception raised on purpose by the package derives from
`EzmimeError`, so callers can catch the whole family with one clause.
Input errors (`MissingSender`, `InvalidAddress`) are raised before any
output is produced. `TransportFailure` wraps whatever the SMTP layer
raised and keeps the original error as `__cause__`.
"""


class EzmimeError(Exception):
    """Base class for all ezmime errors."""


class MissingSender(EzmimeError):
    """Raised when a message is built or sent without a sender."""

    def __init__(self, message: str = "A sender must be set with set_from() before building."):
        super().__init__(message)


class InvalidAddress(EzmimeError, ValueError):
    """Raised when an email address fails the structural check.

    Attributes:
        address (str): The sanitized address that was rejected.
    """

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Invalid email format: {address!r}")


class FileUnreadable(EzmimeError):
    """Raised when an attachment or embedded file cannot be read.

    Attributes:
        path (str): Path of the file that could not be read.
    """

    def __init__(self, path: str, reason: str | None = None):
        self.path = path
        message = f"Unable to read file: {path}"
        if reason:
            message += f" ({reason})"
        super().__init__(message)


class TransportFailure(EzmimeError):
    """Raised when the SMTP transport fails to deliver a message."""
