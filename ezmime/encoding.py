"""Header, address, boundary and content encoding helpers.

These are the building blocks used by `EzMessage.build()`:

- Header values are stripped of CR, LF and NUL before they reach a header
  line, and RFC 2047 "B" encoded when they contain non-ASCII characters.
- Addresses get a minimal structural check (one ``@`` present, no ``..``).
  This is not RFC 5321 validation.
- Boundaries combine a random alphanumeric run with a digest of the time
  elapsed since the process started.
- File content is base64 encoded and wrapped at 76 characters (RFC 2045).
"""

from base64 import b64encode
from hashlib import sha384
from random import SystemRandom
from time import monotonic_ns
from typing import List

from .errors import FileUnreadable, InvalidAddress

BOUNDARY_PREFIX = "ezmime_"
BOUNDARY_ALPHABET = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz"
BOUNDARY_RANDOM_LENGTH = 64
BASE64_LINE_LENGTH = 76

_SPECIALS = set('"\\,;:<>@[]().')


class ProcessClock:
    """Reports the time elapsed since a fixed start point.

    The start point is captured once, when the instance is created, and is
    never changed afterwards. `PROCESS_CLOCK` is created at import time and
    is shared read-only by every boundary generated in the process.
    """

    def __init__(self, start_ns: int | None = None):
        self._start_ns = monotonic_ns() if start_ns is None else start_ns

    @property
    def start_ns(self) -> int:
        return self._start_ns

    def elapsed_microseconds(self) -> int:
        return (monotonic_ns() - self._start_ns) // 1000


PROCESS_CLOCK = ProcessClock()

_system_random = SystemRandom()


def sanitize_header(value: str) -> str:
    """Removes CR, LF and NUL characters to prevent header injection."""
    return value.replace("\r", "").replace("\n", "").replace("\0", "")


def _has_non_ascii(value: str) -> bool:
    return any(ord(char) > 127 for char in value)


def _encoded_word(value: str) -> str:
    return "=?UTF-8?B?" + b64encode(value.encode("utf-8")).decode("ascii") + "?="


def encode_display_name(name: str) -> str:
    """Encodes a display name for use in an address header.

    Non-ASCII names become a single RFC 2047 encoded word. ASCII names that
    contain RFC 5322 specials are escaped and wrapped in double quotes.
    Anything else is returned as is.

    Args:
        name (str): The display name.

    Returns:
        str: The header-safe display name.

    Example:
        encode_display_name("Doe, John")  # '"Doe, John"'
        encode_display_name("José")       # '=?UTF-8?B?Sm9zw6k=?='
    """
    sanitized = sanitize_header(name)

    if _has_non_ascii(sanitized):
        return _encoded_word(sanitized)

    if any(char in _SPECIALS for char in sanitized):
        escaped = sanitized.replace("\\", "\\\\").replace('"', '\\"')
        return f'"{escaped}"'

    return sanitized


def encode_subject(subject: str) -> str:
    """Sanitizes a subject and RFC 2047 encodes it when non-ASCII."""
    sanitized = sanitize_header(subject)
    if _has_non_ascii(sanitized):
        return _encoded_word(sanitized)
    return sanitized


def sanitize_filename(filename: str) -> str:
    """Makes a file name safe for a quoted ``filename="..."`` parameter."""
    return sanitize_header(filename).replace("\\", "\\\\").replace('"', '\\"')


def sanitize_email_address(address: str) -> str:
    """Sanitizes an address and applies the minimal format check.

    Args:
        address (str): The raw email address.

    Returns:
        str: The sanitized address.

    Raises:
        InvalidAddress: If the address does not contain exactly one ``@``
            or contains ``..``.
    """
    sanitized = sanitize_header(address)
    if sanitized.count("@") != 1 or ".." in sanitized:
        raise InvalidAddress(sanitized)
    return sanitized


def format_recipient(recipient) -> str:
    """Formats a recipient for an address header.

    Returns ``Name <address>`` when the recipient has a display name and the
    bare address otherwise.
    """
    clean_address = sanitize_email_address(recipient.address)
    if recipient.name:
        return f"{encode_display_name(recipient.name)} <{clean_address}>"
    return clean_address


def format_envelope_address(recipient) -> str:
    """Formats a recipient as an SMTP envelope address, e.g. ``<a@x.com>``."""
    return f"<{sanitize_email_address(recipient.address)}>"


def generate_boundary(prefix: str, clock=PROCESS_CLOCK, rng=None) -> str:
    """Generates a multipart boundary token.

    The token is ``ezmime_<prefix>_<64 random alphanumerics>_<32 hex>``,
    where the hex suffix is the tail of a SHA-384 digest of the microseconds
    elapsed on `clock`. Uniqueness is probabilistic: body content is never
    scanned for the token.

    Args:
        prefix (str): Tag identifying the part, e.g. ``"main"`` or ``"alt"``.
        clock: Object exposing ``elapsed_microseconds()``. Defaults to the
            process-wide clock.
        rng: A `random.Random` compatible source. Defaults to
            `random.SystemRandom`.

    Returns:
        str: The boundary token (without the leading ``--``).
    """
    rng = rng or _system_random
    random_part = "".join(rng.choice(BOUNDARY_ALPHABET) for _ in range(BOUNDARY_RANDOM_LENGTH))
    digest = sha384(str(clock.elapsed_microseconds()).encode("ascii")).hexdigest().lower()
    return f"{BOUNDARY_PREFIX}{prefix}_{random_part}_{digest[32:64]}"


def wrap_base64(data: bytes) -> List[str]:
    """Base64 encodes `data` and splits it into 76-character lines."""
    encoded = b64encode(data).decode("ascii")
    return [encoded[i:i + BASE64_LINE_LENGTH] for i in range(0, len(encoded), BASE64_LINE_LENGTH)]


def encode_part(file_path: str) -> List[str]:
    """Reads a file and returns its content as wrapped base64 lines.

    Args:
        file_path (str): Path of the file to encode.

    Returns:
        list[str]: Base64 lines of at most 76 characters, without line
        terminators. An empty file yields an empty list.

    Raises:
        FileUnreadable: If the file does not exist or cannot be read.
    """
    try:
        with open(file_path, "rb") as f:
            data = f.read()
    except OSError as e:
        raise FileUnreadable(file_path, e.strerror or str(e)) from e
    return wrap_base64(data)
