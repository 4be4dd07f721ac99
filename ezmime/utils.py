"""Validation helpers for ezmime inputs.

These checks run when values enter the builder or the transport. Address
validation is not done here: it is deferred until the message is built.
"""

from os.path import isfile
from urllib.parse import urlsplit

SMTP_SCHEMES = {"smtp": 25, "smtps": 465}
MISSING_FILE_POLICIES = ("raise", "empty", "skip")
TEMPLATE_EXTENSIONS = (".html", ".htm", ".j2", ".jinja", ".jinja2")


def validate_path(path: str) -> None:
    """Checks that a file path is a non-empty string.

    Existence is checked later, when the file is encoded, so that the
    missing-file policy can apply.

    Raises:
        ValueError: If `path` is not a non-empty string.
    """
    if not isinstance(path, str) or not path.strip():
        raise ValueError("File path must be a non-empty string.")


def validate_content_id(cid: str) -> None:
    """Checks that a Content-ID is a non-empty string without angle brackets.

    Raises:
        ValueError: If `cid` is empty or contains ``<`` or ``>``.
    """
    if not isinstance(cid, str) or not cid:
        raise ValueError("Content-ID must be a non-empty string.")
    if "<" in cid or ">" in cid:
        raise ValueError("Content-ID must not contain angle brackets.")


def validate_template(file: str) -> None:
    """Checks that `file` points to an existing HTML/Jinja2 template.

    Raises:
        ValueError: If the path is not a string or has an unsupported
            extension.
        FileNotFoundError: If the file does not exist.
    """
    validate_path(file)
    if not file.lower().endswith(TEMPLATE_EXTENSIONS):
        raise ValueError(f"Template must be one of {', '.join(TEMPLATE_EXTENSIONS)}: {file}")
    if not isfile(file):
        raise FileNotFoundError(f"Template not found: {file}")


def validate_missing_file_policy(policy: str) -> None:
    if policy not in MISSING_FILE_POLICIES:
        raise ValueError(
            f"Invalid missing-file policy {policy!r}. Use one of: {', '.join(MISSING_FILE_POLICIES)}."
        )


def validate_smtp_url(url: str) -> tuple[str, str, int]:
    """Validates an SMTP endpoint URL and splits it into its parts.

    Args:
        url (str): Endpoint such as ``"smtp://localhost:25"`` or
            ``"smtps://smtp.gmail.com:465"``.

    Returns:
        tuple[str, str, int]: ``(scheme, host, port)``. The port defaults to
        25 for ``smtp`` and 465 for ``smtps``.

    Raises:
        ValueError: If the URL is not a string, uses another scheme, has no
            host or has an invalid port.
    """
    if not isinstance(url, str) or not url:
        raise ValueError("SMTP URL must be a non-empty string.")

    parts = urlsplit(url)
    scheme = parts.scheme.lower()
    if scheme not in SMTP_SCHEMES:
        raise ValueError(f"Unsupported SMTP URL scheme {parts.scheme!r}. Use 'smtp' or 'smtps'.")
    if not parts.hostname:
        raise ValueError(f"SMTP URL has no host: {url}")

    try:
        port = parts.port
    except ValueError as e:
        raise ValueError(f"SMTP URL has an invalid port: {url}") from e

    return scheme, parts.hostname, port or SMTP_SCHEMES[scheme]
