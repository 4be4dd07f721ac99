"""EZMime package initialization module.

This package builds RFC 2045/2047 compliant MIME email messages and hands
them to an SMTP server. Messages are composed with a fluent builder that
supports plain text and HTML bodies, Jinja2 HTML templates, inline
embedded files referenced by Content-ID, and file attachments.

Modules:
    core (module): The `EzMessage` builder and MIME assembler.
    encoding (module): Header, address, boundary and base64 encoding.
    mime_types (module): File extension to MIME type lookup.
    transport (module): SMTP delivery of assembled messages.
    errors (module): Exception hierarchy.

Example:
    from ezmime import EzMessage

    (
        EzMessage()
        .set_from("me@domain.com", "Me")
        .add_to("recipient@domain.com")
        .set_subject("Hello!")
        .set_html_body("<p>This is a test email.</p>")
        .send("smtps://smtp.domain.com:465", "me@domain.com", "secret")
    )
"""

from .core import Attachment, EzMessage, Recipient
from .errors import EzmimeError, FileUnreadable, InvalidAddress, MissingSender, TransportFailure
from .transport import SmtpTransport

__all__ = [
    "EzMessage",
    "Recipient",
    "Attachment",
    "SmtpTransport",
    "EzmimeError",
    "MissingSender",
    "InvalidAddress",
    "FileUnreadable",
    "TransportFailure",
]
