from dataclasses import dataclass
from os.path import basename
from typing import Dict, List

from jinja2 import Template  # type: ignore

from .encoding import (
    encode_part,
    encode_subject,
    format_envelope_address,
    format_recipient,
    generate_boundary,
    PROCESS_CLOCK,
    sanitize_filename,
    sanitize_header,
)
from .errors import FileUnreadable, MissingSender
from .logger import get_logger
from .mime_types import resolve_mime_type
from .transport import SmtpTransport
from .utils import validate_content_id, validate_missing_file_policy, validate_path, validate_template

logger = get_logger(__name__)

CRLF = "\r\n"


@dataclass(frozen=True)
class Recipient:
    """An email address with an optional display name.

    An empty `name` means the address is rendered without a display name.
    """

    address: str
    name: str = ""


@dataclass(frozen=True)
class Attachment:
    """A file to be attached or embedded.

    When `mime_type` is None the type is resolved from the file extension.
    """

    path: str
    mime_type: str | None = None

    @property
    def content_type(self) -> str:
        if self.mime_type:
            return sanitize_header(self.mime_type)
        return resolve_mime_type(self.path)


def _normalize_newlines(text: str) -> str:
    return text.replace("\r\n", "\n").replace("\r", "\n").replace("\n", CRLF)


class EzMessage:
    """Builds RFC 2045/2047 compliant MIME messages and sends them over SMTP.

    The message is composed with chained setters and turned into bytes by
    `build()`. The produced structure is a ``multipart/related`` container
    holding a ``multipart/alternative`` part (plain text and HTML bodies),
    followed by inline embedded files and attachments.

    Example:
        message = (
            EzMessage()
            .set_from("me@domain.com", "Me")
            .add_to("user@domain.com", "User")
            .set_subject("Welcome!")
            .set_plain_text_body("Hello!")
            .set_html_body('<h1>Hello!</h1><img src="cid:logo">')
            .add_embedded_file("logo.png", "logo")
            .add_attachment("report.pdf")
        )
        message.send("smtps://smtp.domain.com:465", "me@domain.com", "secret")
    """

    def __init__(self, on_missing_file: str = "raise", clock=PROCESS_CLOCK, rng=None):
        """Initializes an empty message.

        Args:
            on_missing_file (str): What to do when an attachment or embedded
                file cannot be read while building:
                - ``"raise"``: raise `FileUnreadable` (default).
                - ``"empty"``: keep the part with an empty body and log a warning.
                - ``"skip"``: leave the part out and log a warning.
            clock: Source of elapsed time for boundary generation. Defaults
                to the process-wide clock.
            rng: Random source for boundary generation. Defaults to
                `random.SystemRandom`.

        Raises:
            ValueError: If `on_missing_file` is not a known policy.
        """
        validate_missing_file_policy(on_missing_file)
        self.on_missing_file = on_missing_file
        self.clock = clock
        self.rng = rng

        self.sender: Recipient | None = None
        self.to: List[Recipient] = []
        self.cc: List[Recipient] = []
        self.bcc: List[Recipient] = []
        self.reply_to: Recipient | None = None
        self.subject = ""
        self.plain_text_body: str | None = None
        self.html_body: str | None = None
        self.embedded_files: Dict[str, Attachment] = {}
        self.attachments: List[Attachment] = []

    def set_from(self, address: str, name: str = "") -> "EzMessage":
        """Sets the sender address and optional display name.

        Example:
            set_from("sender@example.com", "John Doe")
        """
        self.sender = Recipient(address, name)
        return self

    def add_to(self, address: str, name: str = "") -> "EzMessage":
        """Adds a "To" recipient. Call repeatedly for several recipients."""
        self.to.append(Recipient(address, name))
        return self

    def add_cc(self, address: str, name: str = "") -> "EzMessage":
        """Adds a "Cc" recipient."""
        self.cc.append(Recipient(address, name))
        return self

    def add_bcc(self, address: str, name: str = "") -> "EzMessage":
        """Adds a "Bcc" recipient.

        Bcc recipients are routed on the SMTP envelope by `send()` but their
        header is left out of the transmitted message.
        """
        self.bcc.append(Recipient(address, name))
        return self

    def set_reply_to(self, address: str, name: str = "") -> "EzMessage":
        self.reply_to = Recipient(address, name)
        return self

    def set_subject(self, subject: str) -> "EzMessage":
        """Sets the subject. Non-ASCII subjects are RFC 2047 encoded on build."""
        if not isinstance(subject, str):
            raise ValueError("Subject must be a string.")
        self.subject = subject
        return self

    def set_plain_text_body(self, body: str) -> "EzMessage":
        """Sets the plain text body shown by clients that do not render HTML."""
        if not isinstance(body, str):
            raise ValueError("Text must be a string.")
        self.plain_text_body = body
        return self

    def set_html_body(self, body: str) -> "EzMessage":
        """Sets the HTML body.

        Embedded files are referenced from the HTML with ``cid:`` URLs, e.g.
        ``<img src="cid:logo">``.
        """
        if not isinstance(body, str):
            raise ValueError("HTML must be a string.")
        self.html_body = body
        return self

    def use_template(self, file: str, **variables) -> "EzMessage":
        """Renders a Jinja2 HTML template into the HTML body.

        Args:
            file (str): Path to the template file.
            **variables: Values for the template placeholders.

        Raises:
            ValueError: If the file is not a supported template.
            FileNotFoundError: If the file does not exist.

        Example:
            use_template("templates/welcome.html", name="John", version="1.0.0")
        """
        validate_template(file)

        with open(file, "r", encoding="utf-8") as f:
            html = Template(f.read()).render(**variables)
        return self.set_html_body(html)

    def add_embedded_file(self, path: str, cid: str, mime_type: str | None = None) -> "EzMessage":
        """Embeds a file inline, referenced from the HTML body by Content-ID.

        Adding a second file with the same `cid` replaces the first one.

        Args:
            path (str): Path to the file to embed.
            cid (str): Content-ID, used in HTML as ``src="cid:<cid>"``.
            mime_type (str, optional): Overrides the type resolved from the
                file extension.

        Example:
            add_embedded_file("logo.png", "logo")
        """
        validate_path(path)
        validate_content_id(cid)
        self.embedded_files[cid] = Attachment(path, mime_type)
        return self

    def add_attachment(self, path: str, mime_type: str | None = None) -> "EzMessage":
        """Adds a file attachment. The same file may be attached several times.

        Example:
            add_attachment("reports/monthly_report.pdf")
        """
        validate_path(path)
        self.attachments.append(Attachment(path, mime_type))
        return self

    def clear_body(self) -> "EzMessage":
        """Clears the plain text and HTML bodies, keeping everything else."""
        self.plain_text_body = None
        self.html_body = None
        return self

    def clear_attachments(self) -> "EzMessage":
        """Removes all attachments and embedded files."""
        self.attachments = []
        self.embedded_files = {}
        return self

    def envelope_sender(self) -> str:
        """Returns the SMTP envelope sender, e.g. ``"<me@domain.com>"``.

        Raises:
            MissingSender: If no sender was set.
            InvalidAddress: If the sender address is malformed.
        """
        if self.sender is None:
            raise MissingSender()
        return format_envelope_address(self.sender)

    def envelope_recipients(self) -> List[str]:
        """Returns the envelope addresses of To, Cc and Bcc, in that order.

        Duplicates are removed, keeping the first occurrence.
        """
        recipients = []
        for recipient in [*self.to, *self.cc, *self.bcc]:
            address = format_envelope_address(recipient)
            if address not in recipients:
                recipients.append(address)
        return recipients

    def _encode_file(self, attachment: Attachment) -> List[str] | None:
        try:
            return encode_part(attachment.path)
        except FileUnreadable as e:
            if self.on_missing_file == "raise":
                raise
            if self.on_missing_file == "skip":
                logger.warning("Skipping unreadable file: %s", e)
                return None
            logger.warning("Emitting empty part for unreadable file: %s", e)
            return []

    def _header_lines(self, main_boundary: str, include_bcc: bool) -> List[str]:
        lines = [
            "MIME-Version: 1.0",
            "From: " + format_recipient(self.sender),
            "To: " + ", ".join(format_recipient(r) for r in self.to),
            "Subject: " + encode_subject(self.subject),
        ]

        if self.cc:
            lines.append("Cc: " + ", ".join(format_recipient(r) for r in self.cc))
        if self.bcc and include_bcc:
            lines.append("Bcc: " + ", ".join(format_recipient(r) for r in self.bcc))
        if self.reply_to is not None and self.reply_to.address:
            lines.append("Reply-To: " + format_recipient(self.reply_to))

        lines.append(f'Content-Type: multipart/related; boundary="{main_boundary}"')
        lines.append("")
        return lines

    def _alternative_lines(self, main_boundary: str, alt_boundary: str) -> List[str]:
        lines = [
            "--" + main_boundary,
            f'Content-Type: multipart/alternative; boundary="{alt_boundary}"',
            "",
        ]

        for subtype, body in (("plain", self.plain_text_body), ("html", self.html_body)):
            if body:
                lines += [
                    "--" + alt_boundary,
                    f'Content-Type: text/{subtype}; charset="UTF-8"',
                    "",
                    _normalize_newlines(body),
                    "",
                ]

        lines += ["--" + alt_boundary + "--", ""]
        return lines

    def build(self, include_bcc: bool = True) -> bytes:
        """Assembles the message into a MIME byte stream.

        Building does not modify the message and can be repeated; each call
        uses fresh boundaries.

        Args:
            include_bcc (bool): Whether to emit the "Bcc" header. `send()`
                passes False.

        Returns:
            bytes: The UTF-8 encoded message, CRLF line endings throughout.

        Raises:
            MissingSender: If no sender was set.
            InvalidAddress: If any address is malformed.
            FileUnreadable: If a file cannot be read and the missing-file
                policy is ``"raise"``.
        """
        if self.sender is None:
            raise MissingSender()

        main_boundary = generate_boundary("main", self.clock, self.rng)
        alt_boundary = generate_boundary("alt", self.clock, self.rng)

        lines = self._header_lines(main_boundary, include_bcc)
        lines += self._alternative_lines(main_boundary, alt_boundary)
        embedded_count = attachment_count = 0

        for cid, embedded in self.embedded_files.items():
            body = self._encode_file(embedded)
            if body is None:
                continue
            embedded_count += 1
            lines += [
                "--" + main_boundary,
                "Content-Type: " + embedded.content_type,
                f"Content-ID: <{sanitize_header(cid)}>",
                "Content-Disposition: inline",
                "Content-Transfer-Encoding: base64",
                "",
                *body,
                "",
            ]

        for attachment in self.attachments:
            body = self._encode_file(attachment)
            if body is None:
                continue
            attachment_count += 1
            filename = sanitize_filename(basename(attachment.path))
            lines += [
                "--" + main_boundary,
                "Content-Type: " + attachment.content_type,
                f'Content-Disposition: attachment; filename="{filename}"',
                "Content-Transfer-Encoding: base64",
                "",
                *body,
                "",
            ]

        lines.append("--" + main_boundary + "--")

        logger.debug(
            "Built message with %d embedded file(s) and %d attachment(s)",
            embedded_count, attachment_count,
        )
        return (CRLF.join(lines) + CRLF).encode("utf-8")

    def send(
        self,
        smtp_url: str,
        username: str | None = None,
        password: str | None = None,
        transport: SmtpTransport | None = None,
    ) -> bool:
        """Builds the message and delivers it over SMTP.

        To, Cc and Bcc recipients are all put on the SMTP envelope. The Bcc
        header is not included in the transmitted message.

        Args:
            smtp_url (str): SMTP endpoint, e.g. ``"smtps://smtp.gmail.com:465"``
                or ``"smtp://localhost:25"``.
            username (str, optional): SMTP login user.
            password (str, optional): SMTP login password.
            transport (SmtpTransport, optional): Pre-configured transport.
                When given, `smtp_url`, `username` and `password` are ignored.

        Returns:
            bool: True when the message was handed to the server.

        Raises:
            MissingSender: If no sender was set.
            InvalidAddress: If any address is malformed.
            FileUnreadable: If a file cannot be read under the ``"raise"`` policy.
            TransportFailure: If the SMTP delivery fails.
        """
        envelope_from = self.envelope_sender()
        envelope_to = self.envelope_recipients()
        payload = self.build(include_bcc=False)

        if transport is None:
            transport = SmtpTransport(smtp_url, username, password)

        transport.deliver(envelope_from, envelope_to, payload)
        return True
