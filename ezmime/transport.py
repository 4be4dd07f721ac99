"""SMTP transport used by `EzMessage.send()`.

The transport takes an already assembled payload plus envelope addresses
and hands them to an SMTP server with `smtplib`. It does not retry and
keeps no connection between calls.
"""

import ssl
from smtplib import SMTP, SMTP_SSL, SMTPException
from typing import Sequence, Union

from .errors import TransportFailure
from .logger import get_logger
from .utils import validate_smtp_url

logger = get_logger(__name__)


class SmtpTransport:
    """Delivers MIME payloads over SMTP.

    The URL scheme picks the connection type: ``smtps://`` opens an
    implicit TLS connection (default port 465), ``smtp://`` opens a plain
    connection (default port 25) and upgrades with STARTTLS when the server
    offers it.

    Example:
        transport = SmtpTransport("smtps://smtp.domain.com:465", "me@domain.com", "secret")
        transport.deliver("<me@domain.com>", ["<you@domain.com>"], payload)
    """

    def __init__(self, url: str, username: str | None = None, password: str | None = None, timeout: float = 30):
        """Initializes the transport.

        Args:
            url (str): SMTP endpoint, e.g. ``"smtp://localhost:25"``.
            username (str, optional): Login user. Authentication is only
                attempted when both username and password are set.
            password (str, optional): Login password.
            timeout (float): Socket timeout in seconds.

        Raises:
            ValueError: If the URL is invalid.
        """
        self.scheme, self.host, self.port = validate_smtp_url(url)
        self.username = username
        self.password = password
        self.timeout = timeout

    @property
    def implicit_tls(self) -> bool:
        return self.scheme == "smtps"

    def _connect(self, context: ssl.SSLContext) -> Union[SMTP, SMTP_SSL]:
        if self.implicit_tls:
            return SMTP_SSL(self.host, self.port, timeout=self.timeout, context=context)
        return SMTP(self.host, self.port, timeout=self.timeout)

    def _handshake(self, smtp: Union[SMTP, SMTP_SSL], context: ssl.SSLContext) -> None:
        # Runs inside the connection context so a failure here still closes the socket.
        if not self.implicit_tls:
            smtp.ehlo()
            if smtp.has_extn("starttls"):
                smtp.starttls(context=context)
                smtp.ehlo()

        if self.username and self.password:
            smtp.login(self.username, self.password)

    def deliver(self, envelope_from: str, envelope_to: Sequence[str], payload: bytes) -> None:
        """Sends `payload` to the envelope recipients.

        Args:
            envelope_from (str): Envelope sender, e.g. ``"<me@domain.com>"``.
            envelope_to (Sequence[str]): Envelope recipients.
            payload (bytes): The complete MIME message.

        Raises:
            TransportFailure: If connecting, authenticating or sending fails,
                or if every recipient is refused.
        """
        logger.debug("Connecting to %s://%s:%s", self.scheme, self.host, self.port)
        context = ssl.create_default_context()
        try:
            with self._connect(context) as smtp:
                self._handshake(smtp, context)
                refused = smtp.sendmail(envelope_from, list(envelope_to), payload)
        except (SMTPException, OSError) as e:
            raise TransportFailure(f"Failed to deliver message via {self.host}:{self.port}: {e}") from e

        for address, (code, reason) in refused.items():
            logger.warning("Recipient %s refused (%s): %r", address, code, reason)

        logger.info("Message delivered to %d recipient(s) via %s", len(envelope_to) - len(refused), self.host)
