"""SMTP mail transport.

Connects once per message, upgrades with STARTTLS unless ``use_ssl`` is set
(in which case the connection is SMTP over SSL, usually port 465), logs in
when credentials are configured and hands the message to the server.
"""
import smtplib
from typing import Optional

from lowstock_mailer import settings
from lowstock_mailer.logging_conf import logger
from lowstock_mailer.mailer.transport import MailMessage, MailTransport, MailTransportError


class SMTPTransport(MailTransport):
    """Sends messages through an SMTP server."""

    name = "smtp"

    def __init__(
        self,
        host: Optional[str] = None,
        port: Optional[int] = None,
        username: Optional[str] = None,
        password: Optional[str] = None,
        use_ssl: Optional[bool] = None,
        timeout: Optional[int] = None,
    ):
        self.host = host or settings.SMTP_HOST
        self.port = port or settings.SMTP_PORT
        self.username = username if username is not None else settings.SMTP_USERNAME
        self.password = password if password is not None else settings.SMTP_PASSWORD
        self.use_ssl = settings.SMTP_USE_SSL if use_ssl is None else use_ssl
        self.timeout = timeout or settings.SMTP_TIMEOUT

    def _connect(self) -> smtplib.SMTP:
        if self.use_ssl:
            return smtplib.SMTP_SSL(self.host, self.port, timeout=self.timeout)
        return smtplib.SMTP(self.host, self.port, timeout=self.timeout)

    def send(self, message: MailMessage) -> None:
        try:
            with self._connect() as smtp:
                smtp.ehlo()
                if not self.use_ssl:
                    smtp.starttls()
                    smtp.ehlo()
                if self.username and self.password:
                    smtp.login(self.username, self.password)
                smtp.send_message(message.to_email_message())
        except (smtplib.SMTPException, OSError) as exc:
            raise MailTransportError(
                f"Failed to send email via SMTP server at {self.host}:{self.port}: {exc}"
            ) from exc
        logger.debug(f"SMTP accepted message for {message.to_address}")
