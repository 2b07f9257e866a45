"""Mail transport interface shared by the SMTP and Mailgun implementations."""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from email.headerregistry import Address
from email.message import EmailMessage


class MailTransportError(RuntimeError):
    """Raised when a transport cannot deliver a message."""


@dataclass(frozen=True)
class MailMessage:
    """A single outgoing HTML email."""

    from_name: str
    from_address: str
    to_address: str
    subject: str
    html: str

    @property
    def sender(self) -> str:
        """From header value, e.g. '"Museum Gift Shop" <shop@example.com>'."""
        return f'"{self.from_name}" <{self.from_address}>'

    def to_email_message(self) -> EmailMessage:
        msg = EmailMessage()
        msg["Subject"] = self.subject
        msg["From"] = Address(display_name=self.from_name, addr_spec=self.from_address)
        msg["To"] = self.to_address
        msg.set_content(self.html, subtype="html")
        return msg


class MailTransport(ABC):
    """Delivers a MailMessage or raises MailTransportError."""

    name = "abstract"

    @abstractmethod
    def send(self, message: MailMessage) -> None:
        raise NotImplementedError
