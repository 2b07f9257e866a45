"""Select the configured mail transport."""
from typing import Optional

from lowstock_mailer import settings
from lowstock_mailer.mailer.transport import MailTransport


def create_transport(name: Optional[str] = None) -> MailTransport:
    name = (name or settings.MAIL_TRANSPORT).lower()
    if name == "smtp":
        from lowstock_mailer.mailer.smtp_transport import SMTPTransport
        return SMTPTransport()
    if name == "mailgun":
        from lowstock_mailer.mailer.mailgun_transport import MailgunTransport
        return MailgunTransport()
    raise ValueError(f"Unknown mail transport: {name}")
