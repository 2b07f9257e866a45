"""Low-inventory alert rendering."""
from html import escape
from typing import Optional

from lowstock_mailer import settings
from lowstock_mailer.mailer.transport import MailMessage
from lowstock_mailer.queue.models import QueueEntry

SUBJECT_TEMPLATE = "Low Inventory Alert - {item_name}"

BODY_TEMPLATE = """
<h2>Low Inventory Alert</h2>
<p>Dear {supplier_name},</p>
<p>This is an automated alert that inventory is low for:</p>
<ul>
  <li><strong>Item:</strong> {item_name}</li>
  <li><strong>Current Quantity:</strong> {quantity}</li>
</ul>
<p>Please arrange for replenishment of this item.</p>
<br>
<p>Best regards,<br>{team_name} Team</p>
"""


def render_subject(entry: QueueEntry) -> str:
    return SUBJECT_TEMPLATE.format(item_name=entry.item_name)


def render_body(entry: QueueEntry, team_name: str) -> str:
    return BODY_TEMPLATE.format(
        supplier_name=escape(entry.supplier.supplier_name),
        item_name=escape(entry.item_name),
        quantity=escape(str(entry.quantity)),
        team_name=escape(team_name),
    )


def build_alert(entry: QueueEntry, from_name: Optional[str] = None, from_address: Optional[str] = None) -> MailMessage:
    """Build the alert email for one queue entry, addressed to its supplier."""
    from_name = from_name or settings.MAIL_FROM_NAME
    return MailMessage(
        from_name=from_name,
        from_address=from_address or settings.MAIL_FROM_ADDRESS or "",
        to_address=entry.supplier.supplier_email,
        subject=render_subject(entry),
        html=render_body(entry, team_name=from_name),
    )
