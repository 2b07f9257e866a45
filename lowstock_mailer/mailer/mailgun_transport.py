"""Mailgun HTTP API mail transport.

POST /messages is not idempotent, so a request is only repeated when Mailgun
cannot have accepted it: a connect timeout or a 429. Anything else (read
timeouts, dropped connections, 5xx) raises MailTransportError and the entry
is retried on the next drain cycle.
"""
import time
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Optional, Dict, Any
import requests

from lowstock_mailer import settings
from lowstock_mailer.logging_conf import logger
from lowstock_mailer.mailer.transport import MailMessage, MailTransport, MailTransportError

MAX_RETRIES = 3
CONNECT_RETRY_DELAY = 1  # seconds, fixed
DEFAULT_RETRY_AFTER = 60
MAX_RETRY_AFTER = 60


def parse_retry_after(value: Optional[str]) -> int:
    """Seconds to wait for a Retry-After header in delta-seconds or HTTP-date form."""
    if not value:
        return DEFAULT_RETRY_AFTER
    try:
        seconds = int(value)
    except ValueError:
        try:
            when = parsedate_to_datetime(value)
        except (TypeError, ValueError):
            return DEFAULT_RETRY_AFTER
        if when.tzinfo is None:
            when = when.replace(tzinfo=timezone.utc)
        seconds = int((when - datetime.now(timezone.utc)).total_seconds())
    return min(max(seconds, 0), MAX_RETRY_AFTER)


class MailgunTransport(MailTransport):
    """Sends messages through the Mailgun messages endpoint."""

    name = "mailgun"

    def __init__(
        self,
        api_key: Optional[str] = None,
        domain: Optional[str] = None,
        base_url: Optional[str] = None,
        session: Optional[requests.Session] = None,
    ):
        self.api_key = api_key or settings.MAILGUN_API_KEY
        self.domain = domain or settings.MAILGUN_DOMAIN
        if not self.api_key or not self.domain:
            raise ValueError("MAILGUN_API_KEY and MAILGUN_DOMAIN must be set")
        self.base_url = base_url or settings.MAILGUN_BASE_URL or f"https://api.mailgun.net/v3/{self.domain}"
        self.session = session or requests.Session()
        self.session.auth = ("api", self.api_key)

    def send(self, message: MailMessage) -> None:
        data = {
            "from": message.sender,
            "to": [message.to_address],
            "subject": message.subject,
            "html": message.html,
        }
        response = self._post("/messages", data)
        logger.debug(f"Mailgun accepted message for {message.to_address}: {response.get('id')}")

    def _post(self, endpoint: str, data: Dict[str, Any], retry_count: int = 0) -> Dict[str, Any]:
        """POST, repeating only requests that never reached Mailgun."""
        url = f"{self.base_url}{endpoint}"

        try:
            response = self.session.post(url, data=data, timeout=30)

            if response.status_code == 429 and retry_count < MAX_RETRIES:
                retry_after = parse_retry_after(response.headers.get("Retry-After"))
                logger.warning(f"Rate limited. Waiting {retry_after}s...")
                time.sleep(retry_after)
                return self._post(endpoint, data, retry_count + 1)

            response.raise_for_status()
            return response.json()

        except requests.exceptions.ConnectTimeout as e:
            if retry_count < MAX_RETRIES:
                logger.warning(f"Connect timeout to Mailgun. Retrying in {CONNECT_RETRY_DELAY}s...")
                time.sleep(CONNECT_RETRY_DELAY)
                return self._post(endpoint, data, retry_count + 1)
            raise MailTransportError(f"Mailgun request failed: {e}") from e
        except requests.exceptions.RequestException as e:
            raise MailTransportError(f"Mailgun request failed: {e}") from e
