"""Drain cycle for the low-inventory email queue."""
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Optional

from lowstock_mailer.logging_conf import logger
from lowstock_mailer.db import Database
from lowstock_mailer.mailer.factory import create_transport
from lowstock_mailer.mailer.transport import MailTransport
from lowstock_mailer.messages import build_alert
from lowstock_mailer.queue.models import QueueEntry


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CycleResult:
    """Counts for one drain cycle."""

    found: int = 0
    sent: int = 0
    send_failures: int = 0
    update_failures: int = 0


class QueueDrainWorker:
    """Sends one alert per unprocessed queue entry and marks it processed."""

    def __init__(
        self,
        transport: Optional[MailTransport] = None,
        database_factory: Callable[[], Database] = Database,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.transport = transport or create_transport()
        self.database_factory = database_factory
        self.clock = clock

    def drain_cycle(self) -> CycleResult:
        """
        Run one fetch -> send -> mark pass over every pending entry.

        Connection errors propagate to the caller; per-entry errors are
        logged and the entry is left for the next cycle.
        """
        result = CycleResult()
        db = self.database_factory()
        try:
            db.connect()
            entries = db.get_unprocessed_entries()
            result.found = len(entries)

            if not entries:
                logger.info("No new emails to process")
                return result

            logger.info(f"Found {len(entries)} emails to process")
            for entry in entries:
                self._process_entry(db, entry, result)
        finally:
            db.close()

        logger.info(
            f"Cycle done: {result.sent} sent, {result.send_failures} send failures, "
            f"{result.update_failures} update failures"
        )
        return result

    def _process_entry(self, db: Database, entry: QueueEntry, result: CycleResult) -> None:
        try:
            message = build_alert(entry)
            self.transport.send(message)
        except Exception as e:
            result.send_failures += 1
            logger.error(f"Error processing email {entry.id}: {e}")
            return

        try:
            db.mark_processed(entry.id, self.clock())
        except Exception as e:
            result.update_failures += 1
            logger.error(f"Email {entry.id} sent to {entry.supplier.supplier_email} but not marked processed: {e}")
            return

        result.sent += 1
        logger.info(f"Successfully sent email to {entry.supplier.supplier_email} for {entry.item_name}")
