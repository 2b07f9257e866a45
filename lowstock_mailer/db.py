"""Database operations for the low-inventory email queue."""
import psycopg2
from psycopg2.extras import RealDictCursor
from datetime import datetime
from typing import List, Optional
from contextlib import contextmanager

from lowstock_mailer import settings
from lowstock_mailer.logging_conf import logger
from lowstock_mailer.queue.models import QueueEntry


class Database:
    """Connection and queries for email_queue, scoped to one drain cycle."""

    def __init__(self, dsn: Optional[str] = None):
        self.dsn = dsn or settings.DATABASE_URL
        self._conn = None

    def __enter__(self):
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False

    @property
    def conn(self):
        """Get or create database connection."""
        if self._conn is None or self._conn.closed:
            self._conn = psycopg2.connect(self.dsn)
        return self._conn

    def connect(self):
        """Open the connection now so unreachable stores fail before any work."""
        return self.conn

    def close(self):
        """Close database connection."""
        if self._conn and not self._conn.closed:
            self._conn.close()
        self._conn = None

    @contextmanager
    def cursor(self):
        """Context manager for cursor with auto-commit/rollback."""
        cur = self.conn.cursor(cursor_factory=RealDictCursor)
        try:
            yield cur
            self.conn.commit()
        except Exception:
            self.conn.rollback()
            raise
        finally:
            cur.close()

    def get_unprocessed_entries(self) -> List[QueueEntry]:
        """Fetch every unprocessed entry with its supplier contact, oldest first."""
        with self.cursor() as cur:
            cur.execute("""
                SELECT
                    eq.id,
                    eq.supplier_id,
                    eq.item_name,
                    eq.quantity,
                    eq.processed,
                    eq.processed_at,
                    eq.created_at,
                    si.supplier_name,
                    si.supplier_email
                FROM email_queue eq
                JOIN supplier_items si ON eq.supplier_id = si.supplier_item_id
                WHERE eq.processed = FALSE
                ORDER BY eq.created_at ASC, eq.id ASC
            """)
            rows = cur.fetchall()
        return [QueueEntry.from_row(row) for row in rows]

    def mark_processed(self, entry_id: int, processed_at: datetime) -> bool:
        """Flip processed to true for one entry. Returns False if no unprocessed row matched."""
        with self.cursor() as cur:
            cur.execute("""
                UPDATE email_queue
                SET processed = TRUE,
                    processed_at = %s
                WHERE id = %s AND processed = FALSE
            """, (processed_at, entry_id))
            updated = cur.rowcount == 1
        if not updated:
            logger.warning(f"Entry {entry_id} was already processed or no longer exists")
        return updated
