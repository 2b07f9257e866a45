"""Queue data models."""
from dataclasses import dataclass
from datetime import datetime
from typing import Dict, Any, Optional


@dataclass(frozen=True)
class SupplierContact:
    """Supplier name and address joined from supplier_items (read-only)."""

    supplier_item_id: int
    supplier_name: str
    supplier_email: str


@dataclass
class QueueEntry:
    """One pending low-inventory notification from email_queue."""

    id: int
    supplier_id: int
    item_name: str
    quantity: int
    supplier: SupplierContact
    created_at: Optional[datetime] = None
    processed: bool = False
    processed_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]):
        """Build an entry from a joined email_queue/supplier_items row."""
        return cls(
            id=row["id"],
            supplier_id=row["supplier_id"],
            item_name=row["item_name"],
            quantity=row["quantity"],
            supplier=SupplierContact(
                supplier_item_id=row["supplier_id"],
                supplier_name=row["supplier_name"],
                supplier_email=row["supplier_email"],
            ),
            created_at=row.get("created_at"),
            processed=bool(row.get("processed", False)),
            processed_at=row.get("processed_at"),
        )
