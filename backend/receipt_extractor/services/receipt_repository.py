"""Receipt repository.

Receipts are write-once: there is an insert, a lookup by id and a
listing, but no update or delete.  ``InMemoryReceiptRepository`` keeps
records in a process-local dict, so everything is lost on restart.  A
durable store only needs to implement the ``ReceiptRepository``
protocol to replace it.
"""

from __future__ import annotations

from typing import List, Optional, Protocol

from receipt_extractor.models.schemas import Receipt


class ReceiptRepository(Protocol):
    def insert(self, receipt: Receipt) -> None: ...

    def get(self, receipt_id: str) -> Optional[Receipt]: ...

    def list_all(self) -> List[Receipt]: ...


class InMemoryReceiptRepository:
    """Dict backed repository, preserves insertion order."""

    def __init__(self) -> None:
        self._receipts: dict[str, Receipt] = {}

    def insert(self, receipt: Receipt) -> None:
        """Store a new receipt. Ids are unique, so re-inserting one is an error."""
        if receipt.id in self._receipts:
            raise ValueError(f"Receipt {receipt.id} already exists")
        self._receipts[receipt.id] = receipt

    def get(self, receipt_id: str) -> Optional[Receipt]:
        return self._receipts.get(receipt_id)

    def list_all(self) -> List[Receipt]:
        return list(self._receipts.values())

