import pytest

from receipt_extractor.models.schemas import Receipt, ReceiptItem
from receipt_extractor.services.receipt_repository import InMemoryReceiptRepository


def _receipt(receipt_id: str, **overrides) -> Receipt:
    data = dict(
        id=receipt_id,
        date="2024-01-15",
        currency="USD",
        vendor_name="Test Store",
        receipt_items=[ReceiptItem(item_name="Coffee", item_cost=4.5)],
        tax=1.35,
        total=14.84,
        image_url=f"/uploads/{receipt_id}_r.jpg",
    )
    data.update(overrides)
    return Receipt(**data)


def test_get_returns_inserted_receipt(repository):
    receipt = _receipt("r1")
    repository.insert(receipt)
    fetched = repository.get("r1")
    assert fetched == receipt
    assert fetched.model_dump() == receipt.model_dump()


def test_get_unknown_id_returns_none(repository):
    assert repository.get("missing") is None


def test_list_all_preserves_insertion_order(repository):
    for rid in ("b", "a", "c"):
        repository.insert(_receipt(rid))
    assert [r.id for r in repository.list_all()] == ["b", "a", "c"]


def test_records_are_write_once():
    repository = InMemoryReceiptRepository()
    repository.insert(_receipt("r1"))
    with pytest.raises(ValueError):
        repository.insert(_receipt("r1", vendor_name="Other"))
    assert repository.get("r1").vendor_name == "Test Store"


def test_stored_receipts_are_immutable(repository):
    repository.insert(_receipt("r1"))
    with pytest.raises(Exception):
        repository.get("r1").total = 0.0


def test_list_all_on_empty_repository(repository):
    assert repository.list_all() == []
