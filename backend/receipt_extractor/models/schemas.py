"""Pydantic schemas for the receipt extraction domain.

Pydantic models are used for validating and serialising data that
crosses the boundary of the API.  ``ExtractedReceipt`` mirrors the
JSON object the AI model is asked to produce; it is only built after
``receipt_extractor.services.schema_validator`` has accepted the raw
value.  ``Receipt`` is the trusted record that is stored in the
repository and returned to clients unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field


# ---------------------------------------------------------------------------
# Inbound


@dataclass
class RawUpload:
    """An uploaded file as handed over by the HTTP layer."""

    content: bytes
    content_type: str
    filename: str


# ---------------------------------------------------------------------------
# Domain schemas


class ReceiptItem(BaseModel):
    """Individual line item on a receipt."""

    item_name: str
    item_cost: float


class ExtractedReceipt(BaseModel):
    """Structured receipt details as returned by the AI model."""

    date: str = Field(description="Purchase date, expected in YYYY-MM-DD format")
    currency: str = Field(min_length=3, max_length=3, description="3-character currency code")
    vendor_name: str
    receipt_items: List[ReceiptItem] = Field(default_factory=list)
    tax: float
    total: float


class Receipt(BaseModel):
    """Persisted receipt record, also the response of the extract endpoint."""

    model_config = ConfigDict(frozen=True)

    id: str
    date: str
    currency: str
    vendor_name: str
    receipt_items: List[ReceiptItem] = Field(default_factory=list)
    tax: float
    total: float
    image_url: str

    @classmethod
    def from_extracted(cls, receipt_id: str, extracted: ExtractedReceipt, image_url: str) -> "Receipt":
        return cls(id=receipt_id, image_url=image_url, **extracted.model_dump())


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating an untrusted model reply.

    Either ``ok`` is true and ``value`` holds the typed receipt, or
    ``ok`` is false and ``reason`` names the first failed check.
    """

    ok: bool
    value: Optional[ExtractedReceipt] = None
    reason: Optional[str] = None

    @classmethod
    def success(cls, value: ExtractedReceipt) -> "ValidationResult":
        return cls(ok=True, value=value)

    @classmethod
    def failure(cls, reason: str) -> "ValidationResult":
        return cls(ok=False, reason=reason)


# ---------------------------------------------------------------------------
# API response schemas


class SampleReceiptsList(BaseModel):
    message: str
    files: List[str] = Field(default_factory=list)
    usage: Optional[str] = None


class SampleProcessingResult(BaseModel):
    message: str
    result: Optional[Receipt] = None
    error: Optional[str] = None


class ReceiptCollection(BaseModel):
    message: str
    receipts: List[Receipt]
