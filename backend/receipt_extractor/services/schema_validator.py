"""Strict shape validation of the AI model's parsed reply.

The model output is untrusted.  Before anything is persisted every
field must be present with the right type; a single violation rejects
the whole record.  Nothing is defaulted or coerced, so a string
``"4.50"`` for a price is rejected rather than silently converted.

Cross-field arithmetic (items + tax == total) is deliberately not
checked here.
"""

from __future__ import annotations

import math
from typing import Any, Mapping

from receipt_extractor.models.schemas import ExtractedReceipt, ValidationResult

CURRENCY_CODE_LENGTH = 3


def _is_number(value: Any) -> bool:
    # bool is an int subclass but never a monetary amount
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        # amounts are stored as floats, so they must fit one
        return math.isfinite(float(value))
    except OverflowError:
        return False


def _check_item(index: int, item: Any) -> str | None:
    if not isinstance(item, Mapping):
        return f"receipt_items[{index}] is not an object"
    if not isinstance(item.get("item_name"), str):
        return f"receipt_items[{index}].item_name must be a string"
    if not _is_number(item.get("item_cost")):
        return f"receipt_items[{index}].item_cost must be a number"
    return None


def _first_violation(data: Any) -> str | None:
    if not isinstance(data, Mapping):
        return "response is not a JSON object"
    if not isinstance(data.get("date"), str):
        return "date must be a string"
    currency = data.get("currency")
    if not isinstance(currency, str):
        return "currency must be a string"
    if len(currency) != CURRENCY_CODE_LENGTH:
        return f"currency must be exactly {CURRENCY_CODE_LENGTH} characters, got {currency!r}"
    if not isinstance(data.get("vendor_name"), str):
        return "vendor_name must be a string"
    items = data.get("receipt_items")
    if not isinstance(items, list):
        return "receipt_items must be an array"
    for index, item in enumerate(items):
        problem = _check_item(index, item)
        if problem:
            return problem
    if not _is_number(data.get("tax")):
        return "tax must be a number"
    if not _is_number(data.get("total")):
        return "total must be a number"
    return None


def validate_extracted_receipt(data: Any) -> ValidationResult:
    """Validate a parsed model reply and narrow it to :class:`ExtractedReceipt`."""
    problem = _first_violation(data)
    if problem is not None:
        return ValidationResult.failure(problem)
    return ValidationResult.success(ExtractedReceipt.model_validate(data))


def is_valid_extracted_receipt(data: Any) -> bool:
    return validate_extracted_receipt(data).ok
