"""
Sanitization of raw model replies.
Strips markdown code fences that models like to wrap JSON in, then parses it.
"""

import json
import math
import re
from typing import Any

from receipt_extractor.core.errors import ResponseParseError

# ``` or ```json (any language tag) at the start, ``` at the end
_LEADING_FENCE = re.compile(r"^\s*```[A-Za-z0-9_-]*[ \t]*\r?\n?")
_TRAILING_FENCE = re.compile(r"\r?\n?[ \t]*```\s*$")


def strip_code_fences(text: str) -> str:
    text = _LEADING_FENCE.sub("", text)
    text = _TRAILING_FENCE.sub("", text)
    return text.strip()


def _reject_constant(token: str) -> Any:
    raise ValueError(f"non-standard JSON constant {token}")


def _parse_finite_float(token: str) -> float:
    value = float(token)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {token}")
    return value


def parse_model_response(text: str) -> Any:
    """Return the JSON value contained in *text*.

    Parsing is strict: ``NaN``/``Infinity`` and floats that overflow to
    infinity are rejected.  Raises :class:`ResponseParseError` when nothing
    parseable remains after the fences are removed.
    """
    if not isinstance(text, str):
        raise ResponseParseError(repr(text), "model response is not text")
    cleaned = strip_code_fences(text)
    try:
        return json.loads(cleaned, parse_constant=_reject_constant, parse_float=_parse_finite_float)
    except (ValueError, RecursionError) as exc:
        # JSONDecodeError is a ValueError; so are over-long integer literals
        raise ResponseParseError(text, str(exc)) from exc
