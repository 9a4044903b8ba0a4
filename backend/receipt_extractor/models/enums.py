"""Enumeration types used throughout the receipt extraction API.

Enumerations make it easier to constrain the values passed through
the API and improve readability when dealing with domain concepts
like pipeline stages or error kinds.
"""

from enum import Enum


class ExtractionStage(str, Enum):
    """Steps of a single extraction, in execution order."""

    VALIDATING = "validating"
    STORING = "storing"
    PROMPTING = "prompting"
    INFERRING = "inferring"
    SANITIZING = "sanitizing"
    VALIDATING_SCHEMA = "validating_schema"
    PERSISTING = "persisting"
    DONE = "done"


class FaultKind(str, Enum):
    """Externally visible failure classes of an extraction."""

    CLIENT = "bad_request"
    AI_FORMAT = "ai_invalid_format"
    AI_CONTENT = "ai_invalid_content"
    SERVER = "processing_failed"
