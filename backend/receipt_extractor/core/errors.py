"""Error taxonomy for the extraction pipeline.

Every failure that leaves ``ExtractionService.extract`` is one of the
subclasses of :class:`ReceiptProcessingError` defined here.  Each one
carries the HTTP status code and the fixed, human readable message that
the API returns.  Lower level exceptions (parse failures, disk errors,
SDK errors) never reach the caller directly.
"""

from __future__ import annotations

from receipt_extractor.models.enums import FaultKind


class ReceiptProcessingError(Exception):
    """Base class for the externally visible pipeline failures."""

    status_code: int = 500
    kind: FaultKind = FaultKind.SERVER
    message: str = "Failed to process receipt image"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class ClientFaultError(ReceiptProcessingError):
    status_code = 400
    kind = FaultKind.CLIENT
    message = "Bad request"


class NoFileUploadedError(ClientFaultError):
    message = "No file uploaded"


class UnsupportedMediaTypeError(ClientFaultError):
    message = "Only .jpg, .jpeg, .png, and .webp files are allowed"


class InvalidResponseFormatError(ReceiptProcessingError):
    """The model's reply could not be parsed as JSON at all."""

    kind = FaultKind.AI_FORMAT
    message = "AI model returned invalid response format"


class IncompleteDataError(ReceiptProcessingError):
    """The model's reply parsed but failed schema validation."""

    kind = FaultKind.AI_CONTENT
    message = "AI model returned incomplete or invalid data"


class ProcessingFailedError(ReceiptProcessingError):
    kind = FaultKind.SERVER
    message = "Failed to process receipt image"


class ResponseParseError(ValueError):
    """Raised by the sanitizer when model text is not valid JSON."""

    def __init__(self, raw_text: str, reason: str) -> None:
        self.raw_text = raw_text
        self.reason = reason
        super().__init__(f"Could not parse model response: {reason}")


class GatewayConfigurationError(RuntimeError):
    """The AI gateway cannot be built (e.g. missing API key)."""


__all__ = [
    "FaultKind",
    "ReceiptProcessingError",
    "ClientFaultError",
    "NoFileUploadedError",
    "UnsupportedMediaTypeError",
    "InvalidResponseFormatError",
    "IncompleteDataError",
    "ProcessingFailedError",
    "ResponseParseError",
    "GatewayConfigurationError",
]
