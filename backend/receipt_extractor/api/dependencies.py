"""Common dependencies for FastAPI routes.

The extraction service and its collaborators are built once in the
application lifespan and stored on ``app.state``.  Routes reach them
through the helpers below so tests can install their own instances
(fake gateway, temporary upload directory, fresh repository) without
touching module globals.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import HTTPException, Request, status

from receipt_extractor.core.config import settings
from receipt_extractor.services.extraction_service import ExtractionService


def get_extraction_service(request: Request) -> ExtractionService:
    """Return the extraction service installed on the application."""
    service = getattr(request.app.state, "extraction_service", None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Extraction service not initialised",
        )
    return service


def get_sample_receipts_dir() -> Path:
    """Directory holding the bundled sample receipt images."""
    return Path(settings.SAMPLE_RECEIPTS_DIR)
