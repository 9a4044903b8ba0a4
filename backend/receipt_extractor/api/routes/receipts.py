"""API routes for receipt extraction and retrieval."""

from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from receipt_extractor.api.dependencies import get_extraction_service
from receipt_extractor.core.config import settings
from receipt_extractor.core.errors import NoFileUploadedError
from receipt_extractor.models.schemas import RawUpload, Receipt
from receipt_extractor.services.extraction_service import ExtractionService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/receipt", tags=["receipts"])


@router.post("/extract-receipt-details", response_model=Receipt, status_code=status.HTTP_200_OK)
async def extract_receipt_details(
    file: Optional[UploadFile] = File(None),
    service: ExtractionService = Depends(get_extraction_service),
) -> Receipt:
    """Upload a receipt image and return the extracted details."""
    if file is None:
        raise NoFileUploadedError()

    contents = await file.read()
    if len(contents) > settings.MAX_UPLOAD_SIZE:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File too large. Maximum size is {settings.MAX_UPLOAD_SIZE // (1024 * 1024)}MB",
        )

    logger.info("Extract: filename=%s content_type=%s size=%d", file.filename, file.content_type, len(contents))
    upload = RawUpload(
        content=contents,
        content_type=file.content_type or "",
        filename=file.filename or "receipt",
    )
    return await service.extract(upload)


@router.get("", response_model=List[Receipt])
async def list_receipts(service: ExtractionService = Depends(get_extraction_service)) -> List[Receipt]:
    return service.list_receipts()


@router.get("/{receipt_id}", response_model=Receipt)
async def get_receipt(receipt_id: str, service: ExtractionService = Depends(get_extraction_service)) -> Receipt:
    receipt = service.get_receipt(receipt_id)
    if receipt is None:
        logger.warning("Receipt not found: %s", receipt_id)
        raise HTTPException(status_code=404, detail=f"Receipt with ID '{receipt_id}' not found")
    return receipt
