"""Developer routes for exercising the pipeline with bundled sample images.

GET  /test/sample-receipts            - list sample images on disk
POST /test/process-sample/{filename}  - run extraction on one of them
GET  /test/receipts                   - list all processed receipts
GET  /test/receipts/{id}              - get one receipt
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException

from receipt_extractor.api.dependencies import get_extraction_service, get_sample_receipts_dir
from receipt_extractor.core.errors import ReceiptProcessingError
from receipt_extractor.models.schemas import (
    RawUpload,
    Receipt,
    ReceiptCollection,
    SampleProcessingResult,
    SampleReceiptsList,
)
from receipt_extractor.services.extraction_service import ExtractionService
from receipt_extractor.utils.file_validation import mime_type_for_filename

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/test", tags=["samples"])

_IMAGE_NAME = re.compile(r"\.(jpg|jpeg|png|webp)$", re.IGNORECASE)


@router.get("/sample-receipts", response_model=SampleReceiptsList, response_model_exclude_none=True)
def list_sample_receipts(sample_dir: Path = Depends(get_sample_receipts_dir)):
    if not sample_dir.is_dir():
        return SampleReceiptsList(message="Sample receipts directory not found", files=[])
    files = sorted(p.name for p in sample_dir.iterdir() if p.is_file() and _IMAGE_NAME.search(p.name))
    return SampleReceiptsList(
        message="Available sample receipt files",
        files=files,
        usage="POST /test/process-sample/:filename to process a sample receipt",
    )


@router.post("/process-sample/{filename}", response_model=SampleProcessingResult, response_model_exclude_none=True)
async def process_sample_receipt(
    filename: str,
    sample_dir: Path = Depends(get_sample_receipts_dir),
    service: ExtractionService = Depends(get_extraction_service),
):
    file_path = sample_dir / Path(filename).name
    if not file_path.is_file():
        raise HTTPException(status_code=400, detail=f"Sample receipt '{filename}' not found")

    content_type = mime_type_for_filename(filename)
    if content_type is None:
        raise HTTPException(status_code=400, detail="Unsupported file type")

    upload = RawUpload(content=file_path.read_bytes(), content_type=content_type, filename=file_path.name)
    try:
        receipt = await service.extract(upload)
    except ReceiptProcessingError as exc:
        logger.warning("Sample %s failed: %s", filename, exc.message)
        return SampleProcessingResult(message=f"Failed to process sample receipt: {filename}", error=exc.message)
    return SampleProcessingResult(message=f"Successfully processed sample receipt: {filename}", result=receipt)


@router.get("/receipts", response_model=ReceiptCollection)
def list_processed_receipts(service: ExtractionService = Depends(get_extraction_service)):
    return ReceiptCollection(message="All processed receipts", receipts=service.list_receipts())


@router.get("/receipts/{receipt_id}", response_model=Receipt)
def get_processed_receipt(receipt_id: str, service: ExtractionService = Depends(get_extraction_service)):
    receipt = service.get_receipt(receipt_id)
    if receipt is None:
        raise HTTPException(status_code=404, detail=f"Receipt with ID '{receipt_id}' not found")
    return receipt
