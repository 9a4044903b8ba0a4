"""Receipt extraction service.

This service runs the end-to-end extraction of a single uploaded
receipt image:

1. Check the declared media type against the allow-list.
2. Store the raw image under a freshly generated receipt id.
3. Build the extraction prompt and send it with the base64 image to
   the AI gateway.
4. Strip code fences from the reply and parse it as JSON.
5. Validate the parsed value against the receipt schema.
6. Persist the resulting ``Receipt`` in the repository and return it.

The image is stored before the model is called so the upload survives
an AI failure.  There are no retries; the first failure ends the
request.  Every failure is re-raised as exactly one of the errors in
``receipt_extractor.core.errors`` so the API can answer with a stable
message, while the log keeps the underlying detail.
"""

from __future__ import annotations

import base64
import logging
import uuid
from typing import List, Optional

from receipt_extractor.core.errors import (
    IncompleteDataError,
    InvalidResponseFormatError,
    NoFileUploadedError,
    ProcessingFailedError,
    ReceiptProcessingError,
    ResponseParseError,
)
from receipt_extractor.core.observability import sentry_breadcrumb, sentry_capture
from receipt_extractor.models.enums import ExtractionStage
from receipt_extractor.models.schemas import RawUpload, Receipt
from receipt_extractor.services.ai_gateway import AIGateway
from receipt_extractor.services.receipt_repository import ReceiptRepository
from receipt_extractor.services.schema_validator import validate_extracted_receipt
from receipt_extractor.services.storage_service import ImageStore
from receipt_extractor.utils.file_validation import ensure_supported_media_type
from receipt_extractor.utils.prompts import get_default_extraction_prompt
from receipt_extractor.utils.sanitization import parse_model_response


logger = logging.getLogger(__name__)


class ExtractionService:
    """Turns uploaded receipt images into validated ``Receipt`` records."""

    def __init__(self, gateway: AIGateway, store: ImageStore, repository: ReceiptRepository) -> None:
        self.gateway = gateway
        self.store = store
        self.repository = repository

    @staticmethod
    def _enter(stage: ExtractionStage, receipt_id: str | None = None) -> ExtractionStage:
        logger.info("[extraction] stage=%s receipt_id=%s", stage.value, receipt_id)
        sentry_breadcrumb(category="extraction", message=stage.value, data={"receipt_id": receipt_id})
        return stage

    @staticmethod
    def _image_to_base64(data: bytes) -> str:
        """Encode raw image bytes as a base64 string."""
        return base64.b64encode(data).decode("utf-8")

    async def extract(self, upload: Optional[RawUpload]) -> Receipt:
        """Run the full pipeline for one upload and return the stored receipt.

        Raises a :class:`ReceiptProcessingError` subclass on any failure.
        """
        if upload is None:
            raise NoFileUploadedError()

        self._enter(ExtractionStage.VALIDATING)
        ensure_supported_media_type(upload.content_type)

        receipt_id = str(uuid.uuid4())
        stage = ExtractionStage.STORING
        try:
            stage = self._enter(ExtractionStage.STORING, receipt_id)
            image_url = await self.store.save(upload.content, upload.filename, receipt_id)

            stage = self._enter(ExtractionStage.PROMPTING, receipt_id)
            prompt = get_default_extraction_prompt()
            image_base64 = self._image_to_base64(upload.content)

            stage = self._enter(ExtractionStage.INFERRING, receipt_id)
            raw_text = await self.gateway.infer(prompt, image_base64, upload.content_type)

            stage = self._enter(ExtractionStage.SANITIZING, receipt_id)
            try:
                data = parse_model_response(raw_text)
            except ResponseParseError as exc:
                logger.error("[extraction] failed to parse model response receipt_id=%s text=%r", receipt_id, raw_text)
                raise InvalidResponseFormatError() from exc

            stage = self._enter(ExtractionStage.VALIDATING_SCHEMA, receipt_id)
            result = validate_extracted_receipt(data)
            if not result.ok or result.value is None:
                logger.warning("[extraction] model data rejected receipt_id=%s reason=%s", receipt_id, result.reason)
                raise IncompleteDataError()

            stage = self._enter(ExtractionStage.PERSISTING, receipt_id)
            receipt = Receipt.from_extracted(receipt_id, result.value, image_url)
            self.repository.insert(receipt)
        except ReceiptProcessingError:
            raise
        except Exception as exc:
            logger.exception("[extraction] error processing receipt receipt_id=%s stage=%s", receipt_id, stage.value)
            sentry_capture(exc)
            raise ProcessingFailedError() from exc

        self._enter(ExtractionStage.DONE, receipt_id)
        return receipt

    def get_receipt(self, receipt_id: str) -> Optional[Receipt]:
        return self.repository.get(receipt_id)

    def list_receipts(self) -> List[Receipt]:
        return self.repository.list_all()
