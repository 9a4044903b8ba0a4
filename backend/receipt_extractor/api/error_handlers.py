"""
Custom exception handlers for FastAPI.
Maps pipeline errors to stable status codes and messages.
"""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError

from receipt_extractor.core.errors import ReceiptProcessingError
from receipt_extractor.core.observability import sentry_capture

logger = logging.getLogger(__name__)


def receipt_processing_exception_handler(request: Request, exc: ReceiptProcessingError):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": exc.kind.value,
            "detail": exc.message,
        },
    )


def validation_exception_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={
            "error": "Validation error",
            "details": exc.errors(),
            "body": exc.body,
        },
    )


def generic_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    sentry_capture(exc)
    return JSONResponse(
        status_code=500,
        content={
            "error": "Internal server error",
            "detail": "Internal server error",
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ReceiptProcessingError, receipt_processing_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
