"""Entry point for the FastAPI application.

This module constructs the FastAPI app, includes all routers and
wires the extraction pipeline during startup.  When run with uvicorn
it loads configuration from ``receipt_extractor.core.config``; a
missing ``OPENAI_API_KEY`` aborts startup.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from receipt_extractor.api.error_handlers import register_exception_handlers
from receipt_extractor.api.routes.receipts import router as receipts_router
from receipt_extractor.api.routes.samples import router as samples_router
from receipt_extractor.core.config import settings
from receipt_extractor.core.observability import configure_logging, init_sentry
from receipt_extractor.services.ai_gateway import create_ai_gateway
from receipt_extractor.services.extraction_service import ExtractionService
from receipt_extractor.services.receipt_repository import InMemoryReceiptRepository
from receipt_extractor.services.storage_service import ImageStore

# Configure logging
configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    # Startup
    logger.info("Starting up...")
    if init_sentry("api"):
        logger.info("Sentry SDK initialized (api)")
    # Raises GatewayConfigurationError without an API key, which stops the server
    gateway = create_ai_gateway(settings)
    app.state.extraction_service = ExtractionService(
        gateway=gateway,
        store=ImageStore(settings.UPLOAD_DIR, settings.UPLOAD_URL_PREFIX),
        repository=InMemoryReceiptRepository(),
    )
    yield
    # Shutdown
    logger.info("Shutting down...")


# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version="1.0.0",
    lifespan=lifespan,
)

# CORS: allow everything in development, the configured origins otherwise
env_is_dev = (settings.ENVIRONMENT or "development").lower() == "development"
allow_origins = ["*"] if env_is_dev else list(settings.BACKEND_CORS_ORIGINS or [])

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=not env_is_dev,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Register custom exception handlers
register_exception_handlers(app)

# Include routers
app.include_router(receipts_router)
app.include_router(samples_router)

# Stored receipt images, referenced by Receipt.image_url
app.mount(
    settings.UPLOAD_URL_PREFIX,
    StaticFiles(directory=settings.UPLOAD_DIR, check_dir=False),
    name="uploads",
)


@app.get("/")
async def root():
    """Root endpoint."""
    return {"message": f"Welcome to the {settings.PROJECT_NAME} API"}


@app.api_route("/health", methods=["GET", "HEAD"])
async def health_check():
    """Health check endpoint (supports GET & HEAD)."""
    return {"status": "healthy"}
