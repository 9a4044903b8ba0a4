from __future__ import annotations

import json
import sys
from pathlib import Path

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

# Add backend folder to sys.path so `import receipt_extractor...` works in tests when running from backend root
BACKEND_DIR = Path(__file__).resolve().parents[1]
if str(BACKEND_DIR) not in sys.path:
    sys.path.insert(0, str(BACKEND_DIR))

from receipt_extractor.api.error_handlers import register_exception_handlers  # noqa: E402
from receipt_extractor.api.routes.receipts import router as receipts_router  # noqa: E402
from receipt_extractor.api.routes.samples import router as samples_router  # noqa: E402
from receipt_extractor.services.extraction_service import ExtractionService  # noqa: E402
from receipt_extractor.services.receipt_repository import InMemoryReceiptRepository  # noqa: E402
from receipt_extractor.services.storage_service import ImageStore  # noqa: E402


VALID_RECEIPT = {
    "date": "2024-01-15",
    "currency": "USD",
    "vendor_name": "Test Store",
    "receipt_items": [{"item_name": "Coffee", "item_cost": 4.5}],
    "tax": 1.35,
    "total": 14.84,
}


class FakeGateway:
    """Stands in for the OpenAI gateway; records calls and replays a canned reply."""

    def __init__(self, reply: str | None = None, error: Exception | None = None) -> None:
        self.reply = reply if reply is not None else json.dumps(VALID_RECEIPT)
        self.error = error
        self.calls: list[dict] = []

    async def infer(self, prompt: str, image_base64: str, mime_type: str) -> str:
        self.calls.append({"prompt": prompt, "image_base64": image_base64, "mime_type": mime_type})
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def make_gateway():
    return FakeGateway


@pytest.fixture
def valid_receipt_data() -> dict:
    return json.loads(json.dumps(VALID_RECEIPT))


@pytest.fixture
def gateway() -> FakeGateway:
    return FakeGateway()


@pytest.fixture
def upload_dir(tmp_path) -> Path:
    return tmp_path / "uploads"


@pytest.fixture
def store(upload_dir) -> ImageStore:
    return ImageStore(upload_dir, "/uploads")


@pytest.fixture
def repository() -> InMemoryReceiptRepository:
    return InMemoryReceiptRepository()


@pytest.fixture
def service(gateway, store, repository) -> ExtractionService:
    return ExtractionService(gateway=gateway, store=store, repository=repository)


@pytest.fixture
def app(service) -> FastAPI:
    app = FastAPI()
    register_exception_handlers(app)
    app.include_router(receipts_router)
    app.include_router(samples_router)
    app.state.extraction_service = service
    return app


@pytest.fixture
def client(app) -> TestClient:
    return TestClient(app)
