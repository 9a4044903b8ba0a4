"""Top-level application package for the receipt extraction API.

This package contains everything required to run the FastAPI backend
that turns an uploaded receipt photo into a structured record. It
includes Pydantic schemas, the extraction pipeline (upload
validation, image storage, the AI gateway, response parsing and
schema validation), an in-memory receipt repository and the API
routers that expose them.

To run the API locally you can execute:

```bash
uvicorn receipt_extractor.api.main:app --reload
```

An ``OPENAI_API_KEY`` must be available in the environment or in a
``.env`` file at the project root, otherwise startup fails.
"""

__all__: list[str] = []
