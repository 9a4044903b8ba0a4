"""Upload media type checks.

Only a small allow-list of image types is accepted.  The check is
side-effect free so it can run before anything is written to disk or
sent to the AI model.
"""

from __future__ import annotations

from pathlib import PurePath
from typing import Optional

from receipt_extractor.core.errors import UnsupportedMediaTypeError

ALLOWED_MEDIA_TYPES: frozenset[str] = frozenset(
    {"image/jpeg", "image/jpg", "image/png", "image/webp"}
)

# Extension -> MIME type, used when a file comes from disk rather than an upload
EXTENSION_MEDIA_TYPES: dict[str, str] = {
    ".jpg": "image/jpeg",
    ".jpeg": "image/jpeg",
    ".png": "image/png",
    ".webp": "image/webp",
}


def is_supported_media_type(content_type: Optional[str]) -> bool:
    return content_type in ALLOWED_MEDIA_TYPES


def ensure_supported_media_type(content_type: Optional[str]) -> None:
    """Raise :class:`UnsupportedMediaTypeError` unless the type is allowed."""
    if not is_supported_media_type(content_type):
        raise UnsupportedMediaTypeError()


def mime_type_for_filename(filename: str) -> Optional[str]:
    """Return the MIME type for a supported image filename, else ``None``."""
    return EXTENSION_MEDIA_TYPES.get(PurePath(filename).suffix.lower())
