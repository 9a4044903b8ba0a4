"""Image storage service.

Uploaded receipt images are written to a single flat directory on the
local filesystem (``settings.UPLOAD_DIR``).  Each stored file is named
``<receipt_id>_<original_filename>`` so two uploads with the same
original name never collide.  The service returns the public URL path
(``/uploads/<filename>``) under which the API serves the directory, so
callers never need to know where the bytes actually live.
"""

from __future__ import annotations

import logging
from pathlib import Path, PurePath

from receipt_extractor.core.config import settings

logger = logging.getLogger(__name__)


class ImageStore:
    """Filesystem store for uploaded receipt images."""

    def __init__(self, base_dir: str | Path | None = None, url_prefix: str | None = None) -> None:
        self.base_dir = Path(base_dir or settings.UPLOAD_DIR).resolve()
        self.url_prefix = (url_prefix or settings.UPLOAD_URL_PREFIX).rstrip("/")
        self._dir_ready = False

    def _ensure_dir(self) -> None:
        """Create the upload directory on first use."""
        if self._dir_ready:
            return
        self.base_dir.mkdir(parents=True, exist_ok=True)
        self._dir_ready = True
        logger.info("[storage] upload dir ready: %s", self.base_dir)

    @staticmethod
    def compose_filename(receipt_id: str, original_name: str) -> str:
        # Only the final path component of the client supplied name is kept
        return f"{receipt_id}_{PurePath(original_name).name}"

    def get_full_path(self, filename: str) -> Path:
        return self.base_dir / filename

    async def save(self, content: bytes, original_name: str, receipt_id: str) -> str:
        """Persist *content* and return its public URL path.

        Disk errors are not caught here; the extraction service turns them
        into a generic processing failure.
        """
        self._ensure_dir()
        filename = self.compose_filename(receipt_id, original_name)
        file_path = self.get_full_path(filename)
        file_path.write_bytes(content)
        logger.info("[storage] saved %s bytes=%d", file_path, len(content))
        return f"{self.url_prefix}/{filename}"
