"""
File Storage Utilities (local filesystem, keyed by opaque file id)
"""
import json
import uuid
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Optional

import aiofiles

from careerprep.core.config import settings
from careerprep.core.exceptions import NotFoundError
from careerprep.core.logging import logger


class StorageService:
    """Original resume files, written/read/deleted by id"""

    def __init__(self, upload_dir: Optional[str] = None, subfolder: str = "resumes"):
        self.upload_dir = Path(upload_dir or settings.UPLOAD_DIR) / subfolder
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def _blob_path(self, file_id: str) -> Path:
        # ids are generated here; reject anything that could escape the directory
        if not file_id or "/" in file_id or "\\" in file_id or file_id.startswith("."):
            raise NotFoundError("File not found")
        return self.upload_dir / file_id

    def _meta_path(self, file_id: str) -> Path:
        return self._blob_path(file_id).with_suffix(".json")

    async def save_file(
        self,
        content: bytes,
        filename: str,
        content_type: str = "application/pdf",
        metadata: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Store file bytes

        Returns:
            the new file id
        """
        file_id = uuid.uuid4().hex

        async with aiofiles.open(self._blob_path(file_id), 'wb') as f:
            await f.write(content)

        info = {
            "filename": filename,
            "content_type": content_type,
            "length": len(content),
            "uploaded_at": datetime.now(timezone.utc).isoformat(),
            "metadata": metadata or {},
        }
        async with aiofiles.open(self._meta_path(file_id), 'w') as f:
            await f.write(json.dumps(info, default=str))

        return file_id

    async def read_file(self, file_id: str) -> bytes:
        path = self._blob_path(file_id)
        if not path.exists():
            raise NotFoundError("File not found")
        async with aiofiles.open(path, 'rb') as f:
            return await f.read()

    async def get_file_info(self, file_id: str) -> Optional[Dict[str, Any]]:
        """Stored metadata for a file, or None"""
        path = self._meta_path(file_id)
        if not path.exists():
            return None
        async with aiofiles.open(path, 'r') as f:
            return json.loads(await f.read())

    async def delete_file(self, file_id: str) -> bool:
        """Delete file from storage. Raises if the file could not be removed."""
        path = self._blob_path(file_id)
        if not path.exists():
            raise NotFoundError("File not found")
        path.unlink()
        meta = self._meta_path(file_id)
        if meta.exists():
            meta.unlink()
        logger.info(f"Deleted stored file: {file_id}")
        return True


_storage: Optional[StorageService] = None


def get_storage() -> StorageService:
    """Shared storage instance (FastAPI dependency)"""
    global _storage
    if _storage is None:
        _storage = StorageService()
    return _storage
