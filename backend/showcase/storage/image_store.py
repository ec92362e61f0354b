"""Image store for uploaded submission files.

Each file is written once under a generated name and served back as a static
file. Names never reuse anything from the client except the extension.
"""

import asyncio
import logging
import re
import time
import uuid
from pathlib import Path

from pydantic import BaseModel

logger = logging.getLogger(__name__)

# Extensions are kept only when they look like a plain suffix
_SAFE_EXTENSION = re.compile(r"\.[a-z0-9]{1,16}", re.IGNORECASE)


class StoredImage(BaseModel):
    """Information about a stored image."""

    filename: str
    original_filename: str
    size_bytes: int
    content_type: str | None = None


class ImageStore:
    """Writes uploaded images into a single flat directory."""

    def __init__(self, upload_dir: Path):
        """Initialize the image store.

        Args:
            upload_dir: Directory the files are written to. Created if missing.
        """
        self.upload_dir = upload_dir
        self.upload_dir.mkdir(parents=True, exist_ok=True)

    def _extension(self, filename: str) -> str:
        """Return the extension of a client filename as sent, or ''."""
        ext = Path(filename).suffix
        if not _SAFE_EXTENSION.fullmatch(ext):
            return ""
        return ext

    def generate_filename(self, original_filename: str) -> str:
        """Generate an on-disk name: millisecond timestamp, random token, extension.

        Example: ``1718000000000-3fa85f64.png``.
        """
        timestamp_ms = time.time_ns() // 1_000_000
        token = uuid.uuid4().hex[:8]
        return f"{timestamp_ms}-{token}{self._extension(original_filename)}"

    def path_for(self, filename: str) -> Path:
        """Resolve a stored filename to its path inside the upload directory.

        Raises:
            ValueError: If the name would escape the upload directory.
        """
        if not filename or Path(filename).name != filename or filename in (".", ".."):
            raise ValueError(f"Invalid image filename: {filename!r}")
        return self.upload_dir / filename

    async def save(
        self,
        original_filename: str,
        content: bytes,
        content_type: str | None = None,
    ) -> StoredImage:
        """Write one image under a freshly generated name.

        Args:
            original_filename: The name the client sent, used for its extension.
            content: The file content as bytes.
            content_type: Optional MIME type, recorded but not checked.

        Returns:
            Information about the stored file.
        """
        filename = self.generate_filename(original_filename)
        file_path = self.path_for(filename)

        # Regenerate on the unlikely event of a clash
        while file_path.exists():
            filename = self.generate_filename(original_filename)
            file_path = self.path_for(filename)

        await asyncio.to_thread(file_path.write_bytes, content)

        logger.info(f"Stored image {filename} ({len(content)} bytes) from {original_filename!r}")
        return StoredImage(
            filename=filename,
            original_filename=original_filename,
            size_bytes=len(content),
            content_type=content_type,
        )

    async def delete(self, filenames: list[str]) -> int:
        """Delete stored images, ignoring ones that are already gone.

        Returns:
            The number of files removed.
        """
        deleted = 0
        for filename in filenames:
            file_path = self.path_for(filename)
            if file_path.exists():
                await asyncio.to_thread(file_path.unlink)
                deleted += 1
        if deleted:
            logger.info(f"Deleted {deleted} stored image(s)")
        return deleted
