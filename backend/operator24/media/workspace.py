"""Per-request scratch directory for uploads and derived media.

Layout: {work_dir}/op24-{hex}/
    upload{ext}         the received file
    video-small.mp4     downscaled copy
    frames/frame-NN.jpg sampled stills
    audio.mp3           extracted audio track

The directory is removed when the ``async with`` block exits, whether the
pipeline returned, raised a handled error, or raised anything else.
"""
from __future__ import annotations

import logging
import shutil
import uuid
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

logger = logging.getLogger(__name__)

UPLOAD_CHUNK_BYTES = 1024 * 1024


class UploadTooLargeError(ValueError):
    """Raised when an upload exceeds the configured size limit."""
    def __init__(self, max_bytes: int):
        self.max_bytes = max_bytes
        super().__init__(
            f"File size exceeds limit of {max_bytes // (1024 * 1024)}MB"
        )


class EmptyUploadError(ValueError):
    """Raised when the uploaded file has no content."""


class RequestWorkspace:
    """Scoped working directory owned by a single request."""

    def __init__(self, base_dir: str | Path) -> None:
        self.root = Path(base_dir) / f"op24-{uuid.uuid4().hex}"

    # -----------------------------------------------------------------------
    # Well-known artifact paths
    # -----------------------------------------------------------------------

    @property
    def small_video(self) -> Path:
        return self.root / "video-small.mp4"

    @property
    def frames_dir(self) -> Path:
        return self.root / "frames"

    @property
    def audio(self) -> Path:
        return self.root / "audio.mp3"

    def upload_path(self, filename: Optional[str]) -> Path:
        # Only the suffix of the client name is kept
        suffix = Path(filename or "").suffix.lower()[:10]
        return self.root / f"upload{suffix}"

    # -----------------------------------------------------------------------
    # Lifecycle
    # -----------------------------------------------------------------------

    async def __aenter__(self) -> "RequestWorkspace":
        self.root.mkdir(parents=True, exist_ok=False)
        logger.debug("Created workspace %s", self.root)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.cleanup()

    def cleanup(self) -> None:
        if not self.root.exists():
            return
        try:
            shutil.rmtree(self.root)
            logger.debug("Removed workspace %s", self.root)
        except OSError as e:
            logger.error(f"Failed to remove workspace {self.root}: {e}")

    # -----------------------------------------------------------------------
    # Upload
    # -----------------------------------------------------------------------

    async def save_upload(self, upload: UploadFile, max_bytes: int) -> Path:
        """Stream the multipart file to disk, enforcing ``max_bytes``.

        Raises:
            UploadTooLargeError: If the upload is larger than ``max_bytes``.
            EmptyUploadError: If the upload has no bytes.
        """
        path = self.upload_path(upload.filename)
        written = 0
        with path.open("wb") as out:
            while True:
                chunk = await upload.read(UPLOAD_CHUNK_BYTES)
                if not chunk:
                    break
                written += len(chunk)
                if written > max_bytes:
                    raise UploadTooLargeError(max_bytes)
                out.write(chunk)
        if written == 0:
            raise EmptyUploadError(f"Upload {upload.filename} is empty")
        logger.info(f"Saved upload: {upload.filename} ({written} bytes)")
        return path
