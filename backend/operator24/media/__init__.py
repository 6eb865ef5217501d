"""Local media pre-processing: ffmpeg calls and per-request scratch space."""
from .ffmpeg import (
    MediaProcessingError,
    downscale_video,
    extract_audio,
    extract_frames,
    ffmpeg_version,
    run_ffmpeg,
)
from .workspace import EmptyUploadError, RequestWorkspace, UploadTooLargeError

__all__ = [
    "EmptyUploadError",
    "MediaProcessingError",
    "RequestWorkspace",
    "UploadTooLargeError",
    "downscale_video",
    "extract_audio",
    "extract_frames",
    "ffmpeg_version",
    "run_ffmpeg",
]
