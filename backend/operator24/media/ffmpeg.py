"""ffmpeg invocations for the video pipelines.

Every command is built as an argument list and executed without a shell,
so upload names and paths are never interpreted. Commands run as asyncio
subprocesses so a long transcode does not block other requests.
"""
from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import List, Optional

from operator24.config import MediaSettings

logger = logging.getLogger(__name__)

FRAME_PATTERN = "frame-%02d.jpg"

# stderr tail kept in error messages
_STDERR_LIMIT = 500
_VERSION_TIMEOUT_SECONDS = 5


class MediaProcessingError(RuntimeError):
    """Raised when ffmpeg is missing, fails, or times out."""


async def _kill(proc: asyncio.subprocess.Process) -> None:
    if proc.returncode is None:
        proc.kill()
    await proc.wait()


async def run_ffmpeg(args: List[str], settings: MediaSettings) -> str:
    """Run ffmpeg with ``args``; return its stderr log.

    Raises:
        MediaProcessingError: On a missing binary, non-zero exit or timeout.
    """
    cmd = [settings.ffmpeg_path] + args
    logger.debug("Running: %s", " ".join(cmd))
    try:
        proc = await asyncio.create_subprocess_exec(
            *cmd,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except FileNotFoundError as exc:
        raise MediaProcessingError(
            f"ffmpeg not found at '{settings.ffmpeg_path}'"
        ) from exc

    try:
        _, stderr_b = await asyncio.wait_for(
            proc.communicate(), timeout=settings.timeout_seconds
        )
    except asyncio.TimeoutError as exc:
        await _kill(proc)
        raise MediaProcessingError(
            f"ffmpeg timed out after {settings.timeout_seconds}s"
        ) from exc
    except BaseException:
        # Cancelled or interrupted: ffmpeg must not outlive the call
        await _kill(proc)
        raise

    stderr = stderr_b.decode(errors="replace").strip()
    if proc.returncode != 0:
        raise MediaProcessingError(
            f"ffmpeg failed (exit {proc.returncode}): {stderr[-_STDERR_LIMIT:]}"
        )
    return stderr


async def downscale_video(src: Path, dst: Path, settings: MediaSettings) -> Path:
    """Re-encode ``src`` at ``scale_width`` px wide, without audio."""
    await run_ffmpeg(
        [
            "-y", "-i", str(src),
            "-vf", f"scale={settings.scale_width}:-1",
            "-c:v", "libx264",
            "-preset", settings.preset,
            "-crf", str(settings.crf),
            "-an",
            str(dst),
        ],
        settings,
    )
    return dst


async def extract_frames(
    src: Path,
    out_dir: Path,
    settings: MediaSettings,
    every_seconds: Optional[int] = None,
    max_frames: Optional[int] = None,
) -> List[Path]:
    """Sample one JPEG every ``every_seconds`` and return the first ``max_frames``.

    Frames come back in playback order (the pattern is zero-padded).
    """
    every_seconds = every_seconds or settings.frame_interval_seconds
    max_frames = max_frames or settings.max_frames

    out_dir.mkdir(parents=True, exist_ok=True)
    await run_ffmpeg(
        [
            "-y", "-i", str(src),
            "-vf", f"fps=1/{every_seconds}",
            str(out_dir / FRAME_PATTERN),
        ],
        settings,
    )
    frames = sorted(p for p in out_dir.iterdir() if p.suffix == ".jpg")
    logger.info("Extracted %d frame(s), keeping %d", len(frames), min(len(frames), max_frames))
    return frames[:max_frames]


async def extract_audio(src: Path, dst: Path, settings: MediaSettings) -> Path:
    """Extract a mono 16 kHz audio track sized for speech recognition."""
    await run_ffmpeg(
        [
            "-y", "-i", str(src),
            "-vn",
            "-ac", "1",
            "-ar", "16000",
            "-b:a", settings.audio_bitrate,
            str(dst),
        ],
        settings,
    )
    return dst


async def ffmpeg_version(settings: MediaSettings) -> Optional[str]:
    """Return the first line of ``ffmpeg -version``, or None if unavailable."""
    try:
        proc = await asyncio.create_subprocess_exec(
            settings.ffmpeg_path, "-version",
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE,
        )
    except OSError as exc:
        logger.warning("ffmpeg unavailable: %s", exc)
        return None

    try:
        stdout_b, _ = await asyncio.wait_for(
            proc.communicate(), timeout=_VERSION_TIMEOUT_SECONDS
        )
    except asyncio.TimeoutError:
        await _kill(proc)
        logger.warning("ffmpeg -version timed out")
        return None

    if proc.returncode != 0:
        return None
    lines = stdout_b.decode(errors="replace").strip().splitlines()
    return lines[0] if lines else None
