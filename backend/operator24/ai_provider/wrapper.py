"""Reusable wrappers for calling the active AI provider.

These functions resolve the global provider, log the request and turn SDK
failures into ``ProviderCallError`` so the router can map them to a
response. They are blocking; async callers run them in the threadpool.

Usage:
    from operator24.ai_provider.wrapper import call_vision

    raw = call_vision(prompt, frames, system=PLAN_SYSTEM_PROMPT, json_mode=True)
"""
import logging
from pathlib import Path
from typing import List, Optional

from .base import AIProvider, FrameImage
from .errors import ProviderCallError, ProviderNotAvailableError
from .resolver import get_provider

logger = logging.getLogger(__name__)


def get_active_provider() -> AIProvider:
    """Return the configured provider.

    Raises:
        ProviderNotAvailableError: If no provider is configured (503).
    """
    provider = get_provider()
    if provider is None:
        logger.warning("AI provider call failed: no provider configured")
        raise ProviderNotAvailableError(
            "No AI provider configured. Please set the provider API key."
        )
    return provider


def call_vision(
    prompt: str,
    images: List[FrameImage],
    system: Optional[str] = None,
    max_tokens: int = 2048,
    json_mode: bool = False,
) -> str:
    """Run a vision completion over ordered frames.

    Raises:
        ProviderNotAvailableError: If no provider is configured (503).
        ProviderCallError: If the provider call fails (500).
    """
    provider = get_active_provider()
    logger.info(f"Calling vision completion with provider: {provider.name}, frames: {len(images)}")
    try:
        return provider.complete_vision(
            prompt, images, system=system, max_tokens=max_tokens, json_mode=json_mode,
        )
    except Exception as e:
        logger.error(f"Provider {provider.name} error during vision completion: {e}")
        raise ProviderCallError(str(e), provider.name) from e


def call_completion(
    prompt: str,
    system: Optional[str] = None,
    max_tokens: int = 2048,
    json_mode: bool = False,
) -> str:
    """Run a text-only chat completion.

    Raises:
        ProviderNotAvailableError: If no provider is configured (503).
        ProviderCallError: If the provider call fails (500).
    """
    provider = get_active_provider()
    logger.info(f"Calling chat completion with provider: {provider.name}")
    try:
        return provider.complete(
            prompt, system=system, max_tokens=max_tokens, json_mode=json_mode,
        )
    except Exception as e:
        logger.error(f"Provider {provider.name} error during chat completion: {e}")
        raise ProviderCallError(str(e), provider.name) from e


def call_transcription(media_path: Path) -> str:
    """Transcribe an audio or video file.

    Raises:
        ProviderNotAvailableError: If no provider is configured (503).
        ProviderCallError: If the provider call fails or has no speech API (500).
    """
    provider = get_active_provider()
    logger.info(f"Calling transcription with provider: {provider.name}, file: {Path(media_path).name}")
    try:
        return provider.transcribe(media_path)
    except Exception as e:
        logger.error(f"Provider {provider.name} error during transcription: {e}")
        raise ProviderCallError(str(e), provider.name) from e
