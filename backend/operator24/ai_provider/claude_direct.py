"""Claude Direct API provider implementation.

This module provides an AIProvider implementation that connects directly
to Anthropic's Claude API using the official SDK. Claude accepts frames
as base64 image blocks but has no speech endpoint, so the transcription
pipeline is unavailable with this provider.

Usage:
    provider = ClaudeDirectProvider(api_key="sk-ant-...")
    text = provider.complete_vision(prompt, frames)
"""
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .base import AIProvider, FrameImage

logger = logging.getLogger(__name__)


class ClaudeDirectProvider(AIProvider):
    """AIProvider implementation using Anthropic's Claude API directly.

    Attributes:
        api_key: Anthropic API key for authentication.
        model: Claude model to use for every completion.
        temperature: Sampling temperature.
        base_url: Anthropic API base URL.
    """

    name = "anthropic"

    DEFAULT_MODEL = "claude-3-5-sonnet-20241022"
    DEFAULT_BASE_URL = "https://api.anthropic.com"

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        temperature: float = 0.2,
        base_url: Optional[str] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self.temperature = temperature
        self.base_url = base_url or self.DEFAULT_BASE_URL
        self._client: Optional[object] = None

    def _get_client(self) -> object:
        """Get or create the Anthropic client.

        Raises:
            ImportError: If anthropic package is not installed.
        """
        if self._client is None:
            try:
                import anthropic
                self._client = anthropic.Anthropic(
                    api_key=self.api_key,
                    base_url=self.base_url,
                )
            except ImportError:
                raise ImportError(
                    "anthropic package is required for ClaudeDirectProvider. "
                    "Install it with: pip install anthropic"
                )
        return self._client

    def health_check(self) -> bool:
        try:
            client = self._get_client()
            client.messages.create(
                model=self.model,
                max_tokens=1,
                messages=[{"role": "user", "content": "hi"}],
            )
            return True
        except Exception as e:
            logger.warning(f"Claude Direct health check failed: {e}")
            return False

    def _messages(
        self,
        content: Any,
        system: Optional[str],
        max_tokens: int,
    ) -> str:
        client = self._get_client()

        kwargs: Dict[str, Any] = {
            "model": self.model,
            "max_tokens": max_tokens,
            "temperature": self.temperature,
            "messages": [{"role": "user", "content": content}],
        }
        if system:
            kwargs["system"] = system

        response = client.messages.create(**kwargs)

        # Claude may return several blocks; only text blocks carry output
        parts = [
            getattr(block, "text", "")
            for block in (response.content or [])
            if getattr(block, "type", "text") == "text"
        ]
        return "".join(parts).strip()

    def complete(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: int = 2048,
        json_mode: bool = False,
    ) -> str:
        # Claude has no response_format switch; JSON is requested in the prompt
        return self._messages(prompt, system, max_tokens)

    def complete_vision(
        self,
        prompt: str,
        images: List[FrameImage],
        system: Optional[str] = None,
        max_tokens: int = 2048,
        json_mode: bool = False,
    ) -> str:
        content: List[Dict[str, Any]] = [
            {
                "type": "image",
                "source": {
                    "type": "base64",
                    "media_type": image.media_type,
                    "data": image.to_base64(),
                },
            }
            for image in images
        ]
        content.append({"type": "text", "text": prompt})
        logger.debug("Claude vision request: model=%s frames=%d", self.model, len(images))
        return self._messages(content, system, max_tokens)

    def transcribe(self, media_path: Path) -> str:
        raise NotImplementedError(
            "ClaudeDirectProvider does not support audio transcription; "
            "configure ai.provider: openai for the transcription pipeline."
        )
