"""OpenAI API provider implementation.

This module provides an AIProvider implementation that connects to
OpenAI's API using the official SDK: chat completions (text and vision)
and Whisper transcription.

Usage:
    provider = OpenAIProvider(api_key="sk-...")
    if provider.health_check():
        text = provider.complete_vision(prompt, frames, json_mode=True)
"""
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

from .base import AIProvider, FrameImage

logger = logging.getLogger(__name__)


class OpenAIProvider(AIProvider):
    """AIProvider implementation using OpenAI's API.

    Attributes:
        api_key: OpenAI API key for authentication.
        model: Chat model used for text-only completions.
        vision_model: Model used for frame analysis.
        transcription_model: Speech-to-text model.
        temperature: Sampling temperature for completions.
        organization: Optional organization ID.
    """

    name = "openai"

    DEFAULT_MODEL = "gpt-4o-mini"
    DEFAULT_TRANSCRIPTION_MODEL = "whisper-1"

    def __init__(
        self,
        api_key: str,
        model: Optional[str] = None,
        vision_model: Optional[str] = None,
        transcription_model: Optional[str] = None,
        temperature: float = 0.2,
        organization: Optional[str] = None,
    ) -> None:
        self.api_key = api_key
        self.model = model or self.DEFAULT_MODEL
        self.vision_model = vision_model or self.model
        self.transcription_model = transcription_model or self.DEFAULT_TRANSCRIPTION_MODEL
        self.temperature = temperature
        self.organization = organization
        self._client: Optional[object] = None

    def _get_client(self) -> object:
        """Get or create the OpenAI client.

        Raises:
            ImportError: If openai package is not installed.
        """
        if self._client is None:
            try:
                import openai
                kwargs = {"api_key": self.api_key}
                if self.organization:
                    kwargs["organization"] = self.organization
                self._client = openai.OpenAI(**kwargs)
            except ImportError:
                raise ImportError(
                    "openai package is required for OpenAIProvider. "
                    "Install it with: pip install openai"
                )
        return self._client

    def health_check(self) -> bool:
        """Check if the OpenAI API is accessible with a 1-token request."""
        try:
            client = self._get_client()
            client.chat.completions.create(
                model=self.model,
                max_tokens=1,
                messages=[{"role": "user", "content": "hi"}],
            )
            return True
        except Exception as e:
            logger.warning(f"OpenAI health check failed: {e}")
            return False

    def _chat(
        self,
        model: str,
        content: Any,
        system: Optional[str],
        max_tokens: int,
        json_mode: bool,
    ) -> str:
        client = self._get_client()

        messages: List[Dict[str, Any]] = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": content})

        kwargs: Dict[str, Any] = {
            "model": model,
            "temperature": self.temperature,
            "max_tokens": max_tokens,
            "messages": messages,
        }
        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        response = client.chat.completions.create(**kwargs)

        if not response.choices:
            return ""
        return (response.choices[0].message.content or "").strip()

    def complete(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: int = 2048,
        json_mode: bool = False,
    ) -> str:
        return self._chat(self.model, prompt, system, max_tokens, json_mode)

    def complete_vision(
        self,
        prompt: str,
        images: List[FrameImage],
        system: Optional[str] = None,
        max_tokens: int = 2048,
        json_mode: bool = False,
    ) -> str:
        """Send the prompt followed by every frame as an ``image_url`` part."""
        content: List[Dict[str, Any]] = [{"type": "text", "text": prompt}]
        content.extend(
            {"type": "image_url", "image_url": {"url": image.to_data_url()}}
            for image in images
        )
        logger.debug(
            "OpenAI vision request: model=%s frames=%d json_mode=%s",
            self.vision_model, len(images), json_mode,
        )
        return self._chat(self.vision_model, content, system, max_tokens, json_mode)

    def transcribe(self, media_path: Path) -> str:
        """Upload the file to the transcription endpoint and return its text."""
        client = self._get_client()
        with open(media_path, "rb") as fh:
            response = client.audio.transcriptions.create(
                model=self.transcription_model,
                file=fh,
            )
        return (getattr(response, "text", "") or "").strip()
