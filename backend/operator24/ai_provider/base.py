"""AIProvider abstract interface for hosted model integrations.

This module defines the abstract base class for all AI provider
implementations used by the video pipelines. A provider exposes three
capabilities: plain chat completion, vision completion over a list of
still frames, and speech transcription of a media file.

Usage:
    from operator24.ai_provider import OpenAIProvider, FrameImage

    provider = OpenAIProvider(api_key="sk-...")
    frames = [FrameImage.from_path(p) for p in frame_paths]
    text = provider.complete_vision("Describe the frames", frames)
"""
import base64
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional


@dataclass
class FrameImage:
    """A still frame sampled from the uploaded video.

    Attributes:
        data: Raw encoded image bytes.
        media_type: MIME type of ``data``.
    """
    data: bytes
    media_type: str = "image/jpeg"

    @classmethod
    def from_path(cls, path: Path, media_type: str = "image/jpeg") -> "FrameImage":
        return cls(data=Path(path).read_bytes(), media_type=media_type)

    def to_base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")

    def to_data_url(self) -> str:
        """Encode the frame as a ``data:`` URL accepted by vision endpoints."""
        return f"data:{self.media_type};base64,{self.to_base64()}"


class AIProvider(ABC):
    """Abstract base class for AI provider implementations.

    All providers (OpenAI, Claude Direct) implement this interface so the
    pipelines never depend on a specific SDK.

    Attributes:
        name: Short provider identifier used in logs and error messages.
    """

    name: str = "unknown"

    @abstractmethod
    def health_check(self) -> bool:
        """Check if the AI provider is healthy and operational.

        Returns:
            bool: True if the provider is operational, False otherwise.
        """
        pass

    @abstractmethod
    def complete(
        self,
        prompt: str,
        system: Optional[str] = None,
        max_tokens: int = 2048,
        json_mode: bool = False,
    ) -> str:
        """Send a text-only prompt and return the response text.

        Args:
            prompt:     The user-turn prompt.
            system:     Optional system-role instruction.
            max_tokens: Maximum tokens in the response.
            json_mode:  Ask the model for a single JSON object.

        Returns:
            str: The model's response text.

        Raises:
            Exception: If the API call fails.
        """
        pass

    @abstractmethod
    def complete_vision(
        self,
        prompt: str,
        images: List[FrameImage],
        system: Optional[str] = None,
        max_tokens: int = 2048,
        json_mode: bool = False,
    ) -> str:
        """Send a prompt together with ordered images and return the response text.

        Args:
            prompt:     The user-turn text placed before the images.
            images:     Frames in playback order.
            system:     Optional system-role instruction.
            max_tokens: Maximum tokens in the response.
            json_mode:  Ask the model for a single JSON object.

        Returns:
            str: The model's response text.

        Raises:
            Exception: If the API call fails.
        """
        pass

    @abstractmethod
    def transcribe(self, media_path: Path) -> str:
        """Transcribe the speech in an audio (or video) file.

        Args:
            media_path: Path of the file to upload to the speech API.

        Returns:
            str: The transcript text.

        Raises:
            NotImplementedError: If the provider has no speech API.
            Exception: If the API call fails.
        """
        pass
