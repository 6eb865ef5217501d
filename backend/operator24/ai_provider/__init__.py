"""AI Provider module for hosted model integrations.

This module provides a unified interface for AI providers with two
implementations: OpenAIProvider and ClaudeDirectProvider.

Usage:
    from operator24.ai_provider import OpenAIProvider, FrameImage

    provider = OpenAIProvider(api_key="sk-...")
    text = provider.complete_vision(prompt, [FrameImage.from_path(p) for p in frames])
"""
from .base import AIProvider, FrameImage
from .claude_direct import ClaudeDirectProvider
from .errors import AIProviderError, ProviderCallError, ProviderNotAvailableError
from .openai_provider import OpenAIProvider
from .resolver import build_provider, get_provider, set_provider
from .wrapper import call_completion, call_transcription, call_vision

__all__ = [
    "AIProvider",
    "FrameImage",
    "OpenAIProvider",
    "ClaudeDirectProvider",
    "build_provider",
    "get_provider",
    "set_provider",
    # Wrapper functions and exceptions
    "call_vision",
    "call_completion",
    "call_transcription",
    "AIProviderError",
    "ProviderNotAvailableError",
    "ProviderCallError",
]
