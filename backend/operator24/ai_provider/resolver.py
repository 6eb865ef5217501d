"""Provider resolution from configuration.

Builds the configured AIProvider once at startup and keeps it in a
module-level slot the pipelines read from.

Usage:
    from operator24.ai_provider.resolver import build_provider, set_provider
    from operator24.config import get_config

    set_provider(build_provider(get_config()))
"""
import logging
from typing import Optional

from operator24.config import Operator24Config

from .base import AIProvider
from .claude_direct import ClaudeDirectProvider
from .openai_provider import OpenAIProvider

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Singleton
# ---------------------------------------------------------------------------

_provider: Optional[AIProvider] = None


def get_provider() -> Optional[AIProvider]:
    """Return the global AIProvider, or None if none is configured."""
    return _provider


def set_provider(provider: Optional[AIProvider]) -> None:
    """Set (or clear) the global AIProvider instance."""
    global _provider
    _provider = provider


# ---------------------------------------------------------------------------
# Factory
# ---------------------------------------------------------------------------


def build_provider(config: Operator24Config) -> Optional[AIProvider]:
    """Create the provider named by ``config.ai.provider``.

    Returns None when the provider has no API key configured; the service
    still starts so the liveness endpoints answer.
    """
    ai = config.ai
    api_key = config.provider_api_key()
    if not api_key:
        logger.warning("No API key configured for provider '%s'", ai.provider)
        return None

    if ai.provider == "anthropic":
        # Claude models handle both frames and text; the defaults name OpenAI models
        model = next(
            (m for m in (ai.vision_model, ai.chat_model) if m.startswith("claude")),
            None,
        )
        provider: AIProvider = ClaudeDirectProvider(
            api_key=api_key,
            model=model,
            temperature=ai.temperature,
        )
    else:
        provider = OpenAIProvider(
            api_key=api_key,
            model=ai.chat_model,
            vision_model=ai.vision_model,
            transcription_model=ai.transcription_model,
            temperature=ai.temperature,
            organization=config.secrets.openai.organization,
        )

    logger.info("AI provider ready: %s", provider.name)
    return provider
