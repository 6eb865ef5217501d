"""Operator24 application configuration.

Loads settings from two YAML files:
  * operator24.settings.yaml: non-secret configuration
  * operator24.secrets.yaml: API keys (never committed)

A handful of environment variables override the files so the service can
run on hosts that only inject env vars (OPENAI_API_KEY, ANTHROPIC_API_KEY,
PORT).
"""
from __future__ import annotations

import logging
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Literal, Optional

import yaml
from pydantic import BaseModel, Field, field_validator

logger = logging.getLogger(__name__)

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

SETTINGS_FILE = Path("operator24.settings.yaml")
SECRETS_FILE  = Path("operator24.secrets.yaml")

PipelineMode = Literal["plan", "analysis", "transcription"]
ProviderName = Literal["openai", "anthropic"]


def _load_yaml(path: Path) -> Dict[str, Any]:
    if not path.exists():
        logger.warning("Config file not found: %s", path)
        return {}
    with path.open(encoding="utf-8") as fh:
        return yaml.safe_load(fh) or {}


# ---------------------------------------------------------------------------
# Secrets models
# ---------------------------------------------------------------------------


class OpenAISecrets(BaseModel):
    api_key:      Optional[str] = None
    organization: Optional[str] = None


class AnthropicSecrets(BaseModel):
    api_key: Optional[str] = None


class Secrets(BaseModel):
    openai:    OpenAISecrets    = Field(default_factory=OpenAISecrets)
    anthropic: AnthropicSecrets = Field(default_factory=AnthropicSecrets)


# ---------------------------------------------------------------------------
# Settings models
# ---------------------------------------------------------------------------


class ServerSettings(BaseModel):
    host:            str       = "0.0.0.0"
    port:            int       = 3001
    allowed_origins: List[str] = Field(default_factory=lambda: ["*"])


class LoggingSettings(BaseModel):
    level: str = "info"


class AISettings(BaseModel):
    """Which hosted provider to call and with which models."""
    provider:            ProviderName = "openai"
    vision_model:        str          = "gpt-4o-mini"
    chat_model:          str          = "gpt-4o-mini"
    transcription_model: str          = "whisper-1"
    temperature:         float        = 0.2
    max_tokens:          int          = 2048


class MediaSettings(BaseModel):
    """ffmpeg invocation parameters."""
    ffmpeg_path:            str           = "ffmpeg"
    work_dir:               str           = Field(default_factory=tempfile.gettempdir)
    scale_width:            int           = 640
    crf:                    int           = 28
    preset:                 str           = "veryfast"
    frame_interval_seconds: int           = 5
    max_frames:             int           = 8
    audio_bitrate:          str           = "64k"
    timeout_seconds:        Optional[float] = None

    @field_validator("frame_interval_seconds", "max_frames", "scale_width")
    @classmethod
    def _positive(cls, value: int) -> int:
        if value <= 0:
            raise ValueError("must be a positive integer")
        return value


class PipelineSettings(BaseModel):
    default_mode:       PipelineMode = "plan"
    extract_audio:      bool         = True
    analyze_transcript: bool         = True
    max_upload_mb:      int          = 200

    @property
    def max_upload_bytes(self) -> int:
        return self.max_upload_mb * 1024 * 1024


class Operator24Config(BaseModel):
    server:   ServerSettings   = Field(default_factory=ServerSettings)
    logging:  LoggingSettings  = Field(default_factory=LoggingSettings)
    ai:       AISettings       = Field(default_factory=AISettings)
    media:    MediaSettings    = Field(default_factory=MediaSettings)
    pipeline: PipelineSettings = Field(default_factory=PipelineSettings)
    secrets:  Secrets          = Field(default_factory=Secrets)

    def provider_api_key(self) -> Optional[str]:
        """Return the API key for the configured AI provider, if any."""
        if self.ai.provider == "anthropic":
            return self.secrets.anthropic.api_key
        return self.secrets.openai.api_key


# ---------------------------------------------------------------------------
# Environment variable overrides
# ---------------------------------------------------------------------------


def _apply_env_overrides(data: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay the env vars the hosting platform sets onto the raw YAML data."""
    secrets = data.setdefault("secrets", {})

    openai_key = os.getenv("OPENAI_API_KEY")
    if openai_key:
        secrets.setdefault("openai", {})["api_key"] = openai_key

    anthropic_key = os.getenv("ANTHROPIC_API_KEY")
    if anthropic_key:
        secrets.setdefault("anthropic", {})["api_key"] = anthropic_key

    port = os.getenv("PORT")
    if port:
        data.setdefault("server", {})["port"] = port

    return data


# ---------------------------------------------------------------------------
# Public loader
# ---------------------------------------------------------------------------

_config: Optional[Operator24Config] = None


def load_config(
    settings_path: Optional[Path] = None,
    secrets_path: Optional[Path] = None,
) -> Operator24Config:
    """Load and merge settings + secrets into a single *Operator24Config*."""
    settings_data = _load_yaml(settings_path or SETTINGS_FILE)
    secrets_data  = _load_yaml(secrets_path or SECRETS_FILE)

    # Merge: secrets live under the "secrets" key
    settings_data["secrets"] = secrets_data
    settings_data = _apply_env_overrides(settings_data)

    config = Operator24Config(**settings_data)
    logger.info(
        "Settings loaded (server=%s:%s, provider=%s, default_mode=%s)",
        config.server.host,
        config.server.port,
        config.ai.provider,
        config.pipeline.default_mode,
    )
    return config


def get_config() -> Operator24Config:
    """Return the process-wide config, loading it on first use."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def set_config(config: Optional[Operator24Config]) -> None:
    """Replace the process-wide config (None forces a reload on next access)."""
    global _config
    _config = config
