"""Tests for operator24.config: defaults, YAML loading and env overrides."""
from __future__ import annotations

import pytest
from pydantic import ValidationError

import operator24.config as cfg_module
from operator24.config import (
    MediaSettings,
    Operator24Config,
    PipelineSettings,
    get_config,
    load_config,
    set_config,
)


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("OPENAI_API_KEY", "ANTHROPIC_API_KEY", "PORT"):
        monkeypatch.delenv(name, raising=False)


class TestDefaults:
    def test_server_defaults(self):
        cfg = Operator24Config()
        assert cfg.server.port == 3001
        assert cfg.server.allowed_origins == ["*"]

    def test_media_defaults_match_frame_sampling(self):
        media = MediaSettings()
        assert media.scale_width == 640
        assert media.frame_interval_seconds == 5
        assert media.max_frames == 8
        assert media.timeout_seconds is None

    def test_ai_defaults(self):
        cfg = Operator24Config()
        assert cfg.ai.provider == "openai"
        assert cfg.ai.vision_model == "gpt-4o-mini"
        assert cfg.ai.temperature == 0.2

    def test_max_upload_bytes(self):
        assert PipelineSettings(max_upload_mb=2).max_upload_bytes == 2 * 1024 * 1024

    def test_rejects_non_positive_frame_settings(self):
        with pytest.raises(ValidationError):
            MediaSettings(max_frames=0)
        with pytest.raises(ValidationError):
            MediaSettings(frame_interval_seconds=-1)

    def test_rejects_unknown_mode_and_provider(self):
        with pytest.raises(ValidationError):
            PipelineSettings(default_mode="teleport")
        with pytest.raises(ValidationError):
            Operator24Config(ai={"provider": "bedrock"})

    def test_provider_api_key_follows_provider(self):
        cfg = Operator24Config(
            ai={"provider": "anthropic"},
            secrets={"openai": {"api_key": "sk-o"}, "anthropic": {"api_key": "sk-a"}},
        )
        assert cfg.provider_api_key() == "sk-a"


class TestLoadConfig:
    def test_missing_files_fall_back_to_defaults(self, tmp_path):
        cfg = load_config(tmp_path / "nope.yaml", tmp_path / "nope.secrets.yaml")
        assert cfg.server.port == 3001
        assert cfg.pipeline.default_mode == "plan"
        assert cfg.secrets.openai.api_key is None

    def test_reads_settings_and_secrets(self, tmp_path):
        settings = tmp_path / "operator24.settings.yaml"
        settings.write_text(
            "server:\n  port: 8080\n"
            "media:\n  max_frames: 4\n  ffmpeg_path: /usr/local/bin/ffmpeg\n"
            "pipeline:\n  default_mode: transcription\n"
        )
        secrets = tmp_path / "operator24.secrets.yaml"
        secrets.write_text("openai:\n  api_key: sk-from-file\n")

        cfg = load_config(settings, secrets)

        assert cfg.server.port == 8080
        assert cfg.media.max_frames == 4
        assert cfg.media.ffmpeg_path == "/usr/local/bin/ffmpeg"
        assert cfg.pipeline.default_mode == "transcription"
        assert cfg.secrets.openai.api_key == "sk-from-file"

    def test_empty_yaml_is_accepted(self, tmp_path):
        settings = tmp_path / "operator24.settings.yaml"
        settings.write_text("")
        cfg = load_config(settings, tmp_path / "missing.yaml")
        assert cfg.server.port == 3001

    def test_env_overrides_files(self, tmp_path, monkeypatch):
        secrets = tmp_path / "operator24.secrets.yaml"
        secrets.write_text("openai:\n  api_key: sk-from-file\n")
        monkeypatch.setenv("OPENAI_API_KEY", "sk-from-env")
        monkeypatch.setenv("ANTHROPIC_API_KEY", "sk-ant-env")
        monkeypatch.setenv("PORT", "10000")

        cfg = load_config(tmp_path / "missing.yaml", secrets)

        assert cfg.secrets.openai.api_key == "sk-from-env"
        assert cfg.secrets.anthropic.api_key == "sk-ant-env"
        assert cfg.server.port == 10000


class TestSingleton:
    def test_get_config_caches_and_resets(self, monkeypatch):
        original = cfg_module._config
        try:
            custom = Operator24Config(server={"port": 9999})
            set_config(custom)
            assert get_config() is custom

            monkeypatch.setattr(cfg_module, "load_config", lambda: Operator24Config())
            set_config(None)
            assert get_config().server.port == 3001
        finally:
            cfg_module._config = original
