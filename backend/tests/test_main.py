"""Tests for the liveness and health endpoints."""
from unittest.mock import AsyncMock, patch

from operator24.analysis.schemas import LIVENESS_MESSAGE


class TestLiveness:
    def test_root_returns_message(self, api_client):
        response = api_client.get("/")
        assert response.status_code == 200
        assert response.json() == {"messaggio": LIVENESS_MESSAGE}


class TestHealth:
    def test_health_reports_ffmpeg_and_provider(self, api_client, fake_provider):
        with patch(
            "operator24.main.ffmpeg_version", AsyncMock(return_value="ffmpeg version 6.1")
        ):
            response = api_client.get("/health")

        assert response.status_code == 200
        assert response.json() == {
            "status": "ok",
            "ffmpeg": "ffmpeg version 6.1",
            "provider": "fake",
            "provider_ok": None,
            "default_mode": "plan",
        }
        fake_provider.health_check.assert_not_called()

    def test_health_without_provider_or_ffmpeg(self, api_client, no_provider):
        with patch("operator24.main.ffmpeg_version", AsyncMock(return_value=None)):
            data = api_client.get("/health?check_provider=true").json()

        assert data["ffmpeg"] is None
        assert data["provider"] is None
        assert data["provider_ok"] is None

    def test_check_provider_reports_health_check(self, api_client, fake_provider):
        fake_provider.health_check.return_value = False
        with patch("operator24.main.ffmpeg_version", AsyncMock(return_value=None)):
            data = api_client.get("/health?check_provider=true").json()

        assert data["provider_ok"] is False
        fake_provider.health_check.assert_called_once_with()


class TestLifespan:
    def test_startup_builds_provider_from_config(self, test_config, no_provider):
        from fastapi.testclient import TestClient

        from operator24.ai_provider import OpenAIProvider, get_provider
        from operator24.main import app

        test_config.secrets.openai.api_key = "sk-test"
        with patch("operator24.main.ffmpeg_version", AsyncMock(return_value=None)):
            with TestClient(app) as client:
                assert client.get("/").status_code == 200
                assert isinstance(get_provider(), OpenAIProvider)
