"""Shared test fixtures and configuration for backend tests."""
from pathlib import Path
from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from operator24.ai_provider.base import AIProvider
from operator24.ai_provider.resolver import get_provider, set_provider
from operator24.config import MediaSettings, Operator24Config, set_config
from operator24.main import app


@pytest.fixture
def work_dir(tmp_path) -> Path:
    """Base directory under which request workspaces are created."""
    return tmp_path / "work"


@pytest.fixture
def test_config(work_dir):
    """Install a default config pointing scratch space at ``work_dir``."""
    config = Operator24Config(media=MediaSettings(work_dir=str(work_dir)))
    set_config(config)
    yield config
    set_config(None)


@pytest.fixture
def fake_provider():
    """A mock AIProvider installed as the active provider."""
    provider = MagicMock(spec=AIProvider)
    provider.name = "fake"
    original = get_provider()
    set_provider(provider)
    yield provider
    set_provider(original)


@pytest.fixture
def no_provider():
    original = get_provider()
    set_provider(None)
    yield
    set_provider(original)


@pytest.fixture
def api_client(test_config):
    """Provide a TestClient for the main FastAPI app.

    The lifespan is not entered, so no real provider is built from the
    environment; tests install ``fake_provider`` instead.
    """
    return TestClient(app)
