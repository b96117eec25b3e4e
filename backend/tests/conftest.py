"""Test configuration and fixtures."""

from typing import List, Optional
from unittest.mock import MagicMock

import pytest
import requests
from fastapi.testclient import TestClient

from app.core.config.environment_config import EnvironmentConfig
from app.core.di.service_locator import ServiceLocator
from app.domain.entities.caption_entity import CaptionPrompt
from app.presentation.api.main import app


class FakeCaptionClient:
    """Stands in for a provider; records every prompt it receives."""

    provider = "fake"

    def __init__(self, text: str = "", error: Optional[Exception] = None):
        self.text = text
        self.error = error
        self.calls: List[CaptionPrompt] = []

    def generate(self, prompt: CaptionPrompt) -> str:
        self.calls.append(prompt)
        if self.error is not None:
            raise self.error
        return self.text


def make_response(status_code: int = 200, json_data=None, text: str = "") -> MagicMock:
    """Create a requests.Response double."""
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status_code
    resp.ok = status_code < 400
    resp.reason = "Internal Server Error" if status_code >= 500 else "OK"
    resp.text = text
    if json_data is None:
        resp.json.side_effect = ValueError("Expecting value")
    else:
        resp.json.return_value = json_data
    return resp


@pytest.fixture(autouse=True)
def reset_locator():
    """Each test starts with an empty service locator."""
    ServiceLocator.reset()
    yield
    ServiceLocator.reset()


@pytest.fixture
def config():
    return EnvironmentConfig(
        caption_provider="gemini",
        gemini_api_key="test-gemini-key",
        openai_api_key="test-openai-key",
    )


@pytest.fixture
def fake_client():
    return FakeCaptionClient(text="Kue ulang tahun enak! 🎂 #kueenak #umkm")


@pytest.fixture
def client(config, fake_client):
    """HTTP client with the locator wired to the fake provider."""
    ServiceLocator._config = config
    ServiceLocator._caption_client = fake_client
    return TestClient(app)


@pytest.fixture
def make_fake_client():
    return FakeCaptionClient


@pytest.fixture
def response_factory():
    return make_response
