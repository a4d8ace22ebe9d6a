"""Shared fixtures for carbon footprint tests."""

import json
import logging
from unittest.mock import MagicMock

import pytest
import requests
from pydantic import SecretStr

from carbon_footprint.api_client import ExternalAPIClient
from carbon_footprint.config import Config

API_KEY = "sk-test-3f9a1c77e2"


def make_response(status_code: int, body=None, text: str = None) -> requests.Response:
    """Build a real requests.Response without touching the network."""
    response = requests.Response()
    response.status_code = status_code
    response.encoding = "utf-8"
    if body is not None:
        response._content = json.dumps(body).encode("utf-8")
        response.headers["Content-Type"] = "application/json"
    elif text is not None:
        response._content = text.encode("utf-8")
        response.headers["Content-Type"] = "text/html"
    else:
        response._content = b""
    return response


def success_body(carbon_kg=150.5, distance_value=2475.0, distance_unit="km"):
    """Provider success envelope as returned by POST /api/v1/estimates."""
    return {
        "data": {
            "id": "2d968ab6-b8ab-4a56-8e87-fd6e0a1b5e5c",
            "type": "estimate",
            "attributes": {
                "passengers": 3,
                "legs": [
                    {"departure_airport": "LAX", "destination_airport": "JFK", "cabin_class": "economy"}
                ],
                "distance_value": distance_value,
                "distance_unit": distance_unit,
                "estimated_at": "2024-03-01T12:00:00.000Z",
                "carbon_g": carbon_kg * 1000,
                "carbon_lb": round(carbon_kg * 2.20462, 2),
                "carbon_kg": carbon_kg,
                "carbon_mt": round(carbon_kg / 1000, 2),
            },
        }
    }


@pytest.fixture
def credential():
    """Provider API key."""
    return SecretStr(API_KEY)


@pytest.fixture
def config():
    """Configuration isolated from the environment defaults."""
    return Config(
        API_BASE_URL="https://api.example.test",
        REQUEST_TIMEOUT=5.0,
        DEFAULT_DISTANCE_UNIT="km",
        LOG_FILE="",
    )


@pytest.fixture
def http_session():
    """Stand-in for requests.Session; tests set post.return_value or side_effect."""
    session = MagicMock(spec=requests.Session)
    session.post.return_value = make_response(200, success_body())
    return session


@pytest.fixture
def api_client(config, http_session):
    """API client wired to the stand-in session."""
    return ExternalAPIClient(
        base_url=config.API_BASE_URL,
        endpoint=config.ENDPOINT_ESTIMATES,
        timeout=config.REQUEST_TIMEOUT,
        session=http_session,
    )


@pytest.fixture
def restore_root_logger():
    """Put the root logger back as it was."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield root
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers = handlers
    root.setLevel(level)
