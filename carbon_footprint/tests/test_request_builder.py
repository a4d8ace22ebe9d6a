"""Tests for request builder module."""

import pytest
from pydantic import SecretStr
from carbon_footprint.request_builder import build_request
from carbon_footprint.validator import validate_flight
from conftest import API_KEY


@pytest.fixture
def sample_flight():
    """Create sample flight for testing."""
    return validate_flight("3", "LAX", "JFK", "economy")


def test_build_request_maps_fields(sample_flight, credential):
    """Test flight fields land on the provider schema keys."""
    payload = build_request(sample_flight, credential)
    body = payload.to_json()

    assert body == {
        "type": "flight",
        "passengers": 3,
        "legs": [
            {"departure_airport": "LAX", "destination_airport": "JFK", "cabin_class": "economy"}
        ],
        "distance_unit": "km",
    }


def test_build_request_bearer_header(sample_flight, credential):
    """Test the credential is attached as a bearer authorization value."""
    headers = build_request(sample_flight, credential).headers()

    assert headers["Authorization"] == f"Bearer {API_KEY}"
    assert headers["Content-Type"] == "application/json"


def test_build_request_is_idempotent(sample_flight, credential):
    """Test repeated builds yield identical payloads."""
    first = build_request(sample_flight, credential)
    second = build_request(sample_flight, credential)

    assert first == second
    assert first.to_json() == second.to_json()
    assert first.headers() == second.headers()


def test_payload_repr_masks_credential(sample_flight, credential):
    """Test the payload never prints the key."""
    payload = build_request(sample_flight, credential)

    assert API_KEY not in repr(payload)
    assert API_KEY not in str(payload)
    assert API_KEY not in str(payload.to_json())


def test_build_request_cabin_and_unit():
    """Test cabin class and distance unit pass through."""
    flight = validate_flight("1", "lhr", "sfo", "Business", "mi")
    body = build_request(flight, SecretStr("k")).to_json()

    assert body["legs"][0]["cabin_class"] == "business"
    assert body["legs"][0]["departure_airport"] == "LHR"
    assert body["distance_unit"] == "mi"
