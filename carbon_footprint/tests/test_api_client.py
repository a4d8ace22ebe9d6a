"""Tests for API client module."""

import pytest
import requests
from carbon_footprint.api_client import (
    ApiError,
    ApiTimeout,
    AuthenticationFailed,
    ClientSetupError,
    ExternalAPIClient,
    InvalidInput,
    NetworkFailure,
    ProviderErrorClassification,
    RateLimited,
    ServiceUnavailable,
    UnexpectedStatus,
)
from carbon_footprint.request_builder import build_request
from carbon_footprint.validator import validate_flight
from conftest import API_KEY, make_response, success_body


@pytest.fixture
def payload(credential):
    """Create sample request payload for testing."""
    return build_request(validate_flight("3", "LAX", "JFK", "economy"), credential)


def test_submit_success_returns_raw_body(api_client, http_session, payload):
    """Test 2xx bodies come back unchanged."""
    body = success_body()
    http_session.post.return_value = make_response(201, body)

    assert api_client.submit(payload) == body


def test_submit_sends_one_request(api_client, http_session, payload):
    """Test exactly one POST with body, headers and timeout."""
    api_client.submit(payload)

    http_session.post.assert_called_once()
    args, kwargs = http_session.post.call_args
    assert args[0] == "https://api.example.test/api/v1/estimates"
    assert kwargs["json"] == payload.to_json()
    assert kwargs["headers"]["Authorization"] == f"Bearer {API_KEY}"
    assert kwargs["timeout"] == 5.0


@pytest.mark.parametrize("status", [401, 403])
def test_authentication_failed(api_client, http_session, payload, status):
    """Test 401/403 map to AuthenticationFailed."""
    http_session.post.return_value = make_response(status, {"message": "Unauthorized"})

    with pytest.raises(AuthenticationFailed) as exc:
        api_client.submit(payload)
    assert exc.value.status_code == status
    assert exc.value.classification is ProviderErrorClassification.AUTHENTICATION_FAILED


@pytest.mark.parametrize("status", [400, 422])
def test_invalid_input_carries_body(api_client, http_session, payload, status):
    """Test 400/422 map to InvalidInput with the provider message."""
    message = "Validation failed: Legs require valid airport codes"
    http_session.post.return_value = make_response(status, {"message": message})

    with pytest.raises(InvalidInput) as exc:
        api_client.submit(payload)
    assert exc.value.message == message
    assert exc.value.details == {"message": message}


def test_rate_limited(api_client, http_session, payload):
    """Test 429 maps to RateLimited without retrying."""
    http_session.post.return_value = make_response(429, {"message": "Too Many Requests"})

    with pytest.raises(RateLimited):
        api_client.submit(payload)
    assert http_session.post.call_count == 1


@pytest.mark.parametrize("status", [500, 502, 503, 504])
def test_service_unavailable(api_client, http_session, payload, status):
    """Test 5xx maps to ServiceUnavailable, with or without a body."""
    http_session.post.return_value = make_response(status, text="<html>Bad Gateway</html>")

    with pytest.raises(ServiceUnavailable) as exc:
        api_client.submit(payload)
    assert exc.value.status_code == status
    assert http_session.post.call_count == 1


def test_unexpected_status(api_client, http_session, payload):
    """Test other statuses map to UnexpectedStatus with Unknown classification."""
    http_session.post.return_value = make_response(404)

    with pytest.raises(UnexpectedStatus) as exc:
        api_client.submit(payload)
    assert exc.value.classification is ProviderErrorClassification.UNKNOWN


@pytest.mark.parametrize("error", [requests.Timeout("read timed out"), requests.ConnectTimeout("slow")])
def test_timeout(api_client, http_session, payload, error):
    """Test timeouts map to ApiTimeout."""
    http_session.post.side_effect = error

    with pytest.raises(ApiTimeout):
        api_client.submit(payload)


@pytest.mark.parametrize(
    "error",
    [
        requests.ConnectionError("Connection refused"),
        requests.exceptions.SSLError("certificate verify failed"),
        requests.exceptions.InvalidURL("bad"),
    ],
)
def test_network_failure(api_client, http_session, payload, error):
    """Test transport failures map to NetworkFailure with a detail."""
    http_session.post.side_effect = error

    with pytest.raises(NetworkFailure) as exc:
        api_client.submit(payload)
    assert type(error).__name__ in exc.value.message


def test_non_json_success_left_for_interpreter(api_client, http_session, payload):
    """Test a 2xx non-JSON body is returned rather than raised."""
    http_session.post.return_value = make_response(200, text="<html>ok</html>")

    assert api_client.submit(payload) == {"raw": "<html>ok</html>"}


def test_errors_are_api_errors(api_client, http_session, payload):
    """Test every failure shares the ApiError base."""
    http_session.post.return_value = make_response(503)
    with pytest.raises(ApiError):
        api_client.submit(payload)


@pytest.mark.parametrize("base_url", ["", "carboninterface.com", "ftp://example.com", "https://"])
def test_invalid_base_url_is_setup_error(base_url):
    """Test unusable base URLs fail at construction."""
    with pytest.raises(ClientSetupError):
        ExternalAPIClient(base_url=base_url)


def test_default_session_has_no_retries():
    """Test the real session is mounted with zero retries."""
    client = ExternalAPIClient(base_url="https://www.carboninterface.com")
    try:
        adapter = client.session.get_adapter("https://www.carboninterface.com/api/v1/estimates")
        assert adapter.max_retries.total == 0
    finally:
        client.close()
