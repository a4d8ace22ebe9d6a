"""API client for the Carbon Interface estimates endpoint."""

import logging
from enum import Enum
from typing import Dict, Optional
from urllib.parse import urlparse
import requests
from requests.adapters import HTTPAdapter
from .models.request import RequestPayload

logger = logging.getLogger(__name__)


class ProviderErrorClassification(str, Enum):
    """Coarse classification of a failed provider call."""

    AUTHENTICATION_FAILED = "AuthenticationFailed"
    INVALID_INPUT = "InvalidInput"
    RATE_LIMITED = "RateLimited"
    SERVICE_UNAVAILABLE = "ServiceUnavailable"
    UNKNOWN = "Unknown"


class ClientSetupError(Exception):
    """Raised when the HTTP client cannot be initialised."""


class ApiError(Exception):
    """Raised when the provider call fails before a usable body is received."""

    classification = ProviderErrorClassification.UNKNOWN

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        details: Optional[Dict] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details or {}


class ApiTimeout(ApiError):
    """No response arrived within the timeout window."""

    classification = ProviderErrorClassification.SERVICE_UNAVAILABLE


class NetworkFailure(ApiError):
    """Transport-level failure: connection refused, DNS, TLS."""

    classification = ProviderErrorClassification.SERVICE_UNAVAILABLE


class AuthenticationFailed(ApiError):
    """HTTP 401/403."""

    classification = ProviderErrorClassification.AUTHENTICATION_FAILED


class InvalidInput(ApiError):
    """HTTP 400/422; the provider rejected the request body."""

    classification = ProviderErrorClassification.INVALID_INPUT


class RateLimited(ApiError):
    """HTTP 429."""

    classification = ProviderErrorClassification.RATE_LIMITED


class ServiceUnavailable(ApiError):
    """HTTP 5xx."""

    classification = ProviderErrorClassification.SERVICE_UNAVAILABLE


class UnexpectedStatus(ApiError):
    """Any other non-2xx status."""


class ProviderMessageError(ApiError):
    """A response body carrying a provider error message instead of data."""


def extract_error_message(body: Dict, default: str) -> str:
    """Pull the provider's error description out of an error body."""
    if not isinstance(body, dict):
        return default
    for key in ("message", "error", "detail"):
        value = body.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    errors = body.get("errors")
    if isinstance(errors, list) and errors:
        return "; ".join(str(e) for e in errors)
    return default


def _error_body(response: requests.Response) -> Dict:
    """Best-effort JSON decode of an error response."""
    if not response.content:
        return {}
    try:
        body = response.json()
    except ValueError:
        return {"raw": response.text.strip()}
    return body if isinstance(body, dict) else {"raw": body}


class ExternalAPIClient:
    """HTTP client for the emissions-estimation provider."""

    def __init__(
        self,
        base_url: str,
        endpoint: str = "/api/v1/estimates",
        timeout: float = 10.0,
        session: Optional[requests.Session] = None,
    ):
        """
        Initialize API client.

        Args:
            base_url: Base URL of the provider
            endpoint: Estimates endpoint path
            timeout: Request timeout in seconds
            session: Optional pre-built session (tests inject a stand-in)

        Raises:
            ClientSetupError: If the base URL is unusable or the session cannot be created
        """
        parsed = urlparse(base_url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ClientSetupError(f"Invalid provider base URL: {base_url!r}")
        if timeout <= 0:
            raise ClientSetupError(f"Timeout must be positive, got {timeout}")

        self.base_url = base_url.rstrip("/")
        self.endpoint = endpoint
        self.timeout = timeout

        if session is None:
            try:
                session = requests.Session()
                # Single attempt per call; no retries on any status or error
                adapter = HTTPAdapter(max_retries=0)
                session.mount("http://", adapter)
                session.mount("https://", adapter)
            except Exception as e:
                raise ClientSetupError(f"Could not initialise HTTP session: {e}") from e
        self.session = session

    @property
    def url(self) -> str:
        return f"{self.base_url}{self.endpoint}"

    def _make_request(self, payload: RequestPayload) -> requests.Response:
        """
        Send the estimate request, mapping transport failures.

        Raises:
            ApiTimeout: No response within the timeout
            NetworkFailure: Connection, DNS or TLS failure
        """
        try:
            return self.session.post(
                self.url,
                json=payload.to_json(),
                headers=payload.headers(),
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            logger.error(f"Request timeout after {self.timeout}s for {self.endpoint}")
            raise ApiTimeout(f"No response within {self.timeout:g} seconds") from e
        except requests.RequestException as e:
            logger.error(f"Request error for {self.endpoint}: {type(e).__name__}")
            raise NetworkFailure(f"{type(e).__name__}: {e}") from e

    def submit(self, payload: RequestPayload) -> Dict:
        """
        Submit one estimate request.

        Args:
            payload: Built request payload

        Returns:
            Raw decoded success body, not yet interpreted

        Raises:
            ApiError: One of its subclasses for every non-success outcome
        """
        logger.info(f"Requesting {payload.body.type} estimate from {self.base_url}")
        response = self._make_request(payload)
        status = response.status_code

        if 200 <= status < 300:
            if not response.content:
                return {}
            try:
                return response.json()
            except ValueError:
                # Left for the interpreter to report as a malformed body
                logger.warning(f"{status} response from {self.endpoint} is not JSON")
                return {"raw": response.text}

        body = _error_body(response)

        # Handle authentication errors
        if status in (401, 403):
            logger.error(f"{status} from {self.endpoint}: credential rejected")
            message = extract_error_message(body, "The API key was rejected")
            raise AuthenticationFailed(message, status, body)

        # Handle validation errors
        if status in (400, 422):
            message = extract_error_message(body, "The provider rejected the request")
            logger.warning(f"{status} from {self.endpoint}: {message}")
            raise InvalidInput(message, status, body)

        if status == 429:
            logger.warning(f"429 from {self.endpoint}: rate limited")
            raise RateLimited(extract_error_message(body, "Too many requests"), status, body)

        if status >= 500:
            logger.error(f"{status} from {self.endpoint}")
            raise ServiceUnavailable(
                extract_error_message(body, f"Provider returned HTTP {status}"), status, body
            )

        logger.error(f"Unexpected {status} from {self.endpoint}")
        raise UnexpectedStatus(
            extract_error_message(body, f"Unexpected HTTP status {status}"), status, body
        )

    def close(self) -> None:
        """Close the underlying HTTP session."""
        self.session.close()
