"""Estimate session: runs one flight query at a time through the pipeline."""

import logging
from dataclasses import dataclass
from typing import Optional
from pydantic import SecretStr
from .api_client import ApiError, ExternalAPIClient
from .config import Config
from .interpreter import InterpretationError, interpret_response
from .models.estimate import EmissionsEstimate
from .presenter import Result, render
from .request_builder import build_request
from .validator import FlightValidationError, validate_flight

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class QueryOutcome:
    """Result of one query cycle and its rendered line."""

    result: Result
    text: str

    @property
    def ok(self) -> bool:
        return isinstance(self.result, EmissionsEstimate)

    @property
    def estimate(self) -> Optional[EmissionsEstimate]:
        return self.result if self.ok else None


class EstimateSession:
    """Holds the credential and API client for a sequence of queries."""

    def __init__(
        self,
        api_client: ExternalAPIClient,
        credential: SecretStr,
        config: Optional[Config] = None,
    ):
        """
        Initialize estimate session.

        Args:
            api_client: Provider client, reused for every query
            credential: API key, set once and read-only afterwards
            config: Configuration object

        Raises:
            ValueError: If the credential is empty
        """
        if not credential.get_secret_value().strip():
            raise ValueError("API key must not be empty")
        self.api_client = api_client
        self._credential = credential
        self.config = config or Config()

    @classmethod
    def from_config(cls, config: Config, credential: SecretStr) -> "EstimateSession":
        """
        Build a session and its API client from configuration.

        Raises:
            ClientSetupError: If the HTTP client cannot be initialised
        """
        api_client = ExternalAPIClient(
            base_url=config.API_BASE_URL,
            endpoint=config.ENDPOINT_ESTIMATES,
            timeout=config.REQUEST_TIMEOUT,
        )
        return cls(api_client, credential, config)

    def estimate(
        self,
        raw_passengers: str,
        raw_departure: str,
        raw_destination: str,
        raw_cabin_class: Optional[str],
        raw_distance_unit: Optional[str] = None,
    ) -> EmissionsEstimate:
        """
        Validate, build, submit and interpret one flight query.

        Raises:
            FlightValidationError: Operator input is invalid (nothing is sent)
            ApiError: The provider call failed
            InterpretationError: The success body broke the provider contract
        """
        flight = validate_flight(
            raw_passengers,
            raw_departure,
            raw_destination,
            raw_cabin_class,
            raw_distance_unit or self.config.DEFAULT_DISTANCE_UNIT,
        )
        payload = build_request(flight, self._credential)
        raw = self.api_client.submit(payload)
        estimate = interpret_response(raw)
        logger.info(
            f"Estimate for {flight.route}: {estimate.carbon_kg} kg over "
            f"{estimate.distance_value} {estimate.distance_unit.value}"
        )
        return estimate

    def run_query(
        self,
        raw_passengers: str,
        raw_departure: str,
        raw_destination: str,
        raw_cabin_class: Optional[str],
        raw_distance_unit: Optional[str] = None,
    ) -> QueryOutcome:
        """Run one query cycle; every failure is rendered, never raised."""
        try:
            result: Result = self.estimate(
                raw_passengers, raw_departure, raw_destination, raw_cabin_class, raw_distance_unit
            )
        except FlightValidationError as e:
            logger.info(f"Rejected input: {type(e).__name__}")
            result = e
        except ApiError as e:
            logger.warning(f"Provider call failed: {type(e).__name__} ({e.classification.value})")
            result = e
        except InterpretationError as e:
            logger.error(f"Provider contract violation: {e}")
            result = e

        text = render(result, self._credential.get_secret_value())
        return QueryOutcome(result=result, text=text)

    def close(self) -> None:
        self.api_client.close()
