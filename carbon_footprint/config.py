"""Configuration module for constants, provider endpoints, and settings."""

from typing import List, Optional
from pydantic import SecretStr, field_validator
from pydantic_settings import BaseSettings


# Request constants - MUST MATCH the Carbon Interface estimate schema
ESTIMATE_TYPE = "flight"
CABIN_CLASSES: List[str] = ["economy", "premium", "business", "first"]
DISTANCE_UNITS: List[str] = ["km", "mi"]
DEFAULT_CABIN_CLASS = "economy"

# IATA airport codes are exactly three letters
IATA_CODE_LENGTH = 3


class Config(BaseSettings):
    """Application configuration with environment variable support."""

    # Provider
    API_BASE_URL: str = "https://www.carboninterface.com"
    ENDPOINT_ESTIMATES: str = "/api/v1/estimates"
    REQUEST_TIMEOUT: float = 10.0  # seconds

    # Optional pre-seeded credential; the session prompts when unset
    CARBON_INTERFACE_API_KEY: Optional[SecretStr] = None

    # Query defaults
    DEFAULT_DISTANCE_UNIT: str = "km"

    # Logging
    LOG_LEVEL: str = "WARNING"
    LOG_FILE: str = "carbon_footprint.log"

    model_config = {
        "env_file": ".env",
        "env_file_encoding": "utf-8",
        "extra": "ignore",
    }

    @field_validator("REQUEST_TIMEOUT")
    @classmethod
    def _positive_timeout(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("REQUEST_TIMEOUT must be greater than zero")
        return value

    @field_validator("DEFAULT_DISTANCE_UNIT")
    @classmethod
    def _known_unit(cls, value: str) -> str:
        unit = value.strip().lower()
        if unit not in DISTANCE_UNITS:
            raise ValueError(f"DEFAULT_DISTANCE_UNIT must be one of {DISTANCE_UNITS}")
        return unit

    @property
    def estimates_url(self) -> str:
        """Full URL of the estimates endpoint."""
        return f"{self.API_BASE_URL.rstrip('/')}{self.ENDPOINT_ESTIMATES}"
