"""Turns a provider success body into an EmissionsEstimate."""

import logging
from typing import Any, Dict, Optional
from pydantic import BaseModel, ValidationError, field_validator
from .api_client import ProviderMessageError, extract_error_message
from .models.estimate import EmissionsEstimate
from .models.flight import DistanceUnit

logger = logging.getLogger(__name__)

NUMERIC_FIELDS = ("carbon_kg", "distance_value", "carbon_g", "carbon_lb", "carbon_mt")


class InterpretationError(Exception):
    """Raised when a success response does not honour the provider contract."""

    def __init__(self, message: str, field: str):
        super().__init__(message)
        self.field = field


class MalformedPayload(InterpretationError):
    """A required field is missing or has the wrong type."""

    def __init__(self, field: str, reason: str = "missing or not parseable"):
        super().__init__(f"Malformed provider response: '{field}' is {reason}", field)
        self.reason = reason


class NegativeValue(InterpretationError):
    """A numeric field is negative."""

    def __init__(self, field: str, value: float):
        super().__init__(f"Provider returned a negative value for '{field}': {value}", field)
        self.value = value


class _EstimateAttributes(BaseModel):
    """Wire shape of ``data.attributes``; sign is checked separately."""

    carbon_kg: float
    distance_value: float
    distance_unit: DistanceUnit
    carbon_g: Optional[float] = None
    carbon_lb: Optional[float] = None
    carbon_mt: Optional[float] = None
    estimated_at: Optional[str] = None

    model_config = {"allow_inf_nan": False, "extra": "ignore"}

    @field_validator(*NUMERIC_FIELDS, mode="before")
    @classmethod
    def _reject_bool(cls, value):
        if isinstance(value, bool):
            raise ValueError("boolean is not a number")
        return value


def _attributes(payload: Any) -> Dict:
    """Locate the attributes object in either envelope or flat form."""
    if not isinstance(payload, dict):
        raise MalformedPayload("data", "not a JSON object")

    # A null or absent data block with a message is a provider error, as in a 2xx error envelope
    message = payload.get("message")
    has_message = isinstance(message, str) and bool(message.strip())
    if has_message and not payload.get("data") and "carbon_kg" not in payload:
        message = extract_error_message(payload, "Provider returned an error")
        logger.warning(f"Provider error payload: {message}")
        raise ProviderMessageError(message, details=payload)

    if "data" not in payload:
        return payload

    data = payload.get("data")
    if not isinstance(data, dict):
        raise MalformedPayload("data", "not a JSON object")
    attributes = data.get("attributes")
    if not isinstance(attributes, dict):
        raise MalformedPayload("data.attributes", "missing or not a JSON object")
    return attributes


def interpret_response(payload: Dict) -> EmissionsEstimate:
    """
    Interpret a raw success body.

    Args:
        payload: Decoded JSON returned by ExternalAPIClient.submit

    Returns:
        EmissionsEstimate

    Raises:
        MalformedPayload: A required field is absent or unparseable
        NegativeValue: A numeric field is negative
        ProviderMessageError: The body is a provider error message
    """
    attributes = _attributes(payload)

    try:
        parsed = _EstimateAttributes.model_validate(attributes)
    except ValidationError as e:
        first = e.errors()[0]
        field = ".".join(str(part) for part in first["loc"]) or "data"
        logger.warning(f"Malformed estimate field {field}: {first['msg']}")
        raise MalformedPayload(field) from e

    for name in NUMERIC_FIELDS:
        value = getattr(parsed, name)
        if value is not None and value < 0:
            logger.warning(f"Negative {name} in provider response")
            raise NegativeValue(name, value)

    return EmissionsEstimate(**parsed.model_dump())
