"""Formats estimates and errors into operator-facing text."""

from typing import Union
from rich import box
from rich.table import Table
from .api_client import (
    ApiError,
    ApiTimeout,
    AuthenticationFailed,
    InvalidInput,
    NetworkFailure,
    ProviderMessageError,
    RateLimited,
    ServiceUnavailable,
)
from .config import CABIN_CLASSES, DISTANCE_UNITS
from .interpreter import InterpretationError, MalformedPayload, NegativeValue
from .models.estimate import EmissionsEstimate
from .utils import format_quantity, redact
from .validator import (
    FlightValidationError,
    InvalidAirportCode,
    InvalidPassengerCount,
    SameAirport,
    UnknownCabinClass,
    UnknownDistanceUnit,
)

Result = Union[EmissionsEstimate, ApiError, InterpretationError, FlightValidationError]


def render_estimate(estimate: EmissionsEstimate) -> str:
    unit = estimate.distance_unit.value
    return (
        f"Estimated carbon emissions: {format_quantity(estimate.carbon_kg)} kg CO2 "
        f"over {format_quantity(estimate.distance_value)} {unit}"
    )


def render_validation_error(error: FlightValidationError) -> str:
    if isinstance(error, InvalidPassengerCount):
        return "Invalid passengers: enter a whole number of at least 1."
    if isinstance(error, InvalidAirportCode):
        return f"Invalid {error.which} airport code: enter exactly 3 letters, e.g. LHR."
    if isinstance(error, SameAirport):
        return f"Invalid destination: it must differ from the departure airport ({error.code})."
    if isinstance(error, UnknownCabinClass):
        return f"Invalid cabin class: choose one of {', '.join(CABIN_CLASSES)}."
    if isinstance(error, UnknownDistanceUnit):
        return f"Invalid distance unit: choose one of {', '.join(DISTANCE_UNITS)}."
    return f"Invalid {error.field}: {error}"


def render_api_error(error: ApiError) -> str:
    if isinstance(error, AuthenticationFailed):
        return "Authentication failed: check your API key and try again."
    if isinstance(error, ApiTimeout):
        return "The estimate service did not respond in time. Try again later."
    if isinstance(error, NetworkFailure):
        return (
            "Could not reach the estimate service. Check your network connection "
            f"({error.message})."
        )
    if isinstance(error, InvalidInput):
        return f"The estimate service rejected the flight details: {error.message}"
    if isinstance(error, RateLimited):
        return "Rate limit reached: wait a moment before requesting another estimate."
    if isinstance(error, ServiceUnavailable):
        return f"The estimate service is unavailable (HTTP {error.status_code}). Try again later."
    if isinstance(error, ProviderMessageError):
        return f"The estimate service returned an error: {error.message}"
    status = f" (HTTP {error.status_code})" if error.status_code else ""
    return f"Unexpected response from the estimate service{status}: {error.message}"


def render_interpretation_error(error: InterpretationError) -> str:
    if isinstance(error, NegativeValue):
        return (
            f"The estimate service reported a negative '{error.field}'. "
            "The result was discarded; please report this provider error."
        )
    if isinstance(error, MalformedPayload):
        return (
            f"The estimate service sent an unreadable response ('{error.field}' is {error.reason}). "
            "Please report this provider error."
        )
    return f"The estimate service sent an invalid response: {error}"


def render(result: Result, secret: str = "") -> str:
    """
    Render any pipeline outcome as one line of text.

    Error lines are prefixed with ``Error:``. Provider text (rejection reasons,
    error messages, transport details) can echo the credential, so every
    occurrence of ``secret`` is masked before returning.

    Args:
        result: Estimate or error from one query
        secret: Raw credential to mask; empty disables masking
    """
    if isinstance(result, EmissionsEstimate):
        text = render_estimate(result)
    elif isinstance(result, FlightValidationError):
        text = f"Error: {render_validation_error(result)}"
    elif isinstance(result, ApiError):
        text = f"Error: {render_api_error(result)}"
    elif isinstance(result, InterpretationError):
        text = f"Error: {render_interpretation_error(result)}"
    else:
        raise TypeError(f"Cannot render {type(result).__name__}")
    return redact(text, secret)


def render_table(estimate: EmissionsEstimate) -> Table:
    """Metric/Value/Unit table of every figure the provider returned."""
    table = Table(box=box.SIMPLE_HEAD)
    table.add_column("Metric")
    table.add_column("Value", justify="right")
    table.add_column("Unit")

    if estimate.carbon_g is not None:
        table.add_row("Carbon emissions", format_quantity(estimate.carbon_g, thousands=True), "g")
    table.add_row("Carbon emissions", format_quantity(estimate.carbon_kg, thousands=True), "kg")
    if estimate.carbon_lb is not None:
        table.add_row("Carbon emissions", format_quantity(estimate.carbon_lb, thousands=True), "lb")
    if estimate.carbon_mt is not None:
        table.add_row("Carbon emissions", format_quantity(estimate.carbon_mt, thousands=True), "t")
    table.add_row(
        "Distance",
        format_quantity(estimate.distance_value, thousands=True),
        estimate.distance_unit.value,
    )
    return table
