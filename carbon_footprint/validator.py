"""Validator module for operator-supplied flight parameters."""

import logging
import re
from typing import Optional
from .config import CABIN_CLASSES, DEFAULT_CABIN_CLASS, DISTANCE_UNITS, IATA_CODE_LENGTH
from .models.flight import CabinClass, DistanceUnit, FlightInput

logger = logging.getLogger(__name__)

_PASSENGERS_RE = re.compile(r"^\+?[0-9]+$")


class FlightValidationError(ValueError):
    """Raised when operator input cannot form a valid flight query."""

    field = "flight"


class InvalidPassengerCount(FlightValidationError):
    """Passenger count is not a base-10 integer of at least 1."""

    field = "passengers"

    def __init__(self, raw: str):
        super().__init__(f"Invalid passenger count: {raw!r}")
        self.raw = raw


class InvalidAirportCode(FlightValidationError):
    """Airport code is not exactly three letters."""

    def __init__(self, which: str, raw: str):
        super().__init__(f"Invalid {which} airport code: {raw!r}")
        self.which = which
        self.field = which
        self.raw = raw


class SameAirport(FlightValidationError):
    """Departure and destination are the same airport."""

    field = "destination"

    def __init__(self, code: str):
        super().__init__(f"Departure and destination are both {code}")
        self.code = code


class UnknownCabinClass(FlightValidationError):
    """Cabin class is not one of the supported values."""

    field = "cabin_class"

    def __init__(self, raw: str):
        super().__init__(f"Unknown cabin class: {raw!r}")
        self.raw = raw


class UnknownDistanceUnit(FlightValidationError):
    """Distance unit is not one of the supported values."""

    field = "distance_unit"

    def __init__(self, raw: str):
        super().__init__(f"Unknown distance unit: {raw!r}")
        self.raw = raw


def parse_passengers(raw: str) -> int:
    """Parse a base-10 passenger count of at least 1."""
    text = (raw or "").strip()
    if not _PASSENGERS_RE.match(text):
        raise InvalidPassengerCount(raw)
    count = int(text)
    if count < 1:
        raise InvalidPassengerCount(raw)
    return count


def normalize_airport_code(raw: str, which: str) -> str:
    """Return the uppercase form of a three-letter airport code."""
    code = (raw or "").strip()
    if len(code) != IATA_CODE_LENGTH or not (code.isascii() and code.isalpha()):
        raise InvalidAirportCode(which, raw)
    return code.upper()


def parse_cabin_class(raw: Optional[str]) -> CabinClass:
    """Match a cabin class case-insensitively; empty means economy."""
    text = (raw or "").strip().lower() or DEFAULT_CABIN_CLASS
    if text not in CABIN_CLASSES:
        raise UnknownCabinClass(raw)
    return CabinClass(text)


def parse_distance_unit(raw: Optional[str], default: str = "km") -> DistanceUnit:
    """Match a distance unit case-insensitively; empty means the default."""
    text = (raw or "").strip().lower() or default
    if text not in DISTANCE_UNITS:
        raise UnknownDistanceUnit(raw)
    return DistanceUnit(text)


def validate_flight(
    raw_passengers: str,
    raw_departure: str,
    raw_destination: str,
    raw_cabin_class: Optional[str],
    raw_distance_unit: Optional[str] = None,
) -> FlightInput:
    """
    Validate raw operator strings into a FlightInput.

    Checks run in order (passengers, departure, destination, same airport,
    cabin class, distance unit) and the first failure is raised.

    Args:
        raw_passengers: Passenger count as typed
        raw_departure: Departure airport code as typed
        raw_destination: Destination airport code as typed
        raw_cabin_class: Cabin class as typed (empty defaults to economy)
        raw_distance_unit: Distance unit as typed (empty defaults to km)

    Returns:
        Immutable FlightInput

    Raises:
        FlightValidationError: One of its subclasses naming the invalid field
    """
    passengers = parse_passengers(raw_passengers)
    departure = normalize_airport_code(raw_departure, "departure")
    destination = normalize_airport_code(raw_destination, "destination")
    if departure == destination:
        raise SameAirport(departure)
    cabin_class = parse_cabin_class(raw_cabin_class)
    distance_unit = parse_distance_unit(raw_distance_unit)

    flight = FlightInput(
        passengers=passengers,
        departure=departure,
        destination=destination,
        cabin_class=cabin_class,
        distance_unit=distance_unit,
    )
    logger.debug(f"Validated flight {flight.route} for {passengers} passenger(s)")
    return flight
