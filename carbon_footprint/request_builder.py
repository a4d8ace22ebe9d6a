"""Maps a validated flight onto the provider's estimate request."""

from pydantic import SecretStr
from .config import ESTIMATE_TYPE
from .models.flight import FlightInput
from .models.request import EstimateLeg, EstimateRequestBody, RequestPayload


def build_request(flight: FlightInput, credential: SecretStr) -> RequestPayload:
    """
    Build the request payload for one flight estimate.

    Args:
        flight: Validated flight query
        credential: Provider API key

    Returns:
        RequestPayload with the JSON body and bearer authorization value
    """
    leg = EstimateLeg(
        departure_airport=flight.departure,
        destination_airport=flight.destination,
        cabin_class=flight.cabin_class,
    )
    body = EstimateRequestBody(
        type=ESTIMATE_TYPE,
        passengers=flight.passengers,
        legs=[leg],
        distance_unit=flight.distance_unit,
    )
    return RequestPayload(
        body=body,
        authorization=SecretStr(f"Bearer {credential.get_secret_value()}"),
    )
