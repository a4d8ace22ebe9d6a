"""Provider request models."""

from typing import Dict, List
from pydantic import BaseModel, SecretStr
from .flight import CabinClass, DistanceUnit


class EstimateLeg(BaseModel):
    """One leg of a flight estimate request."""

    departure_airport: str
    destination_airport: str
    cabin_class: CabinClass

    model_config = {"frozen": True}


class EstimateRequestBody(BaseModel):
    """JSON body of ``POST /api/v1/estimates`` for a flight."""

    type: str
    passengers: int
    legs: List[EstimateLeg]
    distance_unit: DistanceUnit

    model_config = {"frozen": True}


class RequestPayload(BaseModel):
    """Request body plus the bearer authorization value."""

    body: EstimateRequestBody
    authorization: SecretStr

    model_config = {"frozen": True}

    def to_json(self) -> Dict:
        """Body as a JSON-ready dict."""
        return self.body.model_dump(mode="json")

    def headers(self) -> Dict[str, str]:
        """HTTP headers, including the unmasked authorization value."""
        return {
            "Authorization": self.authorization.get_secret_value(),
            "Content-Type": "application/json",
        }
