"""Carbon footprint models package."""

from .flight import CabinClass, DistanceUnit, FlightInput
from .estimate import EmissionsEstimate
from .request import EstimateLeg, EstimateRequestBody, RequestPayload

__all__ = [
    "CabinClass",
    "DistanceUnit",
    "FlightInput",
    "EmissionsEstimate",
    "EstimateLeg",
    "EstimateRequestBody",
    "RequestPayload",
]
