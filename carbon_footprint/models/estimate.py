"""Emissions estimate model."""

from typing import Optional
from pydantic import BaseModel, Field
from .flight import DistanceUnit


class EmissionsEstimate(BaseModel):
    """Carbon and distance figures returned by the provider for one flight."""

    carbon_kg: float = Field(ge=0)
    distance_value: float = Field(ge=0)
    distance_unit: DistanceUnit
    carbon_g: Optional[float] = Field(default=None, ge=0)
    carbon_lb: Optional[float] = Field(default=None, ge=0)
    carbon_mt: Optional[float] = Field(default=None, ge=0)
    estimated_at: Optional[str] = None

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "carbon_kg": 1077.9,
                "carbon_g": 1077900.0,
                "carbon_lb": 2376.37,
                "carbon_mt": 1.08,
                "distance_value": 5564.8,
                "distance_unit": "km",
                "estimated_at": "2024-03-01T12:00:00.000Z",
            }
        },
    }
