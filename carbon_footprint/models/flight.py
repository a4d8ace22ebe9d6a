"""Flight input model."""

from enum import Enum
from pydantic import BaseModel, Field, field_validator, model_validator


class CabinClass(str, Enum):
    """Fare category sent with each leg."""

    ECONOMY = "economy"
    PREMIUM = "premium"
    BUSINESS = "business"
    FIRST = "first"


class DistanceUnit(str, Enum):
    """Unit the provider reports distances in."""

    KM = "km"
    MI = "mi"


class FlightInput(BaseModel):
    """A validated single-leg flight query."""

    passengers: int = Field(ge=1)
    departure: str = Field(pattern=r"^[A-Z]{3}$")
    destination: str = Field(pattern=r"^[A-Z]{3}$")
    cabin_class: CabinClass = CabinClass.ECONOMY
    distance_unit: DistanceUnit = DistanceUnit.KM

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "example": {
                "passengers": 2,
                "departure": "LHR",
                "destination": "JFK",
                "cabin_class": "economy",
                "distance_unit": "km",
            }
        },
    }

    @field_validator("departure", "destination", mode="before")
    @classmethod
    def _upper(cls, value):
        if isinstance(value, str):
            return value.strip().upper()
        return value

    @model_validator(mode="after")
    def _distinct_airports(self) -> "FlightInput":
        if self.departure == self.destination:
            raise ValueError("departure and destination must differ")
        return self

    @property
    def route(self) -> str:
        """Route label such as ``LHR-JFK``."""
        return f"{self.departure}-{self.destination}"
