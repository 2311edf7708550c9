from typing import Literal

from pydantic import BaseModel, Field, computed_field


class NormalizedFlight(BaseModel):
    """Canonical flight shown in results, ranked and relayed to the webhook."""

    signature: str = Field(min_length=1)
    airline: str
    flight_number: str = Field(alias="flightNumber")
    origin: str
    destination: str
    departure: str
    arrival: str
    duration: str
    stops: int = Field(ge=0)
    aircraft: str | None = None
    operated_by: str | None = Field(None, alias="operatedBy")
    fare_from: float | None = Field(None, alias="fareFrom", ge=0, allow_inf_nan=False)
    miles: float | None = None

    model_config = {"populate_by_name": True}

    @computed_field
    @property
    def type(self) -> Literal["Direto", "Paradas"]:
        return "Direto" if self.stops == 0 else "Paradas"
