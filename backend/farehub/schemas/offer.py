"""Upstream offer shape as returned by the flight-search relay.

Every field is optional: the relay passes through whatever the GDS gave it,
and the normalizer decides what is representable.
"""

from pydantic import BaseModel, Field


class OfferPoint(BaseModel):
    airport: str | None = None
    time: str | None = None

    model_config = {"extra": "ignore"}


class OfferLeg(BaseModel):
    departure: OfferPoint | None = None
    arrival: OfferPoint | None = None
    duration: str | None = None
    stops: int | None = None
    operated_by: str | None = Field(None, alias="operatedBy")

    model_config = {"populate_by_name": True, "extra": "ignore"}


class OfferPrice(BaseModel):
    total: str | float | None = None
    base: str | float | None = None
    currency: str | None = None

    model_config = {"extra": "ignore"}


class SimplifiedOffer(BaseModel):
    id: str | None = None
    airline: str | None = None
    flight_number: str | None = Field(None, alias="flightNumber")
    outbound: OfferLeg | None = None
    return_leg: OfferLeg | None = Field(None, alias="return")
    price: OfferPrice | None = None
    aircraft: str | None = None
    operated_by: str | None = Field(None, alias="operatedBy")
    signature: str | None = None
    miles: float | None = None

    model_config = {"populate_by_name": True, "extra": "ignore", "coerce_numbers_to_str": True}
