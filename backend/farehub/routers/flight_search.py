"""Flight-search relay — Amadeus flight offers reduced to the SimplifiedOffer shape."""

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from farehub.dependencies import get_amadeus_client
from farehub.services.amadeus_client import AmadeusClient, AmadeusError, simplify_offer

logger = logging.getLogger(__name__)

router = APIRouter()


class FlightOffersRequest(BaseModel):
    origin: str | None = Field(None, alias="originLocationCode")
    destination: str | None = Field(None, alias="destinationLocationCode")
    departure_date: str | None = Field(None, alias="departureDate")
    return_date: str | None = Field(None, alias="returnDate")
    adults: int | None = None
    currency_code: str = Field("BRL", alias="currencyCode")
    max_results: int = Field(5, alias="max")

    model_config = {"populate_by_name": True}


@router.post("/flight-search")
async def flight_search(
    body: FlightOffersRequest,
    amadeus: AmadeusClient = Depends(get_amadeus_client),
):
    """Search Amadeus and return {"results": [...]} in SimplifiedOffer shape."""
    if not (body.origin and body.destination and body.departure_date and body.adults):
        return JSONResponse(status_code=400, content={"error": "Missing required parameters"})

    try:
        offers = await amadeus.search_flight_offers(
            origin=body.origin,
            destination=body.destination,
            departure_date=body.departure_date,
            adults=body.adults,
            return_date=body.return_date,
            currency_code=body.currency_code,
            max_results=body.max_results,
        )
    except AmadeusError as e:
        logger.error(f"Flight-search relay failed: {e}")
        return JSONResponse(status_code=500, content={"error": str(e)})

    return {"results": [simplify_offer(offer, body.currency_code) for offer in offers]}
