"""Offer normalizer — maps relayed GDS offers onto NormalizedFlight and dedups them."""

import logging
import math
import re
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import ValidationError

from farehub.data.airlines import UNKNOWN_AIRLINE, get_airline_name
from farehub.schemas.flight import NormalizedFlight
from farehub.schemas.offer import SimplifiedOffer

logger = logging.getLogger(__name__)

FARE_RE = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def signature_of(airline: str, flight_number: str, departure: str, arrival: str) -> str:
    """Identity of one flight occurrence: airline|flight_number|departure|arrival."""
    return "|".join([airline, flight_number, departure, arrival])


def signature_of_flight(flight: Any) -> str:
    return signature_of(flight.airline, flight.flight_number, flight.departure, flight.arrival)


def _parse_fare(raw: str | float | None) -> float | None:
    """
    Fare as a finite, non-negative float, or None.

    Strings are read up to the end of their leading decimal number, so
    "1280.90 BRL" is 1280.9 and "N/A" is None.
    """
    if raw is None:
        return None
    if isinstance(raw, str):
        match = FARE_RE.match(raw)
        if not match:
            return None
        raw = float(match.group(1))
    if not math.isfinite(raw) or raw < 0:
        return None
    return float(raw)


def normalize_offer(offer: SimplifiedOffer | Mapping[str, Any]) -> NormalizedFlight | None:
    """
    Map one upstream offer onto a NormalizedFlight.

    Returns None when the offer cannot be represented: it fails the offer
    schema, or its outbound leg lacks a departure or arrival time.
    """
    if isinstance(offer, Mapping):
        try:
            offer = SimplifiedOffer.model_validate(offer)
        except ValidationError as e:
            logger.debug(f"Dropping offer that fails schema: {e.error_count()} errors")
            return None
    elif not isinstance(offer, SimplifiedOffer):
        return None

    outbound = offer.outbound
    departure = (outbound.departure.time if outbound and outbound.departure else None) or ""
    arrival = (outbound.arrival.time if outbound and outbound.arrival else None) or ""
    if not departure or not arrival:
        logger.debug(f"Dropping offer {offer.id}: missing departure or arrival time")
        return None

    airline_code = offer.airline or (offer.flight_number or "")[:2]
    airline_name = get_airline_name(airline_code) or offer.airline or airline_code or UNKNOWN_AIRLINE

    flight_number = offer.flight_number or "---"
    stops = outbound.stops if outbound.stops is not None else 0
    duration = outbound.duration or "PT0M"

    price = offer.price
    raw_fare = None
    if price is not None:
        raw_fare = price.total if price.total is not None else price.base

    try:
        return NormalizedFlight(
            signature=offer.signature or signature_of(airline_name, flight_number, departure, arrival),
            airline=airline_name,
            flight_number=flight_number,
            origin=(outbound.departure.airport or "") if outbound.departure else "",
            destination=(outbound.arrival.airport or "") if outbound.arrival else "",
            departure=departure,
            arrival=arrival,
            duration=duration,
            stops=stops,
            aircraft=offer.aircraft,
            operated_by=offer.operated_by or outbound.operated_by,
            fare_from=_parse_fare(raw_fare),
            miles=offer.miles,
        )
    except ValidationError as e:
        logger.debug(f"Dropping offer {offer.id}: {e.error_count()} invalid fields")
        return None


def normalize_offers(offers: Iterable[SimplifiedOffer | Mapping[str, Any]]) -> list[NormalizedFlight]:
    """Normalize every offer, dropping the ones that are not representable."""
    normalized = []
    for offer in offers:
        flight = normalize_offer(offer)
        if flight is not None:
            normalized.append(flight)
    return normalized


def deduplicate_flights(flights: Iterable[NormalizedFlight]) -> list[NormalizedFlight]:
    """
    Keep the first flight seen for each signature, preserving order.

    Later duplicates are discarded even when cheaper; sort first if the
    cheapest copy should win.
    """
    seen = set()
    unique_flights = []
    for f in flights:
        if f.signature not in seen:
            seen.add(f.signature)
            unique_flights.append(f)
    return unique_flights
