"""Amadeus API client — OAuth2 flight-offers search behind the flight-search relay."""

import asyncio
import logging
from datetime import datetime, timedelta, timezone

import httpx

from farehub.config import Settings

logger = logging.getLogger(__name__)

MAX_ATTEMPTS = 3


class AmadeusError(Exception):
    pass


def _as_dict(value) -> dict:
    return value if isinstance(value, dict) else {}


def _as_list(value) -> list:
    return value if isinstance(value, list) else []


def _point(segment: dict, key: str) -> dict:
    endpoint = _as_dict(segment.get(key))
    return {"airport": endpoint.get("iataCode"), "time": endpoint.get("at")}


def _leg(itinerary: dict | None) -> dict | None:
    """First departure and last arrival of an itinerary, with its duration and stop count."""
    itinerary = _as_dict(itinerary)
    segments = _as_list(itinerary.get("segments"))
    if not segments:
        return None
    return {
        "departure": _point(_as_dict(segments[0]), "departure"),
        "arrival": _point(_as_dict(segments[-1]), "arrival"),
        "duration": itinerary.get("duration"),
        "stops": max(len(segments) - 1, 0),
    }


def simplify_offer(offer: dict, currency_code: str = "BRL") -> dict:
    """
    Reduce an Amadeus flight-offer to the relay's SimplifiedOffer shape.

    Malformed parts (non-object itineraries, segments or price) read as
    missing and come out as None or "N/A".
    """
    offer = _as_dict(offer)
    itineraries = _as_list(offer.get("itineraries"))
    outbound = _as_dict(itineraries[0]) if itineraries else {}
    segments = _as_list(outbound.get("segments"))
    first_seg = _as_dict(segments[0]) if segments else {}

    carrier = first_seg.get("carrierCode")
    number = first_seg.get("number")
    price = _as_dict(offer.get("price"))

    return {
        "id": offer.get("id"),
        "airline": carrier or "N/A",
        "flightNumber": f"{carrier}{number}" if carrier and number else "N/A",
        "outbound": _leg(outbound),
        "return": _leg(itineraries[1]) if len(itineraries) > 1 else None,
        "aircraft": _as_dict(first_seg.get("aircraft")).get("code") or "N/A",
        "price": {
            "total": price.get("total") or "N/A",
            "currency": price.get("currency") or currency_code,
        },
    }


class AmadeusClient:
    """Adapter for Amadeus Self-Service flight offers."""

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None):
        self._settings = settings
        self._token: str | None = None
        self._token_expires: datetime | None = None
        self._client = client
        self._owns_client = client is None

    @property
    def configured(self) -> bool:
        return bool(self._settings.amadeus_client_id and self._settings.amadeus_client_secret)

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._settings.http_timeout_seconds)
        return self._client

    def _url(self, path: str) -> str:
        return f"{self._settings.amadeus_base_url.rstrip('/')}{path}"

    async def _ensure_token(self):
        """Get or refresh OAuth2 token."""
        if self._token and self._token_expires and datetime.now(timezone.utc) < self._token_expires:
            return

        client = await self._get_client()
        for attempt in range(MAX_ATTEMPTS):
            try:
                resp = await client.post(
                    self._url("/v1/security/oauth2/token"),
                    data={
                        "grant_type": "client_credentials",
                        "client_id": self._settings.amadeus_client_id,
                        "client_secret": self._settings.amadeus_client_secret,
                    },
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                )
                resp.raise_for_status()
                try:
                    data = resp.json()
                    token = data["access_token"]
                    expires_in = int(data.get("expires_in", 1799))
                except (ValueError, TypeError, KeyError, AttributeError) as e:
                    raise AmadeusError(f"Malformed auth response: {type(e).__name__}") from e
                if not token:
                    raise AmadeusError("Malformed auth response: empty access_token")
                self._token = token
                self._token_expires = datetime.now(timezone.utc) + timedelta(seconds=expires_in - 60)
                logger.info("Amadeus token refreshed")
                return
            except httpx.HTTPStatusError as e:
                if e.response.status_code == 429 and attempt < MAX_ATTEMPTS - 1:
                    await asyncio.sleep(2 ** attempt)
                    continue
                raise AmadeusError(f"Auth failed: {e.response.status_code}") from e
            except httpx.RequestError as e:
                if attempt < MAX_ATTEMPTS - 1:
                    await asyncio.sleep(2 ** attempt)
                    continue
                raise AmadeusError(f"Auth request failed: {e}") from e

    async def search_flight_offers(
        self,
        origin: str,
        destination: str,
        departure_date: str,
        adults: int,
        return_date: str | None = None,
        currency_code: str = "BRL",
        max_results: int = 5,
    ) -> list[dict]:
        """Raw Amadeus flight-offers for one route and date."""
        if not self.configured:
            raise AmadeusError("Amadeus credentials not configured")

        await self._ensure_token()
        client = await self._get_client()

        params = {
            "originLocationCode": origin,
            "destinationLocationCode": destination,
            "departureDate": departure_date,
            "adults": adults,
            "currencyCode": currency_code,
            "max": max_results,
        }
        if return_date:
            params["returnDate"] = return_date

        for attempt in range(MAX_ATTEMPTS):
            try:
                resp = await client.get(
                    self._url("/v2/shopping/flight-offers"),
                    params=params,
                    headers={"Authorization": f"Bearer {self._token}"},
                )
                if resp.status_code == 429 and attempt < MAX_ATTEMPTS - 1:
                    await asyncio.sleep(2 ** attempt)
                    continue
                resp.raise_for_status()
                try:
                    data = resp.json()
                except ValueError as e:
                    raise AmadeusError(f"Malformed flight-offers response: {e}") from e
                if not isinstance(data, dict):
                    raise AmadeusError("Malformed flight-offers response: expected an object")
                offers = data.get("data")
                if offers is None:
                    return []
                if not isinstance(offers, list):
                    raise AmadeusError("Malformed flight-offers response: data is not a list")
                return offers
            except httpx.HTTPStatusError as e:
                logger.error(f"Amadeus search error: {e.response.status_code}")
                raise AmadeusError(
                    f"Flight search failed: {e.response.status_code} - {e.response.text[:200]}"
                ) from e
            except httpx.RequestError as e:
                logger.error(f"Amadeus request error: {e}")
                if attempt < MAX_ATTEMPTS - 1:
                    await asyncio.sleep(2 ** attempt)
                    continue
                raise AmadeusError(f"Flight search request failed: {e}") from e

        return []

    async def close(self):
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None
