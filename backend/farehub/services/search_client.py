"""Search endpoint client — posts a search to the flight-search relay and returns raw offers."""

import logging
from typing import Any

import httpx

from farehub.config import Settings
from farehub.schemas.search import SearchParams

logger = logging.getLogger(__name__)

# Keys under which the relay may wrap its offer list
RESULT_KEYS = ("results", "data", "offers")


class SearchEndpointError(Exception):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


def build_search_payload(params: SearchParams, currency_code: str = "BRL", max_results: int = 20) -> dict:
    """Request body in the provider's flight-offers vocabulary."""
    payload = {
        "originLocationCode": params.origin,
        "destinationLocationCode": params.destination,
        "departureDate": params.departure_date,
        "adults": params.adults,
        "currencyCode": currency_code,
        "max": max_results,
    }
    if not params.one_way and params.return_date:
        payload["returnDate"] = params.return_date
    return payload


def extract_offers(data: Any) -> list:
    """Offer list from a bare array or from an object wrapping one."""
    if isinstance(data, list):
        return data
    if isinstance(data, dict):
        for key in RESULT_KEYS:
            if isinstance(data.get(key), list):
                return data[key]
    return []


class SearchEndpointClient:
    """Adapter for the flight-search relay endpoint."""

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None):
        self._settings = settings
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._settings.http_timeout_seconds)
        return self._client

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self._settings.search_api_key:
            headers["apikey"] = self._settings.search_api_key
            headers["Authorization"] = f"Bearer {self._settings.search_api_key}"
        return headers

    async def fetch_offers(self, params: SearchParams) -> list:
        """
        POST the search and return the raw offers.

        Returns [] when no endpoint is configured. Raises SearchEndpointError
        on a non-2xx status or an unreadable body, and lets httpx transport
        errors through.
        """
        if not self._settings.search_configured:
            logger.warning("Search endpoint not configured, skipping live search")
            return []

        client = await self._get_client()
        payload = build_search_payload(
            params, self._settings.currency_code, self._settings.max_results
        )
        resp = await client.post(
            self._settings.search_endpoint_url,
            json=payload,
            headers=self._headers(),
        )
        if not resp.is_success:
            raise SearchEndpointError(
                f"Flight search failed: {resp.status_code} - {resp.text[:200]}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as e:
            raise SearchEndpointError(f"Malformed search response: {e}", status_code=resp.status_code)

        return extract_offers(data)

    async def close(self):
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None
