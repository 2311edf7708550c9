"""Webhook relay — forwards a finished search to the n8n workflow webhook."""

import logging
from dataclasses import dataclass
from typing import Any

import httpx

from farehub.config import Settings
from farehub.schemas.flight import NormalizedFlight
from farehub.schemas.search import SearchParams

logger = logging.getLogger(__name__)


@dataclass
class WebhookResult:
    ok: bool
    data: Any = None
    error: str | None = None


def build_webhook_payload(
    params: SearchParams,
    flights: list[NormalizedFlight],
    currency_code: str = "BRL",
) -> dict:
    search = {
        "origin": params.origin,
        "destination": params.destination,
        "date": params.departure_date,
        "adults": params.adults,
        "children": params.children,
        "infants": params.infants,
        "class": params.cabin,
        "currency": currency_code,
        "companies": list(params.airlines),
        "sort": params.sort.value,
    }
    if not params.one_way and params.return_date:
        search["returnDate"] = params.return_date

    return {
        "source": "amadeus",
        "search": search,
        "flights": [f.model_dump(mode="json", by_alias=True) for f in flights],
    }


class WebhookRelay:
    """Posts search payloads to the configured workflow webhook."""

    def __init__(self, settings: Settings, client: httpx.AsyncClient | None = None):
        self._settings = settings
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._settings.http_timeout_seconds)
        return self._client

    async def send(self, payload: dict) -> WebhookResult:
        """Send the payload. Failures come back as WebhookResult(ok=False), never raised."""
        if not self._settings.webhook_url:
            logger.warning("Webhook URL not configured, skipping relay")
            return WebhookResult(ok=False, error="Webhook URL not configured")

        try:
            client = await self._get_client()
            logger.info(f"Relaying {len(payload.get('flights', []))} flights to webhook")
            resp = await client.post(self._settings.webhook_url, json=payload)
            resp.raise_for_status()
        except httpx.HTTPStatusError as e:
            message = f"HTTP {e.response.status_code} - {e.response.text[:200]}"
            logger.error(f"Webhook relay failed: {message}")
            return WebhookResult(ok=False, error=message)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Webhook relay request error: {e}")
            return WebhookResult(ok=False, error=str(e) or type(e).__name__)

        try:
            data = resp.json()
        except ValueError:
            data = None
        logger.info("Webhook relay completed")
        return WebhookResult(ok=True, data=data)

    async def close(self):
        if self._client and self._owns_client:
            await self._client.aclose()
            self._client = None
