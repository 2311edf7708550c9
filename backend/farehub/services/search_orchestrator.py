"""Search orchestrator — sanitize, fetch, normalize, dedup and rank one flight search."""

import logging
import time
from dataclasses import dataclass, field
from typing import Literal

import httpx

from farehub.config import Settings
from farehub.schemas.flight import NormalizedFlight
from farehub.schemas.search import SearchParams
from farehub.services.mock_flights import build_mock_flights
from farehub.services.offer_normalizer import deduplicate_flights, normalize_offers
from farehub.services.ranking_engine import rank_flights
from farehub.services.search_client import SearchEndpointClient, SearchEndpointError
from farehub.services.validation import sanitize_search_params

logger = logging.getLogger(__name__)


@dataclass
class SearchResult:
    """Ranked flights, tagged with whether they came from the live search or the mock table."""
    kind: Literal["real", "fallback"]
    flights: list[NormalizedFlight] = field(default_factory=list)

    @property
    def is_fallback(self) -> bool:
        return self.kind == "fallback"


class SearchOrchestrator:
    """Runs one search end to end. Holds no per-search state."""

    def __init__(self, settings: Settings, search_client: SearchEndpointClient | None = None):
        self._settings = settings
        self._search_client = search_client or SearchEndpointClient(settings)

    async def search(self, params: SearchParams) -> SearchResult:
        """
        Execute a flight search.

        Fetch failures and empty or unusable upstream results fall back to
        the mock flights; the returned SearchResult says which one the
        caller got.
        """
        start_time = time.monotonic()
        params = sanitize_search_params(params)
        logger.info(
            f"Searching flights {params.origin}->{params.destination} "
            f"on {params.departure_date} (sort={params.sort.value})"
        )

        try:
            offers = await self._search_client.fetch_offers(params)
        except (httpx.HTTPError, httpx.InvalidURL, SearchEndpointError) as e:
            logger.error(f"Flight search fetch failed, falling back to mock: {e}")
            offers = []
        logger.info(f"Received {len(offers)} raw offers")

        flights = deduplicate_flights(normalize_offers(offers))
        kind = "real"
        if not flights:
            flights = build_mock_flights(params)
            kind = "fallback"
            logger.warning(f"No usable offers for {params.origin}->{params.destination}, using {len(flights)} mock flights")

        ranked = rank_flights(flights, params.sort, self._settings.ranking_stop_penalty)

        elapsed_ms = int((time.monotonic() - start_time) * 1000)
        logger.info(f"Search finished: {len(ranked)} {kind} flights in {elapsed_ms}ms")
        return SearchResult(kind=kind, flights=ranked)

    async def search_flights(self, params: SearchParams) -> list[NormalizedFlight]:
        """Ranked flights only, real or fallback."""
        result = await self.search(params)
        return result.flights

    async def close(self):
        await self._search_client.close()
