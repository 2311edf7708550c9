import httpx
import pytest

from farehub.config import Settings
from farehub.schemas.search import RankingMode, SearchParams
from farehub.services.search_client import SearchEndpointClient, SearchEndpointError
from farehub.services.search_orchestrator import SearchOrchestrator


class StubSearchClient:
    """Stands in for the relay: returns canned offers or raises."""

    def __init__(self, offers=None, error: Exception | None = None):
        self.offers = offers or []
        self.error = error
        self.calls: list[SearchParams] = []

    async def fetch_offers(self, params: SearchParams) -> list:
        self.calls.append(params)
        if self.error:
            raise self.error
        return self.offers

    async def close(self):
        pass


def _orchestrator(settings: Settings, client: StubSearchClient) -> SearchOrchestrator:
    return SearchOrchestrator(settings, client)


async def test_real_offers_are_normalized_deduped_and_ranked(settings, search_params, make_offer) -> None:
    offers = [
        make_offer("G3", "G3 1000", "2099-12-01T10:00:00", "2099-12-01T12:00:00", "1200.00"),
        make_offer("LA", "LA 800", "2099-12-01T09:00:00", "2099-12-01T13:30:00", "950.00", stops=1, duration="PT4H30M"),
        make_offer("AD", "AD 4100", "2099-12-01T11:00:00", "2099-12-01T13:00:00", "1500.00"),
        make_offer("G3", "G3 1000", "2099-12-01T10:00:00", "2099-12-01T12:00:00", "800.00"),
    ]
    params = search_params.model_copy(update={"sort": RankingMode.CHEAPEST})

    result = await _orchestrator(settings, StubSearchClient(offers)).search(params)

    assert result.kind == "real"
    assert not result.is_fallback
    assert [f.fare_from for f in result.flights] == [950.0, 1200.0, 1500.0]


async def test_best_mode_puts_direct_flight_first(settings, search_params, make_offer) -> None:
    offers = [
        make_offer("LA", "LA 800", "2099-12-01T09:00:00", "2099-12-01T13:30:00", "950.00", stops=1),
        make_offer("G3", "G3 1000", "2099-12-01T10:00:00", "2099-12-01T12:00:00", "1200.00"),
    ]

    result = await _orchestrator(settings, StubSearchClient(offers)).search(search_params)

    assert result.flights[0].flight_number == "G3 1000"


async def test_params_are_sanitized_before_fetch(settings, search_params) -> None:
    client = StubSearchClient()
    params = search_params.model_copy(update={
        "origin": " gru ",
        "destination": "cgb",
        "one_way": True,
        "airlines": ["LA", "G3", "LA"],
    })

    result = await _orchestrator(settings, client).search(params)

    sent = client.calls[0]
    assert sent.origin == "GRU"
    assert sent.destination == "CGB"
    assert sent.return_date == ""
    assert sent.airlines == ["G3", "LA"]
    assert all(f.origin == "GRU" for f in result.flights)


@pytest.mark.parametrize("error", [
    SearchEndpointError("Flight search failed: 500", status_code=500),
    httpx.ConnectError("connection refused"),
    httpx.ReadTimeout("timed out"),
])
async def test_fetch_failure_falls_back_to_mock_flights(settings, search_params, error) -> None:
    result = await _orchestrator(settings, StubSearchClient(error=error)).search(search_params)

    assert result.kind == "fallback"
    assert result.is_fallback
    assert len(result.flights) == 2


async def test_unusable_offers_fall_back_to_mock_flights(settings, search_params, make_offer) -> None:
    offers = [
        make_offer("G3", "G3 1000", None, "2099-12-01T12:00:00"),
        {"outbound": "broken"},
        "not-an-offer",
    ]

    result = await _orchestrator(settings, StubSearchClient(offers)).search(search_params)

    assert result.kind == "fallback"
    assert len(result.flights) == 2


@pytest.mark.parametrize("mode, first_flight", [
    (RankingMode.CHEAPEST, "AD 2508"),
    (RankingMode.FASTEST, "G3 1448"),
    (RankingMode.BEST, "G3 1448"),
])
async def test_fallback_is_ranked_by_requested_mode(settings, search_params, mode, first_flight) -> None:
    params = search_params.model_copy(update={"sort": mode})

    result = await _orchestrator(settings, StubSearchClient()).search(params)

    assert result.flights[0].flight_number == first_flight


async def test_stop_penalty_comes_from_settings(search_params, make_offer) -> None:
    offers = [
        make_offer("G3", "G3 1000", "2099-12-01T10:00:00", "2099-12-01T12:00:00", "1000.00"),
        make_offer("LA", "LA 800", "2099-12-01T09:00:00", "2099-12-01T13:30:00", "900.00", stops=1),
    ]
    settings = Settings(search_endpoint_url="https://relay.example.test", ranking_stop_penalty=0)

    result = await _orchestrator(settings, StubSearchClient(offers)).search(search_params)

    assert result.flights[0].flight_number == "LA 800"


async def test_search_flights_returns_plain_list(settings, search_params) -> None:
    flights = await _orchestrator(settings, StubSearchClient()).search_flights(search_params)
    assert isinstance(flights, list)
    assert len(flights) == 2


async def test_unexpected_errors_propagate(settings, search_params) -> None:
    orchestrator = _orchestrator(settings, StubSearchClient(error=RuntimeError("bug")))
    with pytest.raises(RuntimeError):
        await orchestrator.search(search_params)


async def test_end_to_end_over_http(settings, search_params, make_offer) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"results": [
            make_offer("G3", "G3 1448", "2099-12-01T08:00:00", "2099-12-01T11:15:00", "1234.56"),
        ]})

    client = SearchEndpointClient(settings, httpx.AsyncClient(transport=httpx.MockTransport(handler)))
    result = await SearchOrchestrator(settings, client).search(search_params)

    assert result.kind == "real"
    assert len(result.flights) == 1
    assert result.flights[0].airline == "GOL Linhas Aéreas"
    assert result.flights[0].fare_from == 1234.56


async def test_malformed_endpoint_url_falls_back(search_params) -> None:
    settings = Settings(search_endpoint_url="http://relay.example.test:abc/x")
    client = SearchEndpointClient(
        settings,
        httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(200, json=[]))),
    )

    result = await SearchOrchestrator(settings, client).search(search_params)

    assert result.kind == "fallback"
    assert len(result.flights) == 2


async def test_end_to_end_http_error_falls_back(settings, search_params) -> None:
    client = SearchEndpointClient(
        settings,
        httpx.AsyncClient(transport=httpx.MockTransport(lambda request: httpx.Response(502, text="bad gateway"))),
    )
    result = await SearchOrchestrator(settings, client).search(search_params)

    assert result.kind == "fallback"
    assert len(result.flights) == 2
