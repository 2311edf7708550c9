import pytest

from farehub.config import Settings
from farehub.schemas.search import SearchParams

RELAY_URL = "https://relay.example.test/functions/v1/flight-search"
WEBHOOK_URL = "https://n8n.example.test/webhook/pesquisaVoo"


@pytest.fixture
def settings() -> Settings:
    return Settings(
        search_endpoint_url=RELAY_URL,
        search_api_key="anon-key",
        webhook_url=WEBHOOK_URL,
        amadeus_client_id="client-id",
        amadeus_client_secret="client-secret",
        amadeus_base_url="https://amadeus.example.test",
    )


@pytest.fixture
def search_params() -> SearchParams:
    return SearchParams(
        origin="GRU",
        destination="CGB",
        departure_date="2099-12-01",
        return_date="2099-12-10",
        one_way=False,
        adults=1,
        children=0,
        infants=0,
        cabin="economica",
        airlines=["G3"],
        sort="BEST",
    )


def raw_offer(
    airline: str | None,
    flight_number: str | None,
    departure: str | None,
    arrival: str | None,
    total: str | float | None = "1000.00",
    stops: int = 0,
    duration: str = "PT2H",
) -> dict:
    """Offer dict in the relay's SimplifiedOffer wire shape."""
    return {
        "airline": airline,
        "flightNumber": flight_number,
        "outbound": {
            "departure": {"airport": "GRU", "time": departure},
            "arrival": {"airport": "CGB", "time": arrival},
            "duration": duration,
            "stops": stops,
        },
        "price": {"total": total, "currency": "BRL"},
    }


@pytest.fixture
def make_offer():
    return raw_offer
