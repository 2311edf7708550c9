"""Mock flights shown when the search produced nothing usable."""

from farehub.schemas.flight import NormalizedFlight
from farehub.schemas.search import SearchParams
from farehub.services.offer_normalizer import signature_of

# One direct economy flight and one connecting flight, times local to the departure date
MOCK_FLIGHT_TABLE: list[dict] = [
    {
        "airline": "GOL Linhas Aéreas",
        "flight_number": "G3 1448",
        "departure_time": "08:00:00",
        "arrival_time": "11:15:00",
        "duration": "PT3H15M",
        "stops": 0,
        "aircraft": "BOEING 737",
        "operated_by": "GOL",
        "fare_from": 1280.9,
        "miles": 8900,
    },
    {
        "airline": "Azul Linhas Aéreas",
        "flight_number": "AD 2508",
        "departure_time": "13:40:00",
        "arrival_time": "18:05:00",
        "duration": "PT4H25M",
        "stops": 1,
        "aircraft": "AIRBUS A320",
        "operated_by": "Azul",
        "fare_from": 980.5,
        "miles": 7200,
    },
]


def build_mock_flights(params: SearchParams) -> list[NormalizedFlight]:
    """Deterministic stand-in flights for the requested route and departure date."""
    flights = []
    for row in MOCK_FLIGHT_TABLE:
        departure = f"{params.departure_date}T{row['departure_time']}"
        arrival = f"{params.departure_date}T{row['arrival_time']}"
        flights.append(NormalizedFlight(
            signature=signature_of(row["airline"], row["flight_number"], departure, arrival),
            airline=row["airline"],
            flight_number=row["flight_number"],
            origin=params.origin,
            destination=params.destination,
            departure=departure,
            arrival=arrival,
            duration=row["duration"],
            stops=row["stops"],
            aircraft=row["aircraft"],
            operated_by=row["operated_by"],
            fare_from=row["fare_from"],
            miles=row["miles"],
        ))
    return flights
