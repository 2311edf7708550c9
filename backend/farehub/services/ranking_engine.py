"""Ranking engine — orders normalized flights by cheapest, fastest or best."""

import re

from farehub.schemas.flight import NormalizedFlight
from farehub.schemas.search import RankingMode

# Stands in for a missing fare or an unreadable duration so they sort last
MAX_SENTINEL = 999_999_999

# Fare-equivalent added per stop in BEST mode
STOP_PENALTY = 5000

DURATION_RE = re.compile(r"PT(?:(\d+)H)?(?:(\d+)M)?")


def duration_to_minutes(duration: str | None) -> int:
    """
    Parse an ISO 8601 duration (PT2H30M) to minutes.

    Either component may be absent (PT45M, PT2H). The PT token may sit
    anywhere in the string. A string without one returns MAX_SENTINEL
    instead of raising.
    """
    if not isinstance(duration, str):
        return MAX_SENTINEL
    match = DURATION_RE.search(duration)
    if not match:
        return MAX_SENTINEL
    hours = int(match.group(1) or 0)
    minutes = int(match.group(2) or 0)
    return hours * 60 + minutes


def _fare_or_sentinel(flight: NormalizedFlight) -> float:
    return flight.fare_from if flight.fare_from is not None else MAX_SENTINEL


def best_score(flight: NormalizedFlight, stop_penalty: float = STOP_PENALTY) -> float:
    """Fare plus a linear penalty per stop. Lower is better."""
    return _fare_or_sentinel(flight) + flight.stops * stop_penalty


def rank_flights(
    flights: list[NormalizedFlight],
    mode: RankingMode | str = RankingMode.BEST,
    stop_penalty: float = STOP_PENALTY,
) -> list[NormalizedFlight]:
    """
    Return a new list of flights ordered for the given ranking mode.

    The sort is stable, so ties keep their incoming order. Unknown modes
    rank as BEST.
    """
    try:
        mode = RankingMode(mode)
    except ValueError:
        mode = RankingMode.BEST

    if mode is RankingMode.CHEAPEST:
        return sorted(flights, key=_fare_or_sentinel)

    if mode is RankingMode.FASTEST:
        return sorted(flights, key=lambda f: duration_to_minutes(f.duration))

    return sorted(flights, key=lambda f: best_score(f, stop_penalty))
