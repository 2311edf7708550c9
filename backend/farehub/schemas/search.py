from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field


class RankingMode(str, Enum):
    BEST = "BEST"
    CHEAPEST = "CHEAPEST"
    FASTEST = "FASTEST"


class SearchParams(BaseModel):
    """Flight search form input. Accepts either the Python names or the form's aliases."""

    origin: str = Field("", alias="origem")
    destination: str = Field("", alias="destino")
    departure_date: str = Field("", alias="dataIda")
    return_date: str = Field("", alias="dataVolta")
    one_way: bool = Field(False, alias="somenteIda")
    adults: int = Field(1, alias="adultos")
    children: int = Field(0, alias="criancas")
    infants: int = Field(0, alias="bebes")
    cabin: Literal["economica", "executiva"] = Field("economica", alias="classe")
    airlines: list[str] = Field(default_factory=list, alias="companhias")
    sort: RankingMode = Field(RankingMode.BEST, alias="ordenacao")

    model_config = {"populate_by_name": True}
