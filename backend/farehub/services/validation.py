"""Search form validation and sanitization.

Error keys follow the form field names so the UI can attach each message
to its input.
"""

import re
from datetime import date

from farehub.schemas.search import SearchParams

IATA_RE = re.compile(r"[A-Z]{3}")
DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


def is_iata(value: str) -> bool:
    return bool(IATA_RE.fullmatch(value.strip()))


def _parse_date(value: str) -> date | None:
    if not DATE_RE.fullmatch(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        return None


def validate_search_params(params: SearchParams, today: date | None = None) -> dict[str, str]:
    """Return a field-keyed error map. An empty dict means the params are valid."""
    errors: dict[str, str] = {}
    today = today or date.today()

    origin = params.origin.strip().upper()
    destination = params.destination.strip().upper()

    if not origin:
        errors["origem"] = "Origem é obrigatória"
    elif not is_iata(origin):
        errors["origem"] = "Informe um código IATA válido"

    if not destination:
        errors["destino"] = "Destino é obrigatório"
    elif not is_iata(destination):
        errors["destino"] = "Informe um código IATA válido"
    elif "origem" not in errors and origin == destination:
        errors["destino"] = "Destino deve ser diferente da origem"

    departure = None
    if not params.departure_date:
        errors["dataIda"] = "Data de ida é obrigatória"
    else:
        departure = _parse_date(params.departure_date)
        if departure is None:
            errors["dataIda"] = "Data de ida inválida"
        elif departure < today:
            errors["dataIda"] = "Data de ida não pode estar no passado"

    if not params.one_way:
        if not params.return_date:
            errors["dataVolta"] = "Data de volta é obrigatória"
        else:
            return_date = _parse_date(params.return_date)
            if return_date is None:
                errors["dataVolta"] = "Data de volta inválida"
            elif "dataIda" not in errors and return_date < departure:
                errors["dataVolta"] = "Data de volta deve ser após a data de ida"

    if params.adults < 1:
        errors["adultos"] = "Ao menos 1 adulto é obrigatório"
    if params.children < 0:
        errors["criancas"] = "Valor inválido"
    if params.infants < 0:
        errors["bebes"] = "Valor inválido"

    if params.adults + params.children + params.infants < 1:
        errors["passageiros"] = "Informe ao menos um passageiro"

    return errors


def sanitize_search_params(params: SearchParams) -> SearchParams:
    """Normalized copy: upper-cased airports, no return date on one-way, sorted unique airlines."""
    return params.model_copy(update={
        "origin": params.origin.strip().upper(),
        "destination": params.destination.strip().upper(),
        "return_date": "" if params.one_way else params.return_date,
        "airlines": sorted(set(params.airlines)),
    })
