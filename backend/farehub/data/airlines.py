"""Static airline display names for the carriers the agency sells."""

UNKNOWN_AIRLINE = "Companhia Desconhecida"

# IATA code → display name
AIRLINE_NAMES: dict[str, str] = {
    # Brazil
    "AD": "Azul Linhas Aéreas",
    "AZ": "Azul Linhas Aéreas",
    "G3": "GOL Linhas Aéreas",
    "JJ": "LATAM Airlines Brasil",
    "2Z": "VoePass",
    # South America
    "LA": "LATAM Airlines",
    "AV": "Avianca",
    "AR": "Aerolíneas Argentinas",
    "H2": "SKY Airline",
    "JA": "JetSMART",
    # Central America
    "CM": "Copa Airlines",
    # North America
    "AA": "American Airlines",
    "DL": "Delta Air Lines",
    "UA": "United Airlines",
    # Europe
    "TP": "TAP Air Portugal",
    "AF": "Air France",
    "KL": "KLM",
    "LH": "Lufthansa",
    "IB": "Iberia",
    "UX": "Air Europa",
    "BA": "British Airways",
    # Middle East
    "EK": "Emirates",
    "QR": "Qatar Airways",
    "TK": "Turkish Airlines",
}


def get_airline_name(code: str) -> str | None:
    """Display name for a carrier code, or None when the code is not in the table."""
    return AIRLINE_NAMES.get(code)
