"""FareHub — flight search core for the agency back office.

Modules:
    config                      Settings read from the environment
    data.airlines               Carrier code to display name table
    schemas                     SearchParams, SimplifiedOffer, NormalizedFlight
    services.validation         Search form validation and sanitization
    services.search_client      POSTs searches to the flight-search relay
    services.offer_normalizer   Offer → NormalizedFlight, signatures, dedup
    services.ranking_engine     CHEAPEST / FASTEST / BEST ordering
    services.mock_flights       Deterministic fallback flights
    services.search_orchestrator  End-to-end search with fallback
    services.webhook_relay      Forwards results to the n8n webhook
    services.amadeus_client     Amadeus OAuth2 search behind the relay

Pipeline:
    sanitize → fetch → normalize → deduplicate → rank
    (empty result → mock flights → rank)
"""
