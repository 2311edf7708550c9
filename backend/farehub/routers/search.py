"""Search router — validated flight search, optionally relayed to the workflow webhook."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from farehub.config import Settings
from farehub.dependencies import get_search_orchestrator, get_settings, get_webhook_relay
from farehub.schemas.search import SearchParams
from farehub.services.search_orchestrator import SearchOrchestrator
from farehub.services.validation import sanitize_search_params, validate_search_params
from farehub.services.webhook_relay import WebhookRelay, build_webhook_payload

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("")
async def search_flights(
    params: SearchParams,
    relay: bool = Query(False),
    orchestrator: SearchOrchestrator = Depends(get_search_orchestrator),
    webhook: WebhookRelay = Depends(get_webhook_relay),
    settings: Settings = Depends(get_settings),
):
    """Run a flight search. `kind` tells real results from the mock fallback."""
    params = sanitize_search_params(params)
    errors = validate_search_params(params)
    if errors:
        raise HTTPException(status_code=422, detail=errors)

    result = await orchestrator.search(params)
    response = {
        "kind": result.kind,
        "flights": [f.model_dump(mode="json", by_alias=True) for f in result.flights],
    }

    if relay:
        payload = build_webhook_payload(params, result.flights, settings.currency_code)
        outcome = await webhook.send(payload)
        if not outcome.ok:
            logger.warning(f"Search relay not delivered: {outcome.error}")
        response["relay"] = {"ok": outcome.ok, "error": outcome.error}

    return response
