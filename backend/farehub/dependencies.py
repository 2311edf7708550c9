from fastapi import Request

from farehub.config import Settings
from farehub.services.amadeus_client import AmadeusClient
from farehub.services.search_orchestrator import SearchOrchestrator
from farehub.services.webhook_relay import WebhookRelay


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_search_orchestrator(request: Request) -> SearchOrchestrator:
    return request.app.state.search_orchestrator


def get_webhook_relay(request: Request) -> WebhookRelay:
    return request.app.state.webhook_relay


def get_amadeus_client(request: Request) -> AmadeusClient:
    return request.app.state.amadeus_client
