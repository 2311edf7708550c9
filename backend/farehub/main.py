import logging
from contextlib import asynccontextmanager
from logging.handlers import RotatingFileHandler
from pathlib import Path

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from farehub.config import Settings, settings

# ─── Logging setup (file + console) ───
_LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_LOG_DIR.mkdir(exist_ok=True)

_log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

logging.basicConfig(
    level=_log_level,
    format="%(asctime)s %(levelname)-8s [%(name)s] %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
    handlers=[
        logging.StreamHandler(),
        RotatingFileHandler(
            _LOG_DIR / "farehub.log",
            maxBytes=10 * 1024 * 1024,  # 10 MB
            backupCount=5,
            encoding="utf-8",
        ),
    ],
)

# Quiet noisy libraries
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

from farehub.routers import flight_search, search
from farehub.services.amadeus_client import AmadeusClient
from farehub.services.search_client import SearchEndpointClient
from farehub.services.search_orchestrator import SearchOrchestrator
from farehub.services.webhook_relay import WebhookRelay

logger = logging.getLogger(__name__)


def create_app(app_settings: Settings = settings) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # One pooled client shared by every outbound adapter
        http_client = httpx.AsyncClient(timeout=app_settings.http_timeout_seconds)

        app.state.settings = app_settings
        app.state.search_orchestrator = SearchOrchestrator(
            app_settings, SearchEndpointClient(app_settings, http_client)
        )
        app.state.webhook_relay = WebhookRelay(app_settings, http_client)
        app.state.amadeus_client = AmadeusClient(app_settings, http_client)

        if not app_settings.search_configured:
            logger.warning("SEARCH_ENDPOINT_URL not set, searches will return mock flights")
        if not app_settings.webhook_url:
            logger.warning("WEBHOOK_URL not set, search relay disabled")

        yield

        # Shutdown
        await http_client.aclose()
        logger.info("HTTP client closed")

    app = FastAPI(
        title="FareHub",
        description="Travel agency flight search back office",
        version="0.1.0",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=app_settings.cors_origin_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(search.router, prefix="/api/search", tags=["search"])
    app.include_router(flight_search.router, prefix="/functions/v1", tags=["flight-search"])

    @app.get("/api/health")
    async def health_check():
        return {"status": "ok", "service": "farehub"}

    return app


app = create_app()
