from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Search endpoint (edge-function style relay in front of the GDS)
    search_endpoint_url: str = ""
    search_api_key: str = ""
    currency_code: str = "BRL"
    max_results: int = 20

    # Ranking: fare-equivalent penalty per stop in BEST mode
    ranking_stop_penalty: float = 5000.0

    # Workflow-automation webhook (n8n)
    webhook_url: str = ""

    # Outbound HTTP
    http_timeout_seconds: float = 30.0

    # Amadeus
    amadeus_client_id: str = ""
    amadeus_client_secret: str = ""
    amadeus_base_url: str = "https://test.api.amadeus.com"

    # Logging
    log_level: str = "INFO"

    # CORS
    cors_origins: str = "http://localhost:5173"

    @property
    def cors_origin_list(self) -> list[str]:
        return [origin.strip() for origin in self.cors_origins.split(",")]

    @property
    def search_configured(self) -> bool:
        return bool(self.search_endpoint_url)

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}


settings = Settings()
