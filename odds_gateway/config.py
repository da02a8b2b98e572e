from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    service_name: str = "odds-gateway"
    environment: str = Field(
        default="dev",
        validation_alias=AliasChoices("environment", "node_env"),
    )
    log_level: str = "INFO"

    # The Odds API
    odds_api_key: str = ""
    odds_api_base_url: str = Field(
        default="https://api.the-odds-api.com/v4",
        validation_alias=AliasChoices("odds_api_base_url", "odds_api_base"),
    )
    odds_api_key_location: str = "query"  # "query" or "header"
    odds_api_key_header: str = "x-api-key"
    odds_api_key_param: str = "apiKey"
    request_timeout: float = 30.0
    upstream_body_limit: int = 500  # chars of upstream error body kept

    # Cache
    cache_ttl: int = 30  # seconds
    cache_max_entries: int = 0  # 0 = unbounded

    # Query defaults
    default_regions: str = "us"
    default_markets: str = "h2h,spreads,totals"
    default_odds_format: str = "american"
    default_date_format: str = "iso"
    default_scan_limit: int = 10

    # CORS
    cors_origins: str = "*"  # Comma-separated origins or "*" for all

    # If set, requires X-API-Key header on every route except health/docs
    api_key: str = Field(
        default="",
        validation_alias=AliasChoices("api_key", "public_api_key"),
    )

    @property
    def cors_origins_list(self) -> list[str]:
        if self.cors_origins == "*":
            return ["*"]
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


settings = Settings()
