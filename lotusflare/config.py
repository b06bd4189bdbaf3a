from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env")

    app_name: str = "LotusFlare"
    debug: bool = False

    # Backend that answers per-card banned/restricted lookups
    restriction_service_url: str = "http://localhost:8787/api"
    restriction_timeout_seconds: float = 10.0

    # Quiet period before a scheduled legality cycle starts
    legality_debounce_seconds: float = 1.2

    # Whether command-zone cards count toward the mainboard deck size
    count_commanders_in_deck_size: bool = True


settings = Settings()
