"""Application configuration."""
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # OpenAI (summaries)
    openai_api_key: str
    llm_model: str = "gpt-4o-mini"
    summary_max_tokens: int = 400
    summary_temperature: float = 0.2

    # LiveKit
    livekit_api_url: str
    livekit_api_key: str
    livekit_api_secret: str
    token_ttl_seconds: int = 3600

    # Database
    database_url: str
    calls_table: str = "calls"
    summaries_table: str = "summaries"
    transfers_table: str = "transfers"
    transcripts_table: str = "transcripts"
    agents_table: str = "agents"

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )


settings = Settings()
