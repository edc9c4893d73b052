from pathlib import Path

from pydantic_settings import BaseSettings
from pydantic_settings import SettingsConfigDict


class Settings(BaseSettings):
    """Runtime settings loaded from environment variables.

    Values are read from process environment and optionally from `.env`.
    Command line flags take precedence over these values.
    """

    github_graphql_url: str = "https://api.github.com/graphql"
    github_token: str | None = None
    gitfetch_config: Path | None = None
    request_timeout_seconds: float = 20.0
    avatar_width: int = 20
    avatar_height: int = 10
    log_level: str = "WARNING"
    sentry_dsn: str | None = None
    environment: str = "development"
    release: str | None = None
    sentry_traces_sample_rate: float = 0.1

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")
