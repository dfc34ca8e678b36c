from functools import lru_cache

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env")

    database_url: str = "sqlite:///./memos.db"

    # Remote memos server; when set, shortcuts and tags are persisted there
    memos_api_url: str = ""
    memos_access_token: str = ""
    memos_api_timeout: float = 10.0

    # Owner used when a request carries no X-User-Id header
    default_user_id: int = 1


@lru_cache
def get_settings() -> Settings:
    return Settings()
