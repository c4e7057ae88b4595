"""Runtime settings, loaded once from the environment (or a .env file)."""

from functools import lru_cache
from typing import List

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    database_url: str = "sqlite:///./recipes.db"

    mealdb_base_url: str = "https://www.themealdb.com/api/json/v1/1"
    http_timeout: float = 10.0

    jwt_secret: str = Field("change-me", min_length=1)
    jwt_algorithm: str = "HS256"
    token_ttl_minutes: int = Field(120, gt=0)

    api_prefix: str = ""
    cors_origins: List[str] = ["*"]

    log_level: str = "INFO"
    log_json: bool = False

    host: str = "127.0.0.1"
    port: int = 3001

    model_config = SettingsConfigDict(
        env_prefix="RECIPE_GATEWAY_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
