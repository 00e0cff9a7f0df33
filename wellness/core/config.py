from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


# =========================
# CONFIGURAÇÕES (.env)
# =========================

class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./wellness.db"

    SECRET_KEY: str = "troque-esta-chave-em-producao"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 30
    RESET_TOKEN_EXPIRE_MINUTES: int = 15

    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = ["http://localhost:5173"]

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    return Settings()
