# app/core/config.py
from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    APP_NAME: str = "Perfiles API"
    APP_VERSION: str = "0.1.0"
    ENV: str = "development"  # development | production | test

    DATABASE_URL: str = "sqlite:///./perfiles.db"

    # Tokens são emitidos pelo serviço de autenticação; aqui só validamos
    JWT_SECRET: str = "change-me"
    JWT_ALGORITHM: str = "HS256"

    # Filtros
    FILTERS_DEFAULT_LIMIT: int = 20
    FILTERS_MAX_LIMIT: int = 100
    FILTERS_PARALLEL_READS: bool = True

    @property
    def is_production(self) -> bool:
        return self.ENV.lower() == "production"


settings = Settings()
