# app/config/settings.py
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Configuración de la aplicación leída de variables de entorno y .env."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

    # Aplicación
    APP_NAME: str = "Equipment Reports API"
    APP_VERSION: str = "1.0.0"
    API_PREFIX: str = "/api"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # MongoDB
    MONGODB_URI: str = "mongodb://localhost:27017"
    MONGODB_DB: str = "equipment-reports"
    MONGODB_COLLECTION: str = "equipments"
    MONGODB_TIMEOUT_MS: int = 5000

    # Fotos
    UPLOAD_DIR: str = "uploads"
    UPLOADS_URL_PREFIX: str = "/uploads"
    MAX_PHOTO_SIZE: int = 5 * 1024 * 1024  # 5MB
    DELETE_PHOTOS_WITH_REPORT: bool = True

    # CORS
    CORS_ORIGINS: List[str] = ["*"]

    # Logging
    LOG_LEVEL: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()
