# backend/app/core/config.py
"""
Este archivo contiene la configuración de la aplicación.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from pathlib import Path

# Apunta al directorio 'backend/'
BASE_DIR = Path(__file__).resolve().parent.parent.parent

class Settings(BaseSettings):
    """
    Configuración de la aplicación usando Pydantic BaseSettings.
    Variables sensibles desde .env, defaults seguros para el resto.
    """
    # Configuración general del proyecto
    BASE_DIR: Path = BASE_DIR
    API_V1_STR: str = "/api"
    PROJECT_NAME: str = "Maleta Hub API"
    PROJECT_VERSION: str = "0.1.0"

    # Configuración de la base de datos
    # SQLite local por defecto; para PostgreSQL usar postgresql+asyncpg://...
    DATABASE_URL: str = "sqlite+aiosqlite:///./maleta_hub.db"
    DB_ECHO: bool = False
    SEED_ON_STARTUP: bool = True

    # Reglas de negocio
    CASE_RETURN_DAYS: int = 60
    DEFAULT_COMMISSION_RATE: float = 0.3
    RANKING_LIMIT: int = 5

    # OpenAI - Del .env (sensibles)
    OPENAI_API_KEY: Optional[str] = None
    OPENAI_VISION_MODEL: str = "gpt-4o-mini"
    RECOGNITION_TIMEOUT: float = 30.0
    RECOGNITION_MAX_CONCURRENCY: int = 4

    # Frontend compilado (SPA)
    STATIC_DIR: str = "dist"

    # Logging - Defaults seguros
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_FILE_PATH: Optional[str] = None

    # Server - Del .env con defaults
    HOST: str = "0.0.0.0"
    PORT: int = 3000

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

# Instancia global de la configuración
settings = Settings()
