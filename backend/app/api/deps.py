# backend/app/api/deps.py
"""
Módulo de dependencias para FastAPI.

Este archivo centraliza todas las dependencias que pueden ser inyectadas
en los endpoints de la API: sesión de base de datos, configuración y el
servicio de reconocimiento de imágenes. En los tests se sustituyen mediante
app.dependency_overrides.
"""

from functools import lru_cache
from typing import AsyncGenerator
from openai import AsyncOpenAI
from sqlalchemy.ext.asyncio import AsyncSession
from app.db.database import AsyncSessionLocal
from app.core.config import settings
from app.services.recognition_service import RecognitionService

async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependencia de FastAPI para obtener una sesión de base de datos asíncrona.
    Se asegura de que la sesión se cierre siempre después de la petición.
    """
    async with AsyncSessionLocal() as session:
        yield session

def get_settings():
    """
    Dependencia de FastAPI para obtener el objeto de configuración.
    """
    return settings

@lru_cache()
def get_recognition_service() -> RecognitionService:
    """
    Dependencia para obtener el servicio de reconocimiento (una instancia por proceso).
    """
    openai_client = AsyncOpenAI(api_key=settings.OPENAI_API_KEY) if settings.OPENAI_API_KEY else None
    return RecognitionService(
        openai_client,
        model=settings.OPENAI_VISION_MODEL,
        timeout=settings.RECOGNITION_TIMEOUT,
        max_concurrency=settings.RECOGNITION_MAX_CONCURRENCY,
    )
