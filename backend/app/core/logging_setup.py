# backend/app/core/logging_setup.py
"""
Configuración del logging de la aplicación a partir de los settings.
"""

import logging
from pathlib import Path

from app.core.config import settings


def setup_logging() -> None:
    """
    Configura el logger raíz con el nivel y formato definidos en settings.

    Si LOG_FILE_PATH está definido se añade además un handler de fichero,
    creando el directorio padre si no existe.
    """
    handlers = [logging.StreamHandler()]

    if settings.LOG_FILE_PATH:
        log_path = Path(settings.LOG_FILE_PATH)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_path, encoding="utf-8"))

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format=settings.LOG_FORMAT,
        handlers=handlers,
        force=True,
    )
    logging.getLogger(__name__).info(f"Logging configurado (nivel {settings.LOG_LEVEL.upper()})")
