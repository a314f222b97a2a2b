# backend/app/main.py
"""
Punto de entrada principal de la aplicación FastAPI.

Este módulo configura y inicializa la aplicación completa: registro de
rutas de la API bajo /api, servicio opcional del frontend compilado y
eventos del ciclo de vida (logging, creación del esquema y datos iniciales).
"""

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from app.core.config import settings  # Configuración centralizada de la aplicación
from app.core.logging_setup import setup_logging
from app.api.v1.api_router import api_router_v1  # Router principal de la API
from app.db.database import AsyncSessionLocal, init_db
from app.db.seed import seed_sellers

logger = logging.getLogger(__name__)

# ========================================
# CONFIGURACIÓN DE LA APLICACIÓN FASTAPI
# ========================================

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_V1_STR}/openapi.json",
    version=settings.PROJECT_VERSION,
    description="API para el control de maletas en consignación de Hub Soberano"
)

# ========================================
# REGISTRO DE ROUTERS DE LA API
# ========================================

app.include_router(api_router_v1, prefix=settings.API_V1_STR)

# ========================================
# FRONTEND O ENDPOINT RAÍZ
# ========================================

static_dir = Path(settings.STATIC_DIR)
if static_dir.is_dir():
    # Las rutas que no son /api sirven el frontend compilado
    app.mount("/", StaticFiles(directory=static_dir, html=True), name="frontend")
else:
    @app.get("/", tags=["Root"])
    async def read_root():
        """
        Endpoint raíz para verificación básica del estado de la API.

        Returns:
            dict: Mensaje de bienvenida con información del proyecto
        """
        return {"message": f"Bienvenido a {settings.PROJECT_NAME} v{settings.PROJECT_VERSION}"}

# ========================================
# EVENTOS DEL CICLO DE VIDA DE LA APLICACIÓN
# ========================================

@app.on_event("startup")
async def startup_event():
    """
    Evento ejecutado al iniciar la aplicación.

    Tareas de inicialización:
    - Configuración del logging
    - Creación explícita del esquema de base de datos
    - Carga de vendedoras de ejemplo si SEED_ON_STARTUP está activo
    """
    setup_logging()
    await init_db()
    logger.info("✅ Esquema de base de datos inicializado")

    if settings.SEED_ON_STARTUP:
        async with AsyncSessionLocal() as session:
            await seed_sellers(session)

    logger.info(f"🚀 {settings.PROJECT_NAME} escuchando en http://{settings.HOST}:{settings.PORT}")


def run() -> None:
    """Arranca el servidor con uvicorn usando HOST y PORT de la configuración."""
    import uvicorn

    uvicorn.run("app.main:app", host=settings.HOST, port=settings.PORT)


if __name__ == "__main__":
    run()
