# backend/app/api/v1/api_router.py
"""
Este archivo contiene el router principal de la API.

Se encarga de registrar y configurar todos los routers por recurso.
"""

from fastapi import APIRouter

# Importación de routers especializados por dominio de negocio
from app.api.v1.endpoints import (
    sellers,
    cases,
    stats,
    ocr,
    system,
    fallback,
)

# ========================================
# CONFIGURACIÓN DEL ROUTER PRINCIPAL
# ========================================

api_router_v1 = APIRouter()

# ========================================
# REGISTRO DE ROUTERS POR DOMINIO DE NEGOCIO
# ========================================

# ROUTER DE VENDEDORAS
api_router_v1.include_router(
    sellers.router,
    prefix="/sellers",              # Prefijo: /api/sellers
    tags=["Sellers"]
)

# ROUTER DE MALETAS
# Ciclo de vida completo: creación, reemplazo, estado y borrados
api_router_v1.include_router(
    cases.router,
    prefix="/cases",
    tags=["Cases"]
)

# ROUTER DEL PANEL DE CONTROL
api_router_v1.include_router(
    stats.router,
    prefix="/stats",
    tags=["Stats"]
)

# ROUTER DE RECONOCIMIENTO DE IMÁGENES
api_router_v1.include_router(
    ocr.router,
    prefix="/ocr",
    tags=["OCR"]
)

# ROUTER DE ADMINISTRACIÓN
api_router_v1.include_router(
    system.router,
    prefix="/system",
    tags=["System"]
)

# RUTAS NO ENCONTRADAS
# Debe registrarse el último para no ocultar ninguna ruta real
api_router_v1.include_router(fallback.router)
