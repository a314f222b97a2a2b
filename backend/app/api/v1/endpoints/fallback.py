"""
Respuesta 404 estructurada para cualquier ruta /api no registrada.
"""

from fastapi import APIRouter, HTTPException, status

router = APIRouter()

@router.api_route(
    "/{full_path:path}",
    methods=["GET", "POST", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def api_route_not_found(full_path: str):
    raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="API route not found")
