"""
Endpoints administrativos.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.schemas.common_schema import SuccessResponse
from app.services.case_service import case_service

router = APIRouter()

@router.delete("/reset", response_model=SuccessResponse)
async def reset_system(db: AsyncSession = Depends(deps.get_db)):
    """Vacía items, maletas y vendedoras en una única transacción."""
    await case_service.reset_system(db)
    return SuccessResponse()
