"""
Endpoint del panel de control.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.api import deps
from app.schemas.stats_schema import DashboardStats
from app.services.stats_service import stats_service

router = APIRouter()

@router.get("", response_model=DashboardStats)
async def read_stats(db: AsyncSession = Depends(deps.get_db)) -> DashboardStats:
    """Totales de maletas en campo y ranking de vendedoras."""
    return await stats_service.get_dashboard(db)
