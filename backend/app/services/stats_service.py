# backend/app/services/stats_service.py
"""
Servicio del panel de control: totales de maletas y ranking de vendedoras.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.crud import stats_crud
from app.schemas.stats_schema import DashboardStats, RankingEntry


class StatsService:

    async def get_dashboard(self, db: AsyncSession) -> DashboardStats:
        """
        Consulta de solo lectura con el recuento total, los totales de las
        maletas en campo y las vendedoras con más valor bruto en campo.
        """
        totals = await stats_crud.get_case_totals(db)
        ranking = await stats_crud.get_seller_ranking(db, limit=settings.RANKING_LIMIT)
        return DashboardStats(
            total_cases=totals["total_cases"] or 0,
            cases_in_field=totals["cases_in_field"] or 0,
            total_gross=totals["total_gross"] or 0.0,
            total_commission=totals["total_commission"] or 0.0,
            total_profit_estimated=totals["total_profit_estimated"] or 0.0,
            ranking=[RankingEntry(**entry) for entry in ranking],
        )


stats_service = StatsService()
