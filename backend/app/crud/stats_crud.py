# backend/app/crud/stats_crud.py
"""
Consultas de agregación para el panel de control.
"""

from typing import Any, Dict, List
from sqlalchemy import select, func, desc
from sqlalchemy import case as sql_case
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.case_model import Case, CaseStatus
from app.db.models.seller_model import Seller


async def get_case_totals(db: AsyncSession) -> Dict[str, Any]:
    """
    Número total de maletas y totales financieros de las que están en campo.
    """
    in_field = Case.status == CaseStatus.IN_FIELD.value

    def _sum_in_field(column):
        return func.coalesce(func.sum(sql_case((in_field, column), else_=0)), 0)

    query = select(
        func.count(Case.id).label("total_cases"),
        _sum_in_field(1).label("cases_in_field"),
        _sum_in_field(Case.total_gross).label("total_gross"),
        _sum_in_field(Case.commission_value).label("total_commission"),
        _sum_in_field(Case.estimated_profit).label("total_profit_estimated"),
    )
    result = await db.execute(query)
    return dict(result.mappings().one())


async def get_seller_ranking(db: AsyncSession, limit: int = 5) -> List[Dict[str, Any]]:
    """
    Ranking de vendedoras por valor bruto en campo. Empates resueltos por ID de vendedora.
    """
    total_value = func.sum(Case.total_gross).label("total_value")
    query = (
        select(Seller.id.label("seller_id"), Seller.name, total_value)
        .join(Case, Case.seller_id == Seller.id)
        .filter(Case.status == CaseStatus.IN_FIELD.value)
        .group_by(Seller.id, Seller.name)
        .order_by(desc("total_value"), Seller.id.asc())
        .limit(limit)
    )
    result = await db.execute(query)
    return [dict(row) for row in result.mappings().all()]
