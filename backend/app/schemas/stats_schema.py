# backend/app/schemas/stats_schema.py
"""
Esquemas de respuesta del panel de estadísticas.
"""

from typing import List
from pydantic import BaseModel


class RankingEntry(BaseModel):
    seller_id: int
    name: str
    total_value: float


class DashboardStats(BaseModel):
    """Totales generales y de las maletas en campo, más el ranking de vendedoras."""
    total_cases: int = 0
    cases_in_field: int = 0
    total_gross: float = 0.0
    total_commission: float = 0.0
    total_profit_estimated: float = 0.0
    ranking: List[RankingEntry] = []
