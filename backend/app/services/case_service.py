# backend/app/services/case_service.py
"""
Servicio para el ciclo de vida de las maletas.

Orquesta las operaciones de creación, reemplazo, cambio de estado y borrado
de maletas, incluyendo el cálculo de fechas de entrega/devolución y de los
importes que el cliente no haya enviado. Los importes enviados se persisten
tal cual, sin recalcular.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Dict, Iterable, List, Optional

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status

from app.core.config import settings
from app.crud import case_crud
from app.db.models.case_model import CaseStatus
from app.schemas import case_schema
from app.services.seller_service import seller_service
from app.services.messaging_service import build_case_share_link

logger = logging.getLogger(__name__)


def compute_totals(
    items: Iterable[case_schema.CaseItemCreate],
    commission_rate: float,
    total_gross: Optional[float] = None,
    commission_value: Optional[float] = None,
    estimated_profit: Optional[float] = None,
) -> Dict[str, float]:
    """
    Completa los importes de una maleta.

    Los valores recibidos se devuelven sin tocar; solo se calculan los que
    faltan: total bruto como suma de precios (null cuenta como 0), comisión
    como total x comisión y beneficio como total - comisión.
    """
    if total_gross is None:
        total_gross = round(sum(item.price or 0 for item in items), 2)
    if commission_value is None:
        commission_value = round(total_gross * commission_rate, 2)
    if estimated_profit is None:
        estimated_profit = round(total_gross - commission_value, 2)
    return {
        "total_gross": total_gross,
        "commission_value": commission_value,
        "estimated_profit": estimated_profit,
    }


def _to_case_schema(db_case, seller_name: Optional[str]) -> case_schema.Case:
    case = case_schema.Case.model_validate(db_case)
    return case.model_copy(update={"seller_name": seller_name})


class CaseService:
    """
    Servicio de negocio para maletas.
    """

    async def _internal_failure(self, db: AsyncSession, message: str) -> HTTPException:
        await db.rollback()
        logger.exception(f"❌ ERROR: {message}")
        return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=message)

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def list_cases(self, db: AsyncSession) -> List[case_schema.Case]:
        rows = await case_crud.get_cases_with_seller_name(db)
        return [_to_case_schema(db_case, seller_name) for db_case, seller_name in rows]

    async def get_case_detail(self, db: AsyncSession, case_id: int) -> case_schema.CaseDetail:
        db_case = await case_crud.get_case(db, case_id=case_id, with_items=True)
        if not db_case:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Case not found")
        detail = case_schema.CaseDetail.model_validate(db_case)
        seller_name = db_case.seller.name if db_case.seller else None
        return detail.model_copy(update={"seller_name": seller_name})

    async def list_items(self, db: AsyncSession, case_id: int):
        """Items de una maleta. Una maleta inexistente devuelve lista vacía."""
        return await case_crud.get_case_items(db, case_id=case_id)

    async def build_share_link(self, db: AsyncSession, case_id: int) -> case_schema.ShareLink:
        """
        Compone el informe de entrega y el enlace de WhatsApp de una maleta.
        """
        db_case = await case_crud.get_case(db, case_id=case_id, with_items=True)
        if not db_case:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Case not found")
        if not db_case.seller:
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Case has no seller")
        return build_case_share_link(db_case, db_case.seller, db_case.items)

    # ========================================
    # OPERACIONES DE ESCRITURA
    # ========================================

    async def create_case(self, db: AsyncSession, case_in: case_schema.CaseCreate) -> int:
        """
        Crea una maleta en campo con todos sus items en una sola transacción.

        La fecha de devolución es la de entrega más CASE_RETURN_DAYS días.

        Returns:
            ID de la nueva maleta
        """
        seller = await seller_service.get_seller_or_404(db, case_in.seller_id)
        totals = compute_totals(
            case_in.items,
            seller.commission_rate,
            total_gross=case_in.total_gross,
            commission_value=case_in.commission_value,
            estimated_profit=case_in.estimated_profit,
        )

        delivery_date = datetime.now(timezone.utc)
        return_date = delivery_date + timedelta(days=settings.CASE_RETURN_DAYS)

        try:
            db_case = await case_crud.create_case(
                db,
                seller_id=seller.id,
                photo=case_in.photo,
                items=case_in.items,
                totals=totals,
                delivery_date=delivery_date,
                return_date=return_date,
            )
        except SQLAlchemyError:
            raise await self._internal_failure(db, "Error creating case")

        logger.info(
            f"🆕 MALETA: Creada ID {db_case.id} para vendedora {seller.id} "
            f"con {len(case_in.items)} items (bruto {totals['total_gross']})"
        )
        return db_case.id

    async def replace_case(self, db: AsyncSession, case_id: int, case_in: case_schema.CaseReplace) -> None:
        """
        Reemplazo completo: vendedora, totales e items. No es un merge; los
        items que no se reenvían se pierden.
        """
        seller = await seller_service.get_seller_or_404(db, case_in.seller_id)
        totals = compute_totals(
            case_in.items,
            seller.commission_rate,
            total_gross=case_in.total_gross,
            commission_value=case_in.commission_value,
            estimated_profit=case_in.estimated_profit,
        )

        try:
            updated = await case_crud.replace_case(db, case_id, seller_id=seller.id, items=case_in.items, totals=totals)
        except SQLAlchemyError:
            raise await self._internal_failure(db, "Error updating case")

        if not updated:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Case not found")
        logger.info(f"🔄 MALETA: Reemplazada ID {case_id} con {len(case_in.items)} items")

    async def change_status(self, db: AsyncSession, case_id: int, new_status: CaseStatus) -> None:
        """
        Cambia el estado de una maleta. Cualquier transición está permitida.
        """
        try:
            updated = await case_crud.update_case_status(db, case_id, new_status)
        except SQLAlchemyError:
            raise await self._internal_failure(db, "Error updating case status")

        if not updated:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Case not found")
        logger.info(f"🔁 MALETA: ID {case_id} pasa a estado {new_status.value}")

    async def delete_case(self, db: AsyncSession, case_id: int) -> None:
        try:
            deleted = await case_crud.delete_case(db, case_id)
        except SQLAlchemyError:
            raise await self._internal_failure(db, "Error deleting case")

        if not deleted:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Case not found")
        logger.info(f"🗑️ MALETA: Eliminada ID {case_id}")

    async def delete_cases_by_status(self, db: AsyncSession, case_status: CaseStatus) -> int:
        try:
            changes = await case_crud.delete_cases_by_status(db, case_status)
        except SQLAlchemyError:
            raise await self._internal_failure(db, "Error deleting cases")

        logger.info(f"🗑️ MALETA: {changes} maletas eliminadas con estado {case_status.value}")
        return changes

    async def reset_system(self, db: AsyncSession) -> None:
        """
        Borrado administrativo de todas las tablas.
        """
        try:
            await case_crud.reset_all(db)
        except SQLAlchemyError:
            raise await self._internal_failure(db, "Error resetting system")
        logger.warning("⚠️ SISTEMA: Todas las tablas han sido vaciadas")

# ========================================
# INSTANCIA SINGLETON DEL SERVICIO
# ========================================

case_service = CaseService()
