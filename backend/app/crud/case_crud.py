# backend/app/crud/case_crud.py
"""
Operaciones CRUD para el modelo Case (maleta) y sus items.

Las escrituras compuestas (crear y reemplazar) se confirman con un único
commit, de modo que o se persisten todos los pasos o ninguno. Los borrados
de maletas dependen de ON DELETE CASCADE para eliminar los items.
"""

from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Tuple
from sqlalchemy import select, delete, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from app.db.models.case_model import Case, CaseItem, CaseStatus
from app.db.models.seller_model import Seller
from app.schemas.case_schema import CaseItemCreate

# ========================================
# OPERACIONES DE LECTURA
# ========================================

async def get_case(db: AsyncSession, case_id: int, with_items: bool = False) -> Optional[Case]:
    """
    Obtiene una maleta por su ID, opcionalmente con sus items y su vendedora.
    """
    query = select(Case).filter(Case.id == case_id)
    if with_items:
        query = query.options(selectinload(Case.items), selectinload(Case.seller))
    result = await db.execute(query)
    return result.scalars().first()

async def get_cases_with_seller_name(db: AsyncSession) -> List[Tuple[Case, Optional[str]]]:
    """
    Lista todas las maletas junto al nombre de su vendedora, las más recientes primero.
    """
    query = (
        select(Case, Seller.name)
        .outerjoin(Seller, Case.seller_id == Seller.id)
        .order_by(Case.created_at.desc(), Case.id.desc())
    )
    result = await db.execute(query)
    return [(row[0], row[1]) for row in result.all()]

async def get_case_items(db: AsyncSession, case_id: int) -> List[CaseItem]:
    """
    Obtiene los items de una maleta en orden de inserción.
    """
    query = select(CaseItem).filter(CaseItem.case_id == case_id).order_by(CaseItem.id)
    result = await db.execute(query)
    return result.scalars().all()

# ========================================
# OPERACIONES DE ESCRITURA
# ========================================

def _add_items(db: AsyncSession, case_id: int, items: Iterable[CaseItemCreate]) -> None:
    for item in items:
        db.add(CaseItem(case_id=case_id, description=item.description, price=item.price))

async def create_case(
    db: AsyncSession,
    *,
    seller_id: int,
    photo: Optional[str],
    items: List[CaseItemCreate],
    totals: Dict[str, float],
    delivery_date: datetime,
    return_date: datetime,
) -> Case:
    """
    Inserta la maleta en estado InField y a continuación todos sus items.
    Ambos pasos se confirman juntos.
    """
    db_case = Case(
        seller_id=seller_id,
        status=CaseStatus.IN_FIELD.value,
        photo=photo,
        total_gross=totals["total_gross"],
        commission_value=totals["commission_value"],
        estimated_profit=totals["estimated_profit"],
        delivery_date=delivery_date,
        return_date=return_date,
    )
    db.add(db_case)
    await db.flush()  # Necesitamos el ID antes de insertar los items

    _add_items(db, db_case.id, items)

    await db.commit()
    await db.refresh(db_case)
    return db_case

async def replace_case(
    db: AsyncSession,
    case_id: int,
    *,
    seller_id: int,
    items: List[CaseItemCreate],
    totals: Dict[str, Any],
) -> int:
    """
    Sobrescribe vendedora y totales, borra los items actuales y reinserta la lista dada.

    Returns:
        Número de maletas actualizadas (0 si no existía)
    """
    result = await db.execute(
        update(Case)
        .where(Case.id == case_id)
        .values(seller_id=seller_id, **totals)
    )
    if result.rowcount == 0:
        await db.rollback()
        return 0

    await db.execute(delete(CaseItem).where(CaseItem.case_id == case_id))
    _add_items(db, case_id, items)

    await db.commit()
    return result.rowcount

async def update_case_status(db: AsyncSession, case_id: int, status: CaseStatus) -> int:
    """
    Actualiza únicamente el estado de una maleta.
    """
    result = await db.execute(update(Case).where(Case.id == case_id).values(status=status.value))
    await db.commit()
    return result.rowcount

async def delete_case(db: AsyncSession, case_id: int) -> int:
    """
    Elimina una maleta; sus items se eliminan por cascada.
    """
    result = await db.execute(delete(Case).where(Case.id == case_id))
    await db.commit()
    return result.rowcount

async def delete_cases_by_status(db: AsyncSession, status: CaseStatus) -> int:
    """
    Elimina todas las maletas con el estado dado y devuelve cuántas se borraron.
    """
    result = await db.execute(delete(Case).where(Case.status == status.value))
    await db.commit()
    return result.rowcount

async def reset_all(db: AsyncSession) -> None:
    """
    Vacía items, maletas y vendedoras, en ese orden, dentro de una transacción.
    """
    await db.execute(delete(CaseItem))
    await db.execute(delete(Case))
    await db.execute(delete(Seller))
    await db.commit()
