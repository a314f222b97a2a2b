# backend/app/crud/seller_crud.py

"""
Operaciones CRUD para el modelo Seller.

Este módulo implementa las operaciones de Create, Read, Update, Delete para
vendedoras, proporcionando una capa de abstracción entre los endpoints de la
API y la base de datos. Las reglas de negocio (p. ej. no borrar vendedoras
con maletas vinculadas) viven en el servicio, no aquí.
"""

from typing import List, Optional
from sqlalchemy import select, func, delete
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.seller_model import Seller
from app.db.models.case_model import Case
from app.schemas import seller_schema

# ========================================
# OPERACIONES DE LECTURA (READ)
# ========================================

async def get_seller(db: AsyncSession, seller_id: int) -> Optional[Seller]:
    """
    Obtiene una vendedora por su ID.

    Args:
        db: Sesión de SQLAlchemy
        seller_id: ID único de la vendedora

    Returns:
        Objeto Seller si existe, None si no se encuentra
    """
    result = await db.execute(select(Seller).filter(Seller.id == seller_id))
    return result.scalars().first()


async def get_sellers(db: AsyncSession) -> List[Seller]:
    """
    Obtiene todas las vendedoras ordenadas alfabéticamente por nombre.
    """
    result = await db.execute(select(Seller).order_by(Seller.name.asc(), Seller.id.asc()))
    return result.scalars().all()


async def count_cases_for_seller(db: AsyncSession, seller_id: int) -> int:
    """
    Cuenta las maletas que referencian a una vendedora.
    """
    count = await db.scalar(select(func.count(Case.id)).filter(Case.seller_id == seller_id))
    return count or 0

# ========================================
# OPERACIONES DE ESCRITURA (CREATE, UPDATE, DELETE)
# ========================================

async def create_seller(db: AsyncSession, seller: seller_schema.SellerCreate) -> Seller:
    """
    Crea una nueva vendedora. El ID se asigna en la inserción.
    """
    db_seller = Seller(
        name=seller.name,
        phone=seller.phone,
        commission_rate=seller.commission_rate,
    )
    db.add(db_seller)
    await db.commit()  # Persiste en la base de datos
    await db.refresh(db_seller)  # Recarga el objeto con datos actualizados de la BD
    return db_seller


async def update_seller(db: AsyncSession, seller_id: int, seller_update: seller_schema.SellerUpdate) -> Optional[Seller]:
    """
    Reemplaza nombre, teléfono y comisión de una vendedora existente.

    Returns:
        Objeto Seller actualizado, o None si no existe
    """
    db_seller = await get_seller(db, seller_id=seller_id)
    if not db_seller:
        return None

    for key, value in seller_update.model_dump().items():
        setattr(db_seller, key, value)

    db.add(db_seller)  # Marca el objeto como modificado
    await db.commit()
    await db.refresh(db_seller)
    return db_seller


async def delete_seller(db: AsyncSession, seller_id: int) -> int:
    """
    Elimina físicamente una vendedora.

    PRECONDICIÓN: Ya se ha verificado que no tiene maletas vinculadas.

    Returns:
        Número de filas eliminadas (0 si no existía)
    """
    result = await db.execute(delete(Seller).where(Seller.id == seller_id))
    await db.commit()
    return result.rowcount
