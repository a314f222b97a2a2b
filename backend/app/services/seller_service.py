# backend/app/services/seller_service.py
"""
Servicio para operaciones de negocio relacionadas con vendedoras.

Centraliza las validaciones de existencia y la regla de integridad referencial:
una vendedora con maletas vinculadas no puede eliminarse. La comprobación se
hace explícitamente antes del borrado en lugar de depender de un error de
constraint de la base de datos.
"""

import logging
from typing import List

from fastapi import HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from starlette import status

from app.crud import seller_crud
from app.db.models.seller_model import Seller
from app.schemas import seller_schema

logger = logging.getLogger(__name__)

SELLER_HAS_CASES_DETAIL = "Cannot delete seller: cases still linked."

class SellerService:
    """
    Servicio para operaciones de negocio relacionadas con vendedoras.
    """

    # ========================================
    # OPERACIONES DE CONSULTA
    # ========================================

    async def list_sellers(self, db: AsyncSession) -> List[Seller]:
        """Devuelve todas las vendedoras ordenadas por nombre."""
        return await seller_crud.get_sellers(db)

    async def get_seller_or_404(self, db: AsyncSession, seller_id: int) -> Seller:
        seller = await seller_crud.get_seller(db, seller_id=seller_id)
        if not seller:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Seller with ID {seller_id} not found.")
        return seller

    # ========================================
    # OPERACIONES DE ESCRITURA
    # ========================================

    async def create_seller(self, db: AsyncSession, seller_in: seller_schema.SellerCreate) -> Seller:
        try:
            seller = await seller_crud.create_seller(db, seller=seller_in)
        except SQLAlchemyError:
            await db.rollback()
            logger.exception("❌ ERROR: Fallo al crear vendedora")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error creating seller")
        logger.info(f"✅ VENDEDORA: Creada '{seller.name}' (ID {seller.id})")
        return seller

    async def update_seller(self, db: AsyncSession, seller_id: int, seller_in: seller_schema.SellerUpdate) -> Seller:
        """
        Reemplaza los datos de una vendedora.

        Los cambios de comisión no recalculan maletas ya guardadas: cada maleta
        conserva los importes calculados con la comisión vigente al guardarla.
        """
        try:
            seller = await seller_crud.update_seller(db, seller_id=seller_id, seller_update=seller_in)
        except SQLAlchemyError:
            await db.rollback()
            logger.exception(f"❌ ERROR: Fallo al actualizar vendedora {seller_id}")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error updating seller")
        if not seller:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=f"Seller with ID {seller_id} not found.")
        logger.info(f"🔄 VENDEDORA: Actualizada ID {seller_id}")
        return seller

    async def delete_seller(self, db: AsyncSession, seller_id: int) -> None:
        """
        Elimina una vendedora si no tiene maletas vinculadas.

        Raises:
            HTTPException 404 si no existe, 400 si aún tiene maletas.
        """
        await self.get_seller_or_404(db, seller_id)

        linked = await seller_crud.count_cases_for_seller(db, seller_id=seller_id)
        if linked > 0:
            logger.warning(f"⚠️ VENDEDORA: Borrado bloqueado para ID {seller_id}, {linked} maletas vinculadas")
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=SELLER_HAS_CASES_DETAIL)

        try:
            await seller_crud.delete_seller(db, seller_id=seller_id)
        except SQLAlchemyError:
            await db.rollback()
            logger.exception(f"❌ ERROR: Fallo al eliminar vendedora {seller_id}")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Error deleting seller")
        logger.info(f"🗑️ VENDEDORA: Eliminada ID {seller_id}")

# ========================================
# INSTANCIA SINGLETON DEL SERVICIO
# ========================================

seller_service = SellerService()
