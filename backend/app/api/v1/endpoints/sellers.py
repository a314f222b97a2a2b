"""
Endpoints REST para operaciones CRUD de vendedoras.
"""

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.api import deps
from app.schemas import seller_schema
from app.schemas.common_schema import IdResponse, SuccessResponse
from app.services.seller_service import seller_service

router = APIRouter()

@router.get("", response_model=List[seller_schema.SellerResponse])
async def read_sellers(
    db: AsyncSession = Depends(deps.get_db),
) -> List[seller_schema.SellerResponse]:
    """Lista todas las vendedoras ordenadas por nombre."""
    return await seller_service.list_sellers(db)

@router.post("", response_model=IdResponse, status_code=status.HTTP_200_OK)
async def create_seller(
    *,
    db: AsyncSession = Depends(deps.get_db),
    seller_in: seller_schema.SellerCreate,
) -> IdResponse:
    """Crea una nueva vendedora y devuelve su ID."""
    seller = await seller_service.create_seller(db, seller_in=seller_in)
    return IdResponse(id=seller.id)

@router.put("/{seller_id}", response_model=SuccessResponse)
async def update_seller(
    *,
    db: AsyncSession = Depends(deps.get_db),
    seller_id: int,
    seller_in: seller_schema.SellerUpdate,
) -> SuccessResponse:
    """Reemplaza nombre, teléfono y comisión de una vendedora."""
    await seller_service.update_seller(db, seller_id=seller_id, seller_in=seller_in)
    return SuccessResponse()

@router.delete("/{seller_id}", response_model=SuccessResponse)
async def delete_seller(
    *,
    db: AsyncSession = Depends(deps.get_db),
    seller_id: int,
) -> SuccessResponse:
    """Elimina una vendedora. Responde 400 si aún tiene maletas vinculadas."""
    await seller_service.delete_seller(db, seller_id=seller_id)
    return SuccessResponse()
