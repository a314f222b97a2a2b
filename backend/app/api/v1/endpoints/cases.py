"""
Endpoints REST para el ciclo de vida de las maletas.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession
from typing import List

from app.api import deps
from app.db.models.case_model import CaseStatus
from app.schemas import case_schema
from app.schemas.common_schema import BulkDeleteResponse, IdResponse, SuccessResponse
from app.services.case_service import case_service

router = APIRouter()

# ========================================
# LECTURA
# ========================================

@router.get("", response_model=List[case_schema.Case])
async def read_cases(db: AsyncSession = Depends(deps.get_db)):
    """Lista las maletas con el nombre de su vendedora, las más recientes primero."""
    return await case_service.list_cases(db)

@router.get("/{case_id}", response_model=case_schema.CaseDetail)
async def read_case(case_id: int, db: AsyncSession = Depends(deps.get_db)):
    return await case_service.get_case_detail(db, case_id)

@router.get("/{case_id}/items", response_model=List[case_schema.CaseItem])
async def read_case_items(case_id: int, db: AsyncSession = Depends(deps.get_db)):
    """Items de una maleta."""
    return await case_service.list_items(db, case_id)

@router.get("/{case_id}/whatsapp-link", response_model=case_schema.ShareLink)
async def read_case_share_link(case_id: int, db: AsyncSession = Depends(deps.get_db)):
    """Informe de entrega y enlace de WhatsApp para la vendedora de la maleta."""
    return await case_service.build_share_link(db, case_id)

# ========================================
# ESCRITURA
# ========================================

@router.post("", response_model=IdResponse)
async def create_case(
    case_in: case_schema.CaseCreate,
    db: AsyncSession = Depends(deps.get_db),
):
    """
    Crea una maleta en campo con sus items.
    Fecha de devolución = fecha de entrega + CASE_RETURN_DAYS.
    """
    case_id = await case_service.create_case(db, case_in)
    return IdResponse(id=case_id)

@router.put("/{case_id}", response_model=SuccessResponse)
async def replace_case(
    case_id: int,
    case_in: case_schema.CaseReplace,
    db: AsyncSession = Depends(deps.get_db),
):
    """Reemplazo completo de vendedora, totales e items."""
    await case_service.replace_case(db, case_id, case_in)
    return SuccessResponse()

@router.patch("/{case_id}/status", response_model=SuccessResponse)
async def update_case_status(
    case_id: int,
    status_in: case_schema.CaseStatusUpdate,
    db: AsyncSession = Depends(deps.get_db),
):
    await case_service.change_status(db, case_id, status_in.status)
    return SuccessResponse()

@router.delete("/status/{case_status}", response_model=BulkDeleteResponse)
async def delete_cases_by_status(
    case_status: CaseStatus,
    db: AsyncSession = Depends(deps.get_db),
):
    """Elimina todas las maletas con un estado y devuelve cuántas se borraron."""
    changes = await case_service.delete_cases_by_status(db, case_status)
    return BulkDeleteResponse(changes=changes)

@router.delete("/{case_id}", response_model=SuccessResponse)
async def delete_case(case_id: int, db: AsyncSession = Depends(deps.get_db)):
    """Elimina una maleta y, por cascada, sus items."""
    await case_service.delete_case(db, case_id)
    return SuccessResponse()
