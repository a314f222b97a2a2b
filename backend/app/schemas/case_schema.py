# backend/app/schemas/case_schema.py
"""
Se encarga de definir los esquemas Pydantic para los modelos Case (maleta) y CaseItem.
"""

from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel, ConfigDict, Field

from app.db.models.case_model import CaseStatus

class CaseItemBase(BaseModel):
    """Propiedades base para un item dentro de una maleta."""
    description: str = Field(..., min_length=1, description="Descripción libre de la pieza")
    price: Optional[float] = Field(None, ge=0, description="Precio; null si aún no tiene precio")

class CaseItemCreate(CaseItemBase):
    pass

class CaseItem(CaseItemBase):
    """Esquema de respuesta para un item de maleta."""
    id: int
    case_id: int

    model_config = ConfigDict(from_attributes=True)

class CaseWrite(BaseModel):
    """
    Cuerpo común de creación y reemplazo de maleta.

    Los importes que se envían se guardan tal cual. Los que se omiten se
    calculan en el servidor a partir de los items y la comisión vigente.
    """
    seller_id: int = Field(..., description="ID de la vendedora responsable")
    photo: Optional[str] = Field(None, description="Primera foto: data URI o URL")
    items: List[CaseItemCreate] = Field(default_factory=list, description="Items de la maleta")
    total_gross: Optional[float] = Field(None, ge=0, description="Suma de los precios de los items")
    commission_value: Optional[float] = Field(None, ge=0, description="total_gross x comisión")
    estimated_profit: Optional[float] = Field(None, description="total_gross - commission_value")

class CaseCreate(CaseWrite):
    pass

class CaseReplace(CaseWrite):
    """Reemplazo completo: los items no reenviados se pierden."""
    pass

class CaseStatusUpdate(BaseModel):
    """Esquema para actualizar únicamente el estado de una maleta."""
    status: CaseStatus = Field(..., description="Nuevo estado de la maleta")

class Case(BaseModel):
    """Esquema de respuesta para una maleta, con el nombre de la vendedora."""
    id: int
    seller_id: Optional[int] = None
    seller_name: Optional[str] = None
    status: CaseStatus
    photo: Optional[str] = None
    total_gross: float
    commission_value: float
    estimated_profit: float
    delivery_date: Optional[datetime] = None
    return_date: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

class CaseDetail(Case):
    """Maleta con su lista de items."""
    items: List[CaseItem] = []

class ShareLink(BaseModel):
    """Mensaje de entrega y enlace de WhatsApp listo para abrir."""
    phone: str
    message: str
    url: str
