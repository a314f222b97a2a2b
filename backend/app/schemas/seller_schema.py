# backend/app/schemas/seller_schema.py

"""
Esquemas Pydantic para el modelo Seller.

Patrón de esquemas utilizado:
- SellerBase: Propiedades comunes compartidas
- SellerCreate: Para crear nuevas vendedoras (POST)
- SellerUpdate: Reemplazo completo de nombre, teléfono y comisión (PUT)
- SellerResponse: Para respuestas de la API (GET)
"""

from datetime import datetime
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field

# ========================================
# ESQUEMA BASE
# ========================================

class SellerBase(BaseModel):
    """Propiedades comunes compartidas entre esquemas de vendedora."""
    name: str = Field(..., min_length=1, description="Nombre de la vendedora")
    phone: str = Field(..., min_length=1, description="Teléfono tal como se introdujo")
    commission_rate: float = Field(0.3, ge=0, le=1, description="Comisión como fracción entre 0 y 1")


# ========================================
# ESQUEMAS PARA OPERACIONES
# ========================================

class SellerCreate(SellerBase):
    """Esquema para crear una nueva vendedora. El ID lo asigna la base de datos."""
    pass


class SellerUpdate(SellerBase):
    """Reemplazo completo: nombre, teléfono y comisión son obligatorios."""
    commission_rate: float = Field(..., ge=0, le=1, description="Comisión como fracción entre 0 y 1")


# ========================================
# ESQUEMA DE RESPUESTA
# ========================================

class SellerResponse(SellerBase):
    """Esquema para las respuestas de la API al leer vendedoras."""
    id: int
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)
