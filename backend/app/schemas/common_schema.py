# backend/app/schemas/common_schema.py
"""
Respuestas genéricas compartidas por varios endpoints.
"""

from pydantic import BaseModel


class IdResponse(BaseModel):
    """Identificador del registro recién creado."""
    id: int


class SuccessResponse(BaseModel):
    success: bool = True


class BulkDeleteResponse(SuccessResponse):
    """Resultado de un borrado masivo con el número de filas afectadas."""
    changes: int
