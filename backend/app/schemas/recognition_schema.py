# backend/app/schemas/recognition_schema.py
"""
Esquemas del reconocimiento de items a partir de fotos.
"""

from typing import List, Optional
from pydantic import BaseModel, Field


class RecognizedItem(BaseModel):
    """Candidato identificado en una foto."""
    description: str
    price: Optional[float] = None


class RecognitionRequest(BaseModel):
    image: str = Field(..., min_length=1, description="Imagen en base64 o data URI")


class RecognitionResponse(BaseModel):
    items: List[RecognizedItem] = []


class BatchRecognitionRequest(BaseModel):
    images: List[str] = Field(..., min_length=1, description="Imágenes en base64 o data URI")


class ImageRecognitionResult(BaseModel):
    """Resultado por imagen: items si tuvo éxito, motivo del fallo si no."""
    index: int
    ok: bool
    items: List[RecognizedItem] = []
    error: Optional[str] = None


class BatchRecognitionResponse(BaseModel):
    results: List[ImageRecognitionResult]
    items: List[RecognizedItem] = []  # Unión de los items de las imágenes correctas
