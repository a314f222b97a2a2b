"""
Endpoints de reconocimiento de items a partir de fotos.
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from app.api import deps
from app.schemas import recognition_schema
from app.services.recognition_service import RecognitionFailed, RecognitionService, merge_recognized_items

logger = logging.getLogger(__name__)
router = APIRouter()

@router.post("", response_model=recognition_schema.RecognitionResponse)
async def recognize_image(
    request_in: recognition_schema.RecognitionRequest,
    recognition_service: RecognitionService = Depends(deps.get_recognition_service),
):
    """Identifica las piezas de una imagen. Responde 500 si el reconocimiento falla."""
    try:
        items = await recognition_service.recognize(request_in.image)
    except RecognitionFailed as e:
        logger.error(f"❌ OCR: {e}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to process image")
    return recognition_schema.RecognitionResponse(items=items)

@router.post("/batch", response_model=recognition_schema.BatchRecognitionResponse)
async def recognize_images(
    request_in: recognition_schema.BatchRecognitionRequest,
    recognition_service: RecognitionService = Depends(deps.get_recognition_service),
):
    """
    Procesa varias imágenes; cada una puede fallar por separado.
    El resultado incluye el detalle por imagen y la unión de los items reconocidos.
    """
    results = await recognition_service.recognize_batch(request_in.images)
    failed = sum(1 for result in results if not result.ok)
    if failed:
        logger.warning(f"⚠️ OCR: {failed} de {len(results)} imágenes fallaron")
    return recognition_schema.BatchRecognitionResponse(results=results, items=merge_recognized_items(results))
