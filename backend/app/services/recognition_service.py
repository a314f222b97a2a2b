# backend/app/services/recognition_service.py
"""
Servicio de reconocimiento de items a partir de fotos de maletas.

Este componente envía la imagen a un modelo de visión de OpenAI y devuelve
la lista de piezas candidatas ({description, price?}) para prellenar la
maleta. Cualquier fallo (timeout, error de la API, respuesta ilegible) se
reporta como RecognitionFailed; no hay reintentos.

En un lote de varias imágenes cada una se procesa por separado y de forma
concurrente, y el resultado es una lista por imagen (éxito con items o
motivo del fallo), de modo que un fallo parcial no invalida el lote.
"""

import asyncio
import json
import logging
import re
from typing import Any, List, Optional, Tuple

from openai import AsyncOpenAI, OpenAIError

from app.schemas.recognition_schema import ImageRecognitionResult, RecognizedItem

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "image/jpeg"

RECOGNITION_PROMPT = """
Analiza esta imagen de una maleta de semijoyas. Identifica las piezas presentes
y sugiere una descripción corta para cada una.

Responde ÚNICAMENTE con este JSON:
{"items": [{"description": "descripción corta", "price": 0.0}]}

Si hay precios visibles inclúyelos en "price" como número; en caso contrario usa null.
"""


class RecognitionFailed(Exception):
    """La llamada al servicio de reconocimiento falló para una imagen."""


def split_data_uri(image: str) -> Tuple[str, str]:
    """
    Separa un data URI en (mime_type, payload base64).
    Si la cadena no es un data URI se considera base64 puro en JPEG.
    """
    match = re.match(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+)?(;[^,]*)?,(?P<data>.*)$", image, re.DOTALL)
    if match:
        return match.group("mime") or DEFAULT_MIME_TYPE, match.group("data").strip()
    return DEFAULT_MIME_TYPE, image.strip()


def _extract_json_from_markdown(content: str) -> str:
    """Extrae JSON de bloques de código markdown."""
    json_match = re.search(r'```json\s*\n(.*?)\n```', content, re.DOTALL)
    if json_match:
        return json_match.group(1).strip()

    code_match = re.search(r'```\s*\n(.*?)\n```', content, re.DOTALL)
    if code_match:
        return code_match.group(1).strip()

    return content.strip()


def _coerce_price(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value) if value >= 0 else None
    if isinstance(value, str):
        cleaned = re.sub(r"[^\d,.-]", "", value)
        if "," in cleaned:
            # Formato brasileño: "." separa miles y "," los decimales
            cleaned = cleaned.replace(".", "").replace(",", ".")
        try:
            price = float(cleaned)
        except ValueError:
            return None
        return price if price >= 0 else None
    return None


def parse_recognition_content(content: Optional[str]) -> List[RecognizedItem]:
    """
    Convierte la respuesta del modelo en items. Las entradas sin descripción
    se descartan; un precio ilegible queda como null.

    Raises:
        RecognitionFailed: si la respuesta no es JSON o no tiene la forma esperada.
    """
    if not content:
        raise RecognitionFailed("Empty response from recognition service")

    try:
        data = json.loads(_extract_json_from_markdown(content))
    except json.JSONDecodeError as e:
        raise RecognitionFailed(f"Invalid JSON from recognition service: {e}") from e

    raw_items = data.get("items") if isinstance(data, dict) else data
    if not isinstance(raw_items, list):
        raise RecognitionFailed("Recognition response has no item list")

    items = []
    for entry in raw_items:
        if not isinstance(entry, dict):
            continue
        description = str(entry.get("description") or "").strip()
        if not description:
            continue
        items.append(RecognizedItem(description=description, price=_coerce_price(entry.get("price"))))
    return items


class RecognitionService:
    def __init__(
        self,
        openai_client: Optional[AsyncOpenAI],
        model: str = "gpt-4o-mini",
        timeout: float = 30.0,
        max_concurrency: int = 4,
    ):
        """
        Inicializa el servicio de reconocimiento.

        Args:
            openai_client: Una instancia del cliente asíncrono de OpenAI (None si no hay API key).
            model: Modelo de visión a utilizar.
            timeout: Segundos máximos por imagen.
            max_concurrency: Llamadas simultáneas dentro de un lote.
        """
        self.openai_client = openai_client
        self.model = model
        self.timeout = timeout
        self.max_concurrency = max(1, max_concurrency)
        if self.openai_client:
            logger.info("Cliente OpenAI en RecognitionService configurado.")
        else:
            logger.warning("RecognitionService inicializado sin cliente OpenAI.")

    async def recognize(self, image: str) -> List[RecognizedItem]:
        """
        Identifica las piezas de una imagen.

        Raises:
            RecognitionFailed: ante cualquier error, incluido el timeout.
        """
        if not self.openai_client:
            raise RecognitionFailed("Recognition service is not configured")

        mime_type, payload = split_data_uri(image)
        if not payload:
            raise RecognitionFailed("Empty image payload")

        messages = [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": RECOGNITION_PROMPT},
                    {"type": "image_url", "image_url": {"url": f"data:{mime_type};base64,{payload}"}},
                ],
            }
        ]

        try:
            response = await asyncio.wait_for(
                self.openai_client.chat.completions.create(
                    model=self.model,
                    messages=messages,
                    response_format={"type": "json_object"},
                    temperature=0.1,
                    timeout=self.timeout,
                ),
                timeout=self.timeout,
            )
        except asyncio.TimeoutError as e:
            raise RecognitionFailed(f"Recognition timed out after {self.timeout}s") from e
        except OpenAIError as e:
            raise RecognitionFailed(f"Recognition service error: {e}") from e

        content = response.choices[0].message.content if response.choices else None
        items = parse_recognition_content(content)
        logger.info(f"📷 RECONOCIMIENTO: {len(items)} items identificados")
        return items

    async def recognize_batch(self, images: List[str]) -> List[ImageRecognitionResult]:
        """
        Procesa varias imágenes de forma concurrente e independiente.

        Returns:
            Un resultado por imagen, en el mismo orden de entrada.
        """
        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def _run(index: int, image: str) -> ImageRecognitionResult:
            async with semaphore:
                try:
                    items = await self.recognize(image)
                except RecognitionFailed as e:
                    logger.error(f"❌ RECONOCIMIENTO: Imagen {index} falló: {e}")
                    return ImageRecognitionResult(index=index, ok=False, error=str(e))
            return ImageRecognitionResult(index=index, ok=True, items=items)

        return list(await asyncio.gather(*(_run(i, image) for i, image in enumerate(images))))


def merge_recognized_items(results: List[ImageRecognitionResult]) -> List[RecognizedItem]:
    """Unión de los items de las imágenes reconocidas correctamente."""
    return [item for result in results if result.ok for item in result.items]
