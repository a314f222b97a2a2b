# backend/app/db/seed.py
"""
Carga de datos iniciales de ejemplo.

Separada de la creación del esquema para que los tests puedan omitirla.
"""

import logging

from sqlalchemy import select, func
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.seller_model import Seller

logger = logging.getLogger(__name__)

DEMO_SELLERS = [
    ("Maria Silva", "5511999999999", 0.3),
    ("Ana Oliveira", "5511888888888", 0.35),
    ("Juliana Costa", "5511777777777", 0.3),
]


async def seed_sellers(db: AsyncSession) -> int:
    """
    Inserta las vendedoras de ejemplo solo si la tabla está vacía.

    Returns:
        Número de vendedoras insertadas (0 si ya había datos).
    """
    count = await db.scalar(select(func.count(Seller.id)))
    if count:
        return 0

    for name, phone, rate in DEMO_SELLERS:
        db.add(Seller(name=name, phone=phone, commission_rate=rate))
    await db.commit()

    logger.info(f"🌱 SEED: {len(DEMO_SELLERS)} vendedoras de ejemplo creadas")
    return len(DEMO_SELLERS)
