# backend/app/services/messaging_service.py
"""
Composición del informe de entrega que se envía a la vendedora por WhatsApp.
"""

import re
from typing import Iterable, Optional
from urllib.parse import quote

from app.schemas.case_schema import ShareLink

WHATSAPP_BASE_URL = "https://wa.me"


def normalize_phone(phone: str) -> str:
    """Deja solo los dígitos del teléfono."""
    return re.sub(r"\D", "", phone or "")


def _format_money(value: Optional[float]) -> str:
    if value is None:
        return "sin precio"
    return f"R$ {value:.2f}"


def compose_case_report(case, seller, items: Iterable) -> str:
    """
    Texto del informe: vendedora, fecha de entrega, items con precio, total y comisión.
    """
    delivered = case.delivery_date or case.created_at
    date_str = delivered.strftime("%d/%m/%Y") if delivered else "-"

    lines = [
        f"HUB SOBERANO - Informe de la maleta #{case.id}",
        "",
        f"Vendedora: {seller.name}",
        f"Fecha: {date_str}",
        "",
        "Items en la maleta:",
    ]
    lines.extend(f"- {item.description}: {_format_money(item.price)}" for item in items)
    lines.extend([
        "",
        f"Valor total: {_format_money(case.total_gross)}",
        f"Tu comisión: {_format_money(case.commission_value)}",
    ])
    return "\n".join(lines)


def build_case_share_link(case, seller, items: Iterable) -> ShareLink:
    """
    Construye el enlace wa.me con el teléfono normalizado y el informe codificado.
    """
    phone = normalize_phone(seller.phone)
    message = compose_case_report(case, seller, items)
    url = f"{WHATSAPP_BASE_URL}/{phone}?text={quote(message, safe='')}"
    return ShareLink(phone=phone, message=message, url=url)
