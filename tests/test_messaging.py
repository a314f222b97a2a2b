from datetime import datetime
from types import SimpleNamespace
from urllib.parse import unquote

from app.services.messaging_service import build_case_share_link, compose_case_report, normalize_phone


def _case():
    return SimpleNamespace(
        id=7,
        delivery_date=datetime(2026, 3, 5, 10, 0),
        created_at=None,
        total_gross=150.0,
        commission_value=45.0,
    )


def test_normalize_phone_keeps_digits_only():
    assert normalize_phone("+55 (11) 99999-9999") == "5511999999999"
    assert normalize_phone("") == ""


def test_compose_case_report():
    seller = SimpleNamespace(name="Ana", phone="5511")
    items = [SimpleNamespace(description="Ring", price=100.0), SimpleNamespace(description="Necklace", price=50.0)]

    message = compose_case_report(_case(), seller, items)

    assert "maleta #7" in message
    assert "Fecha: 05/03/2026" in message
    assert "- Necklace: R$ 50.00" in message
    assert "Valor total: R$ 150.00" in message
    assert message.endswith("Tu comisión: R$ 45.00")


def test_share_link_encodes_message():
    seller = SimpleNamespace(name="Ana", phone="55 11 98888-8888")
    link = build_case_share_link(_case(), seller, [])

    assert link.url.startswith("https://wa.me/5511988888888?text=")
    assert " " not in link.url
    assert unquote(link.url.split("?text=", 1)[1]) == link.message
