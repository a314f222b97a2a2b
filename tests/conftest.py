import asyncio
import json
import os
from types import SimpleNamespace

import pytest

# Antes de importar la app: sin datos de ejemplo ni base de datos real
os.environ["SEED_ON_STARTUP"] = "false"
os.environ["OPENAI_API_KEY"] = ""
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./maleta_hub_test_unused.db"

from fastapi.testclient import TestClient
from openai import OpenAIError

from app.api import deps
from app.db.database import build_engine, build_sessionmaker, init_db
from app.main import app
from app.services.recognition_service import RecognitionService


# ========================================
# CLIENTE OPENAI FALSO
# ========================================

SLOW = "__slow__"

RECOGNITION_REPLIES = {
    "ring": json.dumps({"items": [{"description": "Anillo dorado", "price": 100}, {"description": "Collar", "price": None}]}),
    "earrings": "```json\n{\"items\": [{\"description\": \"Pendientes\", \"price\": \"R$ 35,50\"}]}\n```",
    "garbage": "no es json",
    "boom": OpenAIError("connection reset"),
    "slow": SLOW,
}


class FakeCompletions:
    def __init__(self, replies):
        self.replies = replies
        self.calls = []

    async def create(self, **kwargs):
        self.calls.append(kwargs)
        url = kwargs["messages"][0]["content"][1]["image_url"]["url"]
        payload = url.split(",", 1)[1]
        reply = self.replies[payload]
        if isinstance(reply, Exception):
            raise reply
        if reply == SLOW:
            await asyncio.sleep(5)
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=reply))])


class FakeOpenAI:
    def __init__(self, replies=None):
        self.chat = SimpleNamespace(completions=FakeCompletions(replies or RECOGNITION_REPLIES))


# ========================================
# FIXTURES
# ========================================

@pytest.fixture
def engine(tmp_path):
    test_engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    asyncio.run(init_db(test_engine))
    yield test_engine
    asyncio.run(test_engine.dispose())


@pytest.fixture
def session_factory(engine):
    return build_sessionmaker(engine)


@pytest.fixture
def fake_openai():
    return FakeOpenAI()


@pytest.fixture
def recognition_service(fake_openai):
    return RecognitionService(fake_openai, timeout=0.2, max_concurrency=2)


@pytest.fixture
def client(session_factory, recognition_service):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[deps.get_db] = override_get_db
    app.dependency_overrides[deps.get_recognition_service] = lambda: recognition_service
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def create_seller(client):
    def _create(name="Ana", phone="+55 (11) 98888-7777", commission_rate=0.3):
        r = client.post("/api/sellers", json={"name": name, "phone": phone, "commission_rate": commission_rate})
        assert r.status_code == 200, r.text
        return r.json()["id"]
    return _create


@pytest.fixture
def create_case(client):
    def _create(seller_id, items=None, **totals):
        body = {"seller_id": seller_id, "photo": "data:image/jpeg;base64,AAAA", "items": items or []}
        body.update(totals)
        r = client.post("/api/cases", json=body)
        assert r.status_code == 200, r.text
        return r.json()["id"]
    return _create
