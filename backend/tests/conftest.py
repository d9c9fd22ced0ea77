import json
from typing import Any, Callable, Dict, List

import httpx
import pytest
from sqlalchemy import create_engine, event

from guidance.config import Settings
from guidance.database.connection import Database


COMPLETION_PAYLOAD: Dict[str, Any] = {
    "candidates": [
        {
            "content": {
                "role": "model",
                "parts": [{"text": "**Tips belajar**\n* Buat jadwal harian"}],
            },
            "finishReason": "STOP",
            "index": 0,
        }
    ],
    "usageMetadata": {"promptTokenCount": 12, "candidatesTokenCount": 9, "totalTokenCount": 21},
}


class UpstreamStub:
    """Records outbound Gemini requests and answers with a canned response."""

    def __init__(self, status_code: int = 200, payload: Any = None, text: str = None):
        self.status_code = status_code
        self.payload = COMPLETION_PAYLOAD if payload is None else payload
        self.text = text
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.text is not None:
            return httpx.Response(self.status_code, text=self.text)
        return httpx.Response(self.status_code, json=self.payload)

    def sent_json(self, i: int = 0) -> Dict[str, Any]:
        return json.loads(self.requests[i].content)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self)


def enforce_foreign_keys(database: Database) -> Database:
    """SQLite ships with foreign keys off; turn them on as Postgres has them."""

    @event.listens_for(database.engine.sync_engine, "connect")
    def _enable_fk(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return database


@pytest.fixture
def db_path(tmp_path):
    return tmp_path / "guidance.db"


@pytest.fixture
def settings(db_path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{db_path}",
        gemini_api_key="test-gemini-key",
        gemini_model="gemini-test",
    )


@pytest.fixture
async def database(settings):
    db = enforce_foreign_keys(Database(settings))
    await db.create_all()
    yield db
    await db.dispose()


@pytest.fixture
def sync_engine(db_path):
    """Plain sync engine over the same SQLite file, for direct row checks."""
    engine = create_engine(f"sqlite:///{db_path}")
    yield engine
    engine.dispose()


@pytest.fixture
def make_upstream() -> Callable[..., UpstreamStub]:
    return UpstreamStub
