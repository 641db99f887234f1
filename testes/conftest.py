import os
import tempfile

# A app lê as configurações no import: aponta para um SQLite descartável.
_DB_FILE = os.path.join(tempfile.mkdtemp(prefix="roximity-tests-"), "roximity_test.db")
os.environ.setdefault("DATABASE_URL", f"sqlite+aiosqlite:///{_DB_FILE}")

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402

from roximity.db.base import Base  # noqa: E402
from roximity.db.session import engine, init_db  # noqa: E402
from roximity.main import app  # noqa: E402


@pytest_asyncio.fixture
async def db_ready():
    await init_db()
    yield
    # limpa tudo para o próximo teste
    async with engine.begin() as conn:
        for table in reversed(Base.metadata.sorted_tables):
            await conn.execute(table.delete())
    await engine.dispose()


@pytest_asyncio.fixture
async def client(db_ready):
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
