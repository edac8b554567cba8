import pytest
from fastapi.testclient import TestClient

from pondwatch.config import Settings
from pondwatch.crud import PondStorage
from pondwatch.database import Database
from pondwatch.main import create_app


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL_OVERRIDE=f"sqlite+aiosqlite:///{tmp_path / 'pond.db'}",
        SECRET_KEY="test-secret",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as c:
        yield c


@pytest.fixture
async def storage(settings):
    db = Database(settings.DATABASE_URL)
    await db.create_all()
    async with db.session() as session:
        yield PondStorage(session)
    await db.dispose()


def register(client, email="koi@pond.io", password="secret123", name="Koi Keeper"):
    resp = client.post("/api/auth/register", json={"email": email, "password": password, "name": name})
    assert resp.status_code == 200, resp.text
    return resp.json()


@pytest.fixture
def auth_headers(client):
    token = register(client)["token"]
    return {"Authorization": f"Bearer {token}"}
