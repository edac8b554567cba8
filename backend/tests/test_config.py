import uvicorn
from sqlalchemy.engine import make_url

from pondwatch import main
from pondwatch.config import Settings


def test_password_with_url_characters():
    settings = Settings(DB_USER="pond:admin", DB_PASSWORD="p@ss/w:rd", DB_HOST="localhost", DB_NAME="pondwatch")
    url = make_url(settings.DATABASE_URL)

    assert url.username == "pond:admin"
    assert url.password == "p@ss/w:rd"
    assert url.host == "localhost"
    assert url.database == "pondwatch"


def test_default_url_is_postgres():
    url = make_url(Settings(DB_PASSWORD="postgres").DATABASE_URL)
    assert url.drivername == "postgresql+asyncpg"
    assert url.password == "postgres"


def test_override_wins():
    settings = Settings(DATABASE_URL_OVERRIDE="sqlite+aiosqlite:///./pond.db")
    assert settings.DATABASE_URL == "sqlite+aiosqlite:///./pond.db"


def test_run_serves_app_with_uvicorn(monkeypatch):
    calls = []
    monkeypatch.setattr(uvicorn, "run", lambda *args, **kwargs: calls.append((args, kwargs)))

    main.run()

    assert calls == [(("pondwatch.main:app",), {"host": "0.0.0.0", "port": 8000})]
