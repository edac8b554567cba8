# backend/pondwatch/database.py
from fastapi import Request
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession
from sqlalchemy.orm import sessionmaker, declarative_base

Base = declarative_base()


def create_engine_for(url: str):
    kwargs = {"echo": False}
    if not url.startswith("sqlite"):
        # Reconnect if the server dropped the connection
        kwargs["pool_pre_ping"] = True
    return create_async_engine(url, **kwargs)


class Database:
    """Engine + session factory, built once per application in the lifespan."""

    def __init__(self, url: str):
        self.url = url
        self.engine = create_engine_for(url)
        self.SessionLocal = sessionmaker(self.engine, class_=AsyncSession, expire_on_commit=False)

    async def create_all(self):
        # Import so every model is registered on Base.metadata
        from .models import auth, data  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self):
        await self.engine.dispose()

    def session(self) -> AsyncSession:
        return self.SessionLocal()


# Dependency Injection cho FastAPI
async def get_db(request: Request):
    db: Database = request.app.state.db
    async with db.session() as session:
        yield session
