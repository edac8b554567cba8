# ==============================================================================
# == backend/pondwatch/main.py - Pond Monitoring API                        ==
# ==============================================================================

import logging
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings, get_settings
from .database import Database
from .routers import auth as auth_router
from .routers import users as users_router
from .routers import readings as readings_router
from .routers import thresholds as thresholds_router
from .routers import alerts as alerts_router

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings):
    handlers = [logging.StreamHandler()]
    if settings.LOG_FILE:
        handlers.append(logging.FileHandler(settings.LOG_FILE, encoding='utf-8'))

    logging.basicConfig(
        level=settings.LOG_LEVEL.upper(),
        format='%(asctime)s - API - %(levelname)s - %(message)s',
        handlers=handlers
    )


# ============================================================================
# LIFESPAN MANAGEMENT
# ============================================================================
@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("🚀 Pond Monitoring System starting...")
    db = Database(app.state.settings.DATABASE_URL)
    app.state.db = db

    try:
        await db.create_all()
        logger.info("✓ Database initialized")

        logger.info("=" * 60)
        logger.info("🎉 System ready to serve!")
        logger.info("=" * 60)

        yield

    finally:
        logger.info("🛑 Shutting down...")
        await db.dispose()
        logger.info("✅ Shutdown complete")


# ============================================================================
# APP SETUP
# ============================================================================
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Pond Monitoring API",
        lifespan=lifespan,
        version="1.0.0"
    )
    app.state.settings = settings

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_router.router)
    app.include_router(users_router.router)
    app.include_router(readings_router.router)
    app.include_router(thresholds_router.router)
    app.include_router(alerts_router.router)

    @app.get("/api/health")
    async def health_check():
        return {"status": "ok", "time": time.time()}

    return app


app = create_app()


def run():
    import uvicorn
    uvicorn.run("pondwatch.main:app", host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
