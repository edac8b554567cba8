# ==============================================================================
# == backend/pondwatch/routers/auth.py
# ==============================================================================

import logging

from fastapi import APIRouter, Depends, HTTPException, status

from .. import schemas, auth
from ..config import Settings
from ..crud import PondStorage, get_storage

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/auth",
    tags=["Auth"]
)


def _auth_response(user, settings: Settings) -> dict:
    return {
        "user": {"id": user.id, "email": user.email, "name": user.name},
        "token": auth.create_user_token(user, settings),
    }


@router.post("/register", response_model=schemas.AuthResponse)
async def register(
    user_in: schemas.UserCreate,
    storage: PondStorage = Depends(get_storage),
    settings: Settings = Depends(auth.get_app_settings),
):
    try:
        if await storage.get_user_by_email(user_in.email):
            raise HTTPException(status_code=400, detail="User already exists")

        user = await storage.create_user(user_in.email, user_in.password, user_in.name)
        logger.info(f"✅ Registered user: {user.email}")
        return _auth_response(user, settings)

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error registering user: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))


@router.post("/login", response_model=schemas.AuthResponse)
async def login(
    credentials: schemas.LoginRequest,
    storage: PondStorage = Depends(get_storage),
    settings: Settings = Depends(auth.get_app_settings),
):
    user = await storage.verify_user(credentials.email, credentials.password)
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

    logger.info(f"✅ Login successful: {user.email}")
    return _auth_response(user, settings)
