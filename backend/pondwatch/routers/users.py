# ==============================================================================
# == backend/pondwatch/routers/users.py
# ==============================================================================

import logging

from fastapi import APIRouter, Depends, HTTPException

from .. import schemas, auth
from ..crud import PondStorage, get_storage
from ..models import auth as model_auth

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/user",
    tags=["User"]
)


@router.get("/profile", response_model=schemas.UserProfile)
async def get_profile(
    current_user: model_auth.User = Depends(auth.get_current_user),
):
    return current_user


@router.put("/profile", response_model=schemas.UserProfile)
async def update_profile(
    profile: schemas.ProfileUpdate,
    storage: PondStorage = Depends(get_storage),
    current_user: model_auth.User = Depends(auth.get_current_user),
):
    try:
        existing = await storage.get_user_by_email(profile.email)
        if existing and existing.id != current_user.id:
            raise HTTPException(status_code=400, detail="Email already in use")

        user = await storage.update_user(current_user.id, profile.name, profile.email)
        if not user:
            raise HTTPException(status_code=404, detail="User not found")
        return user

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating profile: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/password", response_model=schemas.MessageResponse)
async def change_password(
    body: schemas.PasswordChange,
    storage: PondStorage = Depends(get_storage),
    current_user: model_auth.User = Depends(auth.get_current_user),
):
    if not await auth.verify_password(body.current_password, current_user.password):
        raise HTTPException(status_code=400, detail="Current password is incorrect")

    try:
        user = await storage.update_user_password(current_user.id, body.new_password)
    except Exception as e:
        logger.error(f"Error updating password: {e}")
        raise HTTPException(status_code=500, detail=str(e))

    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return {"message": "Password updated successfully"}
