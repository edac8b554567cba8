# ==============================================================================
# == backend/pondwatch/routers/thresholds.py
# ==============================================================================

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from .. import schemas, auth
from ..crud import PondStorage, get_storage
from ..models import auth as model_auth

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/thresholds",
    tags=["Thresholds"]
)

# Columns that cannot be cleared with an explicit null
NOT_NULLABLE = ("sensor_type", "alert_enabled")


@router.post("", response_model=schemas.ThresholdResponse)
async def create_threshold(
    threshold_in: schemas.ThresholdCreate,
    storage: PondStorage = Depends(get_storage),
    current_user: model_auth.User = Depends(auth.get_current_user),
):
    try:
        threshold = await storage.create_threshold(current_user.id, threshold_in.model_dump(mode="json"))
        logger.info(f"➕ Threshold {threshold.sensor_type} [{threshold.min_value}, {threshold.max_value}] for {current_user.id}")
        return threshold
    except Exception as e:
        logger.error(f"Error creating threshold: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("", response_model=List[schemas.ThresholdResponse])
async def list_thresholds(
    storage: PondStorage = Depends(get_storage),
    current_user: model_auth.User = Depends(auth.get_current_user),
):
    try:
        return await storage.get_thresholds(current_user.id)
    except Exception as e:
        logger.error(f"Error loading thresholds: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/{threshold_id}", response_model=schemas.ThresholdResponse)
async def update_threshold(
    threshold_id: int,
    update: schemas.ThresholdUpdate,
    storage: PondStorage = Depends(get_storage),
    current_user: model_auth.User = Depends(auth.get_current_user),
):
    fields = {
        key: value
        for key, value in update.model_dump(mode="json", exclude_unset=True).items()
        if value is not None or key not in NOT_NULLABLE
    }
    try:
        threshold = await storage.update_threshold(threshold_id, current_user.id, fields)
        if not threshold:
            raise HTTPException(status_code=404, detail="Threshold not found")
        return threshold

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error updating threshold {threshold_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.delete("/{threshold_id}", response_model=schemas.MessageResponse)
async def delete_threshold(
    threshold_id: int,
    storage: PondStorage = Depends(get_storage),
    current_user: model_auth.User = Depends(auth.get_current_user),
):
    try:
        if not await storage.delete_threshold(threshold_id, current_user.id):
            raise HTTPException(status_code=404, detail="Threshold not found")
        return {"message": "Threshold deleted successfully"}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error deleting threshold {threshold_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
