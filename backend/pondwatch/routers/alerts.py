# ==============================================================================
# == backend/pondwatch/routers/alerts.py
# ==============================================================================

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from .. import schemas, auth
from ..config import Settings
from ..crud import PondStorage, get_storage
from ..models import auth as model_auth

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/alerts",
    tags=["Alerts"]
)


@router.get("", response_model=List[schemas.AlertResponse])
async def list_alerts(
    limit: Optional[int] = Query(None, ge=1, le=1000),
    storage: PondStorage = Depends(get_storage),
    settings: Settings = Depends(auth.get_app_settings),
    current_user: model_auth.User = Depends(auth.get_current_user),
):
    try:
        return await storage.get_alerts(current_user.id, limit or settings.DEFAULT_ALERT_LIMIT)
    except Exception as e:
        logger.error(f"Error fetching alerts: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/unacknowledged", response_model=List[schemas.AlertResponse])
async def list_unacknowledged_alerts(
    storage: PondStorage = Depends(get_storage),
    current_user: model_auth.User = Depends(auth.get_current_user),
):
    try:
        return await storage.get_unacknowledged_alerts(current_user.id)
    except Exception as e:
        logger.error(f"Error fetching unacknowledged alerts: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.put("/{alert_id}/acknowledge", response_model=schemas.MessageResponse)
async def acknowledge_alert(
    alert_id: int,
    storage: PondStorage = Depends(get_storage),
    current_user: model_auth.User = Depends(auth.get_current_user),
):
    try:
        if not await storage.acknowledge_alert(alert_id):
            raise HTTPException(status_code=404, detail="Alert not found")
        logger.info(f"✔ Alert {alert_id} acknowledged by {current_user.id}")
        return {"message": "Alert acknowledged successfully"}

    except HTTPException:
        raise
    except Exception as e:
        logger.error(f"Error acknowledging alert {alert_id}: {e}")
        raise HTTPException(status_code=500, detail=str(e))
