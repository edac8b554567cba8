# ==============================================================================
# == backend/pondwatch/routers/readings.py
# ==============================================================================

import logging
import random
from datetime import datetime, timezone
from typing import Dict, List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from .. import schemas, auth
from ..alerting import AlertIngestionPipeline
from ..config import Settings
from ..crud import PondStorage, get_storage
from ..models import auth as model_auth

logger = logging.getLogger(__name__)
router = APIRouter(
    prefix="/api/sensor-data",
    tags=["Sensor Data"]
)


def _as_utc_naive(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def random_reading() -> Dict[str, float]:
    """Plausible pond values for demo data."""
    return {
        "ph": random.random() * 2 + 6.5,             # 6.5-8.5
        "water_level": random.random() * 30 + 60,    # 60-90 cm
        "temperature": random.random() * 8 + 20,     # 20-28°C
        "nh3": random.random() * 3,                  # 0-3 ppm
        "turbidity": random.random() * 25 + 5,       # 5-30 NTU
    }


async def _store_and_evaluate(storage: PondStorage, user_id: str, fields: Dict) -> schemas.ReadingResponse:
    try:
        reading = await storage.create_reading(user_id, fields)
    except Exception as e:
        logger.error(f"Error saving reading: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))

    # Snapshot before alerting: a failed alert write rolls the session back
    response = schemas.ReadingResponse.model_validate(reading)

    pipeline = AlertIngestionPipeline(threshold_store=storage, alert_store=storage)
    result = await pipeline.ingest(reading)
    logger.info(
        f"Reading {response.id} saved, {len(result.created)} alert(s) raised"
        + (" (alerting degraded)" if result.degraded else "")
    )
    return response


@router.post("", response_model=schemas.ReadingResponse)
async def create_reading(
    reading_in: schemas.ReadingCreate,
    storage: PondStorage = Depends(get_storage),
    current_user: model_auth.User = Depends(auth.get_current_user),
):
    return await _store_and_evaluate(storage, current_user.id, reading_in.model_dump())


@router.post("/dummy", response_model=schemas.ReadingResponse)
async def create_dummy_reading(
    storage: PondStorage = Depends(get_storage),
    current_user: model_auth.User = Depends(auth.get_current_user),
):
    return await _store_and_evaluate(storage, current_user.id, random_reading())


@router.get("", response_model=List[schemas.ReadingResponse])
async def list_readings(
    limit: Optional[int] = Query(None, ge=1, le=1000),
    storage: PondStorage = Depends(get_storage),
    settings: Settings = Depends(auth.get_app_settings),
    current_user: model_auth.User = Depends(auth.get_current_user),
):
    try:
        return await storage.get_readings(current_user.id, limit or settings.DEFAULT_READING_LIMIT)
    except Exception as e:
        logger.error(f"Error fetching readings: {e}")
        raise HTTPException(status_code=500, detail=str(e))


@router.get("/range", response_model=List[schemas.ReadingResponse])
async def list_readings_in_range(
    start_time: Optional[datetime] = Query(None, alias="startTime"),
    end_time: Optional[datetime] = Query(None, alias="endTime"),
    storage: PondStorage = Depends(get_storage),
    current_user: model_auth.User = Depends(auth.get_current_user),
):
    if start_time is None or end_time is None:
        raise HTTPException(status_code=400, detail="Start time and end time required")

    try:
        return await storage.get_readings_by_range(
            current_user.id, _as_utc_naive(start_time), _as_utc_naive(end_time)
        )
    except Exception as e:
        logger.error(f"Error fetching readings by range: {e}")
        raise HTTPException(status_code=500, detail=str(e))
