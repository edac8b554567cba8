# backend/pondwatch/crud.py
from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import Depends
from sqlalchemy import select, desc, and_
from sqlalchemy.ext.asyncio import AsyncSession

from . import auth
from .database import get_db
from .alerting import AlertRequest
from .models import auth as model_auth
from .models import data as model_data


class PondStorage:
    """
    Repository over one AsyncSession. Every write commits on its own,
    and rolls the session back before re-raising if it fails.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def _commit(self, obj=None):
        try:
            await self.db.commit()
            if obj is not None:
                await self.db.refresh(obj)
        except Exception:
            await self.db.rollback()
            raise
        return obj

    # --- Users ---
    async def get_user(self, user_id: str) -> Optional[model_auth.User]:
        return await self.db.get(model_auth.User, user_id)

    async def get_user_by_email(self, email: str) -> Optional[model_auth.User]:
        result = await self.db.execute(select(model_auth.User).where(model_auth.User.email == email))
        return result.scalar_one_or_none()

    async def create_user(self, email: str, password: str, name: str) -> model_auth.User:
        user = model_auth.User(
            email=email,
            password=await auth.get_password_hash(password),
            name=name,
        )
        self.db.add(user)
        return await self._commit(user)

    async def verify_user(self, email: str, password: str) -> Optional[model_auth.User]:
        user = await self.get_user_by_email(email)
        if not user:
            return None
        return user if await auth.verify_password(password, user.password) else None

    async def update_user(self, user_id: str, name: str, email: str) -> Optional[model_auth.User]:
        user = await self.get_user(user_id)
        if not user:
            return None
        user.name = name
        user.email = email
        return await self._commit(user)

    async def update_user_password(self, user_id: str, new_password: str) -> Optional[model_auth.User]:
        user = await self.get_user(user_id)
        if not user:
            return None
        user.password = await auth.get_password_hash(new_password)
        return await self._commit(user)

    # --- Sensor readings ---
    async def create_reading(self, user_id: str, fields: Dict[str, Any]) -> model_data.SensorReading:
        reading = model_data.SensorReading(user_id=user_id, **fields)
        self.db.add(reading)
        return await self._commit(reading)

    async def get_readings(self, user_id: str, limit: int = 50) -> List[model_data.SensorReading]:
        result = await self.db.execute(
            select(model_data.SensorReading)
            .where(model_data.SensorReading.user_id == user_id)
            .order_by(desc(model_data.SensorReading.timestamp), desc(model_data.SensorReading.id))
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_readings_by_range(
        self, user_id: str, start_time: datetime, end_time: datetime
    ) -> List[model_data.SensorReading]:
        result = await self.db.execute(
            select(model_data.SensorReading)
            .where(
                and_(
                    model_data.SensorReading.user_id == user_id,
                    model_data.SensorReading.timestamp >= start_time,
                    model_data.SensorReading.timestamp <= end_time,
                )
            )
            .order_by(desc(model_data.SensorReading.timestamp), desc(model_data.SensorReading.id))
        )
        return list(result.scalars().all())

    # --- Thresholds ---
    async def create_threshold(self, user_id: str, fields: Dict[str, Any]) -> model_data.Threshold:
        threshold = model_data.Threshold(user_id=user_id, **fields)
        self.db.add(threshold)
        return await self._commit(threshold)

    async def get_thresholds(self, user_id: str) -> List[model_data.Threshold]:
        # Ordered by id so "first match" is stable across backends
        result = await self.db.execute(
            select(model_data.Threshold)
            .where(model_data.Threshold.user_id == user_id)
            .order_by(model_data.Threshold.id)
        )
        return list(result.scalars().all())

    async def update_threshold(
        self, threshold_id: int, user_id: str, fields: Dict[str, Any]
    ) -> Optional[model_data.Threshold]:
        threshold = await self.db.get(model_data.Threshold, threshold_id)
        if not threshold or threshold.user_id != user_id:
            return None
        for key, value in fields.items():
            setattr(threshold, key, value)
        return await self._commit(threshold)

    async def delete_threshold(self, threshold_id: int, user_id: str) -> bool:
        threshold = await self.db.get(model_data.Threshold, threshold_id)
        if not threshold or threshold.user_id != user_id:
            return False
        await self.db.delete(threshold)
        await self._commit()
        return True

    # --- Alerts ---
    async def create_alert(self, request: AlertRequest) -> model_data.Alert:
        alert = model_data.Alert(**request.to_dict())
        self.db.add(alert)
        return await self._commit(alert)

    async def get_alerts(self, user_id: str, limit: int = 50) -> List[model_data.Alert]:
        result = await self.db.execute(
            select(model_data.Alert)
            .where(model_data.Alert.user_id == user_id)
            .order_by(desc(model_data.Alert.timestamp), desc(model_data.Alert.id))
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_unacknowledged_alerts(self, user_id: str) -> List[model_data.Alert]:
        result = await self.db.execute(
            select(model_data.Alert)
            .where(
                and_(
                    model_data.Alert.user_id == user_id,
                    model_data.Alert.acknowledged == False,  # noqa: E712
                )
            )
            .order_by(desc(model_data.Alert.timestamp), desc(model_data.Alert.id))
        )
        return list(result.scalars().all())

    async def acknowledge_alert(self, alert_id: int) -> bool:
        # No owner check here: any authenticated caller may acknowledge by id
        alert = await self.db.get(model_data.Alert, alert_id)
        if not alert:
            return False
        alert.acknowledged = True
        await self._commit()
        return True


# Dependency Injection cho FastAPI
async def get_storage(db: AsyncSession = Depends(get_db)) -> PondStorage:
    return PondStorage(db)
