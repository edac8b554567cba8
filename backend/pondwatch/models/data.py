#backend/pondwatch/models/data.py
from datetime import datetime, timezone

from sqlalchemy import Column, Integer, String, Boolean, Float, DateTime, ForeignKey, Text

from pondwatch.database import Base


def utcnow() -> datetime:
    # Stored naive, always UTC
    return datetime.now(timezone.utc).replace(tzinfo=None)


class SensorReading(Base):
    """
    One sample of the pond sensors. A NULL column means the sensor
    was not sampled in this reading.
    """
    __tablename__ = "sensor_data"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    ph = Column(Float, nullable=True)
    water_level = Column(Float, nullable=True)
    temperature = Column(Float, nullable=True)
    nh3 = Column(Float, nullable=True)
    turbidity = Column(Float, nullable=True)
    timestamp = Column(DateTime, index=True, default=utcnow, nullable=False)


class Threshold(Base):
    __tablename__ = "thresholds"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    sensor_type = Column(String(20), nullable=False)  # ph, waterLevel, temperature, nh3, turbidity
    min_value = Column(Float, nullable=True)
    max_value = Column(Float, nullable=True)
    alert_enabled = Column(Boolean, default=True, nullable=False)


class Alert(Base):
    __tablename__ = "alerts"

    id = Column(Integer, primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), index=True, nullable=False)
    sensor_type = Column(String(20), nullable=False)
    message = Column(Text, nullable=False)
    severity = Column(String(20), nullable=False)  # critical, warning, info
    value = Column(Float, nullable=True)
    threshold = Column(Float, nullable=True)
    acknowledged = Column(Boolean, default=False, nullable=False)
    timestamp = Column(DateTime, index=True, default=utcnow, nullable=False)
