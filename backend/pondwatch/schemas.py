#backend/pondwatch/schemas.py
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

from .alerting import SensorType, AlertSeverity


class CamelModel(BaseModel):
    # The dashboard speaks camelCase; snake_case is accepted too.
    # Infinity/NaN are rejected: they cannot be stored or echoed back as JSON.
    class Config:
        alias_generator = to_camel
        populate_by_name = True
        from_attributes = True
        allow_inf_nan = False


# --- Users / auth ---
class UserCreate(CamelModel):
    email: str = Field(min_length=3)
    password: str = Field(min_length=6)
    name: str = Field(min_length=1)

class LoginRequest(CamelModel):
    email: str
    password: str

class AuthUser(CamelModel):
    id: str
    email: str
    name: str

class AuthResponse(CamelModel):
    user: AuthUser
    token: str

class UserProfile(AuthUser):
    created_at: datetime

class ProfileUpdate(CamelModel):
    name: str = Field(min_length=1)
    email: str = Field(min_length=3)

class PasswordChange(CamelModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=6)

class MessageResponse(CamelModel):
    message: str


# --- Sensor readings ---
class ReadingCreate(CamelModel):
    ph: Optional[float] = None
    water_level: Optional[float] = None
    temperature: Optional[float] = None
    nh3: Optional[float] = None
    turbidity: Optional[float] = None

class ReadingResponse(ReadingCreate):
    id: int
    user_id: str
    timestamp: datetime


# --- Thresholds ---
class ThresholdCreate(CamelModel):
    sensor_type: SensorType
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    alert_enabled: bool = True

class ThresholdUpdate(CamelModel):
    sensor_type: Optional[SensorType] = None
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    alert_enabled: Optional[bool] = None

class ThresholdResponse(CamelModel):
    id: int
    user_id: str
    sensor_type: str
    min_value: Optional[float] = None
    max_value: Optional[float] = None
    alert_enabled: bool


# --- Alerts ---
class AlertResponse(CamelModel):
    id: int
    user_id: str
    sensor_type: str
    message: str
    severity: AlertSeverity
    value: Optional[float] = None
    threshold: Optional[float] = None
    acknowledged: bool
    timestamp: datetime
