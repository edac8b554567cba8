#backend/pondwatch/models/auth.py
import uuid

from sqlalchemy import Column, String, DateTime

from pondwatch.database import Base
from pondwatch.models.data import utcnow


class User(Base):
    __tablename__ = "users"
    id = Column(String(36), primary_key=True, default=lambda: str(uuid.uuid4()))
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=False)
    name = Column(String, nullable=False)
    created_at = Column(DateTime, default=utcnow, nullable=False)
