from __future__ import annotations

from sqlalchemy import Column, DateTime, String
from sqlalchemy.orm import relationship

from database import Base
from app.models.base import GUID_TYPE, default_uuid, utcnow


class User(Base):
    __tablename__ = "users"

    id = Column(GUID_TYPE, primary_key=True, default=default_uuid)
    username = Column(String(255), nullable=True, unique=True)
    created_at = Column(DateTime, default=utcnow)

    qr_codes = relationship("QRCode", back_populates="user", cascade="all, delete-orphan")
    templates = relationship("Template", back_populates="user", cascade="all, delete-orphan")
    preferences = relationship("UserPreferences", back_populates="user", uselist=False, cascade="all, delete-orphan")


__all__ = ["User"]
