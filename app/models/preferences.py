from __future__ import annotations

from sqlalchemy import Boolean, Column, ForeignKey, String
from sqlalchemy.orm import relationship

from database import Base
from app.models.base import GUID_TYPE, TimestampMixin, default_uuid
from app.models.enums import DownloadFormat, Theme


class UserPreferences(TimestampMixin, Base):
    __tablename__ = "user_preferences"

    id = Column(GUID_TYPE, primary_key=True, default=default_uuid)
    user_id = Column(GUID_TYPE, ForeignKey("users.id"), nullable=False, unique=True)
    default_template_id = Column(GUID_TYPE, ForeignKey("templates.id", ondelete="SET NULL"), nullable=True)
    theme = Column(String(10), nullable=False, default=Theme.LIGHT.value)
    auto_save = Column(Boolean, nullable=False, default=True)
    default_download_format = Column(String(10), nullable=False, default=DownloadFormat.PNG.value)

    user = relationship("User", back_populates="preferences")
    default_template = relationship("Template")


__all__ = ["UserPreferences"]
