from __future__ import annotations

from sqlalchemy import JSON, Boolean, Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from database import Base
from app.models.base import GUID_TYPE, TimestampMixin, default_uuid
from app.models.enums import ContentType


class QRCode(TimestampMixin, Base):
    __tablename__ = "qr_codes"

    id = Column(GUID_TYPE, primary_key=True, default=default_uuid)
    user_id = Column(GUID_TYPE, ForeignKey("users.id"), nullable=True, index=True)
    title = Column(String(255), nullable=False)
    # Payload actually encoded into the image; a redirect URL for dynamic codes.
    data = Column(Text, nullable=False)
    content_type = Column(String(20), nullable=False, default=ContentType.URL.value)
    size = Column(Integer, nullable=False, default=256)
    fg_color = Column(String(20), nullable=False, default="#000000")
    bg_color = Column(String(20), nullable=False, default="#ffffff")
    include_image = Column(Boolean, nullable=False, default=False)
    options = Column(JSON, nullable=False, default=dict)
    is_dynamic = Column(Boolean, nullable=False, default=False)
    destination_url = Column(Text, nullable=True)
    # Uniqueness here is what actually protects concurrent slug allocation.
    short_url = Column(String(16), nullable=True, unique=True)

    user = relationship("User", back_populates="qr_codes")


__all__ = ["QRCode"]
