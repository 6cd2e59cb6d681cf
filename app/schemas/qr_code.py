from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.models.enums import ContentType
from app.schemas.common import reject_null

HEX_COLOR_PATTERN = r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$"


class QRCodeCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    data: str = Field(..., min_length=1, max_length=4096)
    content_type: ContentType = ContentType.URL
    size: int = Field(default=256, ge=64, le=2048)
    fg_color: str = Field(default="#000000", pattern=HEX_COLOR_PATTERN)
    bg_color: str = Field(default="#ffffff", pattern=HEX_COLOR_PATTERN)
    include_image: bool = False
    is_dynamic: bool = False
    # Redirect target for dynamic codes; falls back to `data` when omitted.
    destination_url: Optional[str] = Field(default=None, max_length=4096)
    options: Dict[str, Any] = Field(default_factory=dict)


class QRCodeUpdate(BaseModel):
    title: Optional[str] = Field(default=None, min_length=1, max_length=255)
    data: Optional[str] = Field(default=None, min_length=1, max_length=4096)
    content_type: Optional[ContentType] = None
    size: Optional[int] = Field(default=None, ge=64, le=2048)
    fg_color: Optional[str] = Field(default=None, pattern=HEX_COLOR_PATTERN)
    bg_color: Optional[str] = Field(default=None, pattern=HEX_COLOR_PATTERN)
    include_image: Optional[bool] = None
    destination_url: Optional[str] = Field(default=None, max_length=4096)
    options: Optional[Dict[str, Any]] = None

    @field_validator(
        "title", "data", "content_type", "size", "fg_color", "bg_color", "include_image", "options", mode="before"
    )
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class QRCodeRead(BaseModel):
    id: str
    user_id: Optional[str] = None
    title: str
    data: str
    content_type: ContentType
    size: int
    fg_color: str
    bg_color: str
    include_image: bool
    options: Dict[str, Any] = {}
    is_dynamic: bool
    destination_url: Optional[str] = None
    short_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
