from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.schemas.common import reject_null


class TemplateBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = Field(default=None, max_length=50)
    options: Dict[str, Any] = Field(default_factory=dict)
    is_public: bool = False


class TemplateCreate(TemplateBase):
    pass


class TemplateUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    description: Optional[str] = None
    category: Optional[str] = Field(default=None, max_length=50)
    options: Optional[Dict[str, Any]] = None
    is_public: Optional[bool] = None

    @field_validator("name", "options", "is_public", mode="before")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class TemplateRead(TemplateBase):
    id: str
    user_id: Optional[str] = None
    usage_count: int
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
