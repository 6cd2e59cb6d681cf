from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from app.models.enums import DownloadFormat, Theme
from app.schemas.common import reject_null


class PreferencesCreate(BaseModel):
    default_template_id: Optional[str] = None
    theme: Theme = Theme.LIGHT
    auto_save: bool = True
    default_download_format: DownloadFormat = DownloadFormat.PNG


class PreferencesUpdate(BaseModel):
    default_template_id: Optional[str] = None
    theme: Optional[Theme] = None
    auto_save: Optional[bool] = None
    default_download_format: Optional[DownloadFormat] = None

    @field_validator("theme", "auto_save", "default_download_format", mode="before")
    @classmethod
    def not_null(cls, value):
        return reject_null(value)


class PreferencesRead(BaseModel):
    id: str
    user_id: str
    default_template_id: Optional[str] = None
    theme: Theme
    auto_save: bool
    default_download_format: DownloadFormat
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
