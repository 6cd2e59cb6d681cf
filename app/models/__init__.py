from database import Base
from app.models.base import GUID_LENGTH, GUID_TYPE, default_uuid, utcnow
from app.models.enums import ContentType, DownloadFormat, Theme
from app.models.user import User
from app.models.qr_code import QRCode
from app.models.template import Template
from app.models.preferences import UserPreferences

__all__ = [
    "Base",
    "GUID_TYPE",
    "GUID_LENGTH",
    "default_uuid",
    "utcnow",
    "ContentType",
    "DownloadFormat",
    "Theme",
    "User",
    "QRCode",
    "Template",
    "UserPreferences",
]
