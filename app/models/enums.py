from __future__ import annotations

from enum import Enum


class ContentType(str, Enum):
    URL = "url"
    TEXT = "text"
    WIFI = "wifi"
    VCARD = "vcard"
    EMAIL = "email"


class Theme(str, Enum):
    LIGHT = "light"
    DARK = "dark"


class DownloadFormat(str, Enum):
    PNG = "png"
    JPEG = "jpeg"
    SVG = "svg"


__all__ = ["ContentType", "Theme", "DownloadFormat"]
