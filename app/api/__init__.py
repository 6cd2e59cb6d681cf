# FastAPI routers grouped under app.api.*
from . import cache, preferences, qr_codes, redirect, templates

__all__ = [
    "cache",
    "preferences",
    "qr_codes",
    "redirect",
    "templates",
]
