from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.core.cache_utils import QRCodeCache
from app.core.config import settings
from app.services import storage
from database import get_db


def get_qr_cache(request: Request) -> QRCodeCache:
    """The process-wide QR cache built in main.py and kept on app.state."""
    return request.app.state.qr_cache


def get_current_user_id(db: Session = Depends(get_db)) -> str:
    # TODO: resolve the caller from an auth token once login exists.
    user = storage.ensure_user(db, settings.demo_user_id)
    return user.id
