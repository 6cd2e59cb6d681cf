import logging
import os

from sqlalchemy.exc import SQLAlchemyError

import database
from app.core.config import settings
from app.models import Template
from app.services import storage

logger = logging.getLogger(__name__)

PUBLIC_TEMPLATES = [
    {
        "name": "Classic",
        "description": "Black on white, works everywhere",
        "category": "url",
        "options": {"size": 256, "fg_color": "#000000", "bg_color": "#ffffff", "level": "M"},
    },
    {
        "name": "Wi-Fi Card",
        "description": "High error correction for printed network cards",
        "category": "wifi",
        "options": {"size": 300, "fg_color": "#1f2937", "bg_color": "#f3f4f6", "level": "H"},
    },
    {
        "name": "Brand Blue",
        "description": "Rounded dots with room for a centered logo",
        "category": "url",
        "options": {"size": 320, "fg_color": "#2563eb", "bg_color": "#ffffff", "level": "H", "dots": "rounded"},
    },
]


def seed_demo_data() -> None:
    """
    Create the demo user and a few public templates for local development.
    """
    if os.getenv("DISABLE_DEMO_SEED") or (settings.app_env or "").lower() == "test":
        logger.info("Demo seed disabled; skipping")
        return

    db = database.SessionLocal()
    try:
        user = storage.ensure_user(db, settings.demo_user_id)
        if db.query(Template).filter(Template.is_public.is_(True)).count() > 0:
            return
        for values in PUBLIC_TEMPLATES:
            storage.create_template(db, user.id, {**values, "is_public": True})
        logger.info("Seeded %s public templates", len(PUBLIC_TEMPLATES))
    except SQLAlchemyError as exc:
        logger.warning("Demo seed failed: %s", exc)
    finally:
        db.close()
