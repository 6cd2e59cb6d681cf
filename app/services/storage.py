from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.models import QRCode, Template, User, UserPreferences
from app.models.base import utcnow

logger = logging.getLogger(__name__)

QR_CODE_FIELDS = (
    "title",
    "data",
    "content_type",
    "size",
    "fg_color",
    "bg_color",
    "include_image",
    "options",
    "is_dynamic",
    "destination_url",
)


def _commit(db: Session, instance=None) -> None:
    try:
        db.commit()
    except SQLAlchemyError:
        db.rollback()
        raise
    if instance is not None:
        db.refresh(instance)


def _apply(instance, updates: Dict[str, Any]) -> None:
    for field, value in updates.items():
        setattr(instance, field, value)
    instance.updated_at = utcnow()


def ensure_user(db: Session, user_id: str) -> User:
    user = db.get(User, user_id)
    if not user:
        user = User(id=user_id)
        db.add(user)
        _commit(db, user)
    return user


# --- QR codes ---


def create_qr_code(
    db: Session,
    user_id: str,
    values: Dict[str, Any],
    short_url: Optional[str] = None,
) -> QRCode:
    now = utcnow()
    qr_code = QRCode(
        user_id=user_id,
        short_url=short_url,
        created_at=now,
        updated_at=now,
        **{field: values[field] for field in QR_CODE_FIELDS if field in values},
    )
    db.add(qr_code)
    _commit(db, qr_code)
    return qr_code


def list_qr_codes(db: Session, user_id: str) -> List[QRCode]:
    return db.query(QRCode).filter(QRCode.user_id == user_id).order_by(QRCode.updated_at.desc()).all()


def get_qr_code(db: Session, qr_code_id: str, user_id: str) -> Optional[QRCode]:
    return db.query(QRCode).filter(QRCode.id == qr_code_id, QRCode.user_id == user_id).first()


def get_qr_code_by_short_url(db: Session, short_url: str) -> Optional[QRCode]:
    return db.query(QRCode).filter(QRCode.short_url == short_url).first()


def update_qr_code(db: Session, qr_code_id: str, user_id: str, updates: Dict[str, Any]) -> Optional[QRCode]:
    qr_code = get_qr_code(db, qr_code_id, user_id)
    if not qr_code:
        return None
    _apply(qr_code, updates)
    _commit(db, qr_code)
    return qr_code


def delete_qr_code(db: Session, qr_code_id: str, user_id: str) -> bool:
    qr_code = get_qr_code(db, qr_code_id, user_id)
    if not qr_code:
        return False
    db.delete(qr_code)
    _commit(db)
    return True


# --- templates ---


def create_template(db: Session, user_id: str, values: Dict[str, Any]) -> Template:
    now = utcnow()
    template = Template(user_id=user_id, usage_count=0, created_at=now, updated_at=now, **values)
    db.add(template)
    _commit(db, template)
    return template


def list_templates(db: Session, user_id: str) -> List[Template]:
    return db.query(Template).filter(Template.user_id == user_id).order_by(Template.updated_at.desc()).all()


def list_public_templates(db: Session) -> List[Template]:
    return db.query(Template).filter(Template.is_public.is_(True)).order_by(Template.usage_count.desc()).all()


def get_template_for_user(db: Session, template_id: str, user_id: str) -> Optional[Template]:
    """Templates are visible to their owner, and to everyone once public."""
    template = db.get(Template, template_id)
    if template and (template.user_id == user_id or template.is_public):
        return template
    return None


def _owned_template(db: Session, template_id: str, user_id: str) -> Optional[Template]:
    return db.query(Template).filter(Template.id == template_id, Template.user_id == user_id).first()


def update_template(db: Session, template_id: str, user_id: str, updates: Dict[str, Any]) -> Optional[Template]:
    template = _owned_template(db, template_id, user_id)
    if not template:
        return None
    _apply(template, updates)
    _commit(db, template)
    return template


def delete_template(db: Session, template_id: str, user_id: str) -> bool:
    template = _owned_template(db, template_id, user_id)
    if not template:
        return False
    db.query(UserPreferences).filter(UserPreferences.default_template_id == template_id).update(
        {UserPreferences.default_template_id: None}, synchronize_session=False
    )
    db.delete(template)
    _commit(db)
    return True


def increment_template_usage(db: Session, template_id: str) -> None:
    db.query(Template).filter(Template.id == template_id).update(
        {Template.usage_count: Template.usage_count + 1, Template.updated_at: utcnow()},
        synchronize_session=False,
    )
    _commit(db)


# --- preferences ---


def get_preferences(db: Session, user_id: str) -> Optional[UserPreferences]:
    return db.query(UserPreferences).filter(UserPreferences.user_id == user_id).first()


def create_preferences(db: Session, user_id: str, values: Dict[str, Any]) -> UserPreferences:
    now = utcnow()
    preferences = UserPreferences(user_id=user_id, created_at=now, updated_at=now, **values)
    db.add(preferences)
    _commit(db, preferences)
    return preferences


def update_preferences(db: Session, user_id: str, updates: Dict[str, Any]) -> Optional[UserPreferences]:
    preferences = get_preferences(db, user_id)
    if not preferences:
        return None
    _apply(preferences, updates)
    _commit(db, preferences)
    return preferences
