from __future__ import annotations

import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from app.core.cache_utils import QRCodeCache
from app.models import QRCode
from app.schemas.qr_code import QRCodeCreate, QRCodeRead
from app.services import storage
from app.services.slug_allocator import SlugAllocator

logger = logging.getLogger(__name__)

# Request fields that change the rendered image. Everything else (title,
# content_type, ...) is ignored when looking for a reusable result.
CACHE_KEY_FIELDS = ("data", "size", "fg_color", "bg_color", "include_image", "is_dynamic")


def cache_shape(payload: QRCodeCreate) -> Dict[str, Any]:
    values = payload.model_dump(mode="json")
    return {field: values[field] for field in CACHE_KEY_FIELDS}


def build_redirect_url(base_url: str, slug: str) -> str:
    return f"{base_url.rstrip('/')}/r/{slug}"


def snapshot(qr_code: QRCode) -> Dict[str, Any]:
    return QRCodeRead.model_validate(qr_code).model_dump(mode="json")


class QRCodeCreator:
    """
    Creates QR code records, reusing a cached result for requests that would
    render the same image.

    Every call persists exactly one new record. The cache is written only
    after a successful persist, so it never holds a result that was not stored.
    """

    def __init__(self, db: Session, cache: QRCodeCache, base_url: str):
        self.db = db
        self.cache = cache
        self.base_url = base_url
        self.allocator = SlugAllocator(lambda slug: storage.get_qr_code_by_short_url(db, slug))

    def _dynamic_fields(self, payload: QRCodeCreate) -> Dict[str, Any]:
        slug = self.allocator.allocate()
        logger.info("Allocated short URL %s for dynamic QR code", slug)
        return {
            "data": build_redirect_url(self.base_url, slug),
            "destination_url": payload.destination_url or payload.data,
            "short_url": slug,
        }

    def _create_from_cached(self, user_id: str, payload: QRCodeCreate, cached: Dict[str, Any]) -> QRCode:
        values = {field: cached[field] for field in storage.QR_CODE_FIELDS}
        values["title"] = payload.title
        short_url = None
        if cached["is_dynamic"]:
            # Slugs are unique per record, so a reused dynamic result still
            # needs its own redirect.
            dynamic = self._dynamic_fields(payload)
            short_url = dynamic.pop("short_url")
            values.update(dynamic)
        return storage.create_qr_code(self.db, user_id, values, short_url=short_url)

    def _create_fresh(self, user_id: str, payload: QRCodeCreate) -> QRCode:
        values = payload.model_dump(mode="json")
        short_url = None
        if payload.is_dynamic:
            dynamic = self._dynamic_fields(payload)
            short_url = dynamic.pop("short_url")
            values.update(dynamic)
        return storage.create_qr_code(self.db, user_id, values, short_url=short_url)

    def create(self, user_id: str, payload: QRCodeCreate) -> QRCode:
        shape = cache_shape(payload)
        cached = self.cache.get(shape)
        if cached is not None:
            logger.debug("QR cache hit for %s", payload.data[:50])
            return self._create_from_cached(user_id, payload, cached)

        logger.debug("QR cache miss for %s", payload.data[:50])
        qr_code = self._create_fresh(user_id, payload)
        self.cache.set(shape, snapshot(qr_code))
        return qr_code
