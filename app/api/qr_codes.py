import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from app.api.deps import get_current_user_id, get_qr_cache
from app.core.cache_utils import QRCodeCache
from app.core.config import settings
from app.schemas.qr_code import QRCodeCreate, QRCodeRead, QRCodeUpdate
from app.services import storage
from app.services.qr_creation import QRCodeCreator
from database import get_db

logger = logging.getLogger(__name__)

router = APIRouter()

QR_NOT_FOUND = "QR code not found"


@router.get("/qr-codes", response_model=List[QRCodeRead])
def list_qr_codes(
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return storage.list_qr_codes(db, user_id)


@router.post("/qr-codes", response_model=QRCodeRead, status_code=status.HTTP_201_CREATED)
async def create_qr_code(
    payload: QRCodeCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    cache: QRCodeCache = Depends(get_qr_cache),
):
    creator = QRCodeCreator(db, cache, settings.public_base_url)
    try:
        return creator.create(user_id, payload)
    except Exception:
        logger.exception("Error creating QR code")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Failed to create QR code"},
        )


@router.get("/qr-codes/{qr_code_id}", response_model=QRCodeRead)
def get_qr_code(
    qr_code_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    qr_code = storage.get_qr_code(db, qr_code_id, user_id)
    if not qr_code:
        raise HTTPException(status_code=404, detail=QR_NOT_FOUND)
    return qr_code


@router.put("/qr-codes/{qr_code_id}", response_model=QRCodeRead)
def update_qr_code(
    qr_code_id: str,
    payload: QRCodeUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    qr_code = storage.get_qr_code(db, qr_code_id, user_id)
    if not qr_code:
        raise HTTPException(status_code=404, detail=QR_NOT_FOUND)

    updates = payload.model_dump(mode="json", exclude_unset=True)
    if qr_code.is_dynamic and "data" in updates:
        # The encoded redirect is fixed at creation; the target is what moves.
        raise HTTPException(
            status_code=400,
            detail="Dynamic QR codes keep their redirect URL; update destination_url instead",
        )
    return storage.update_qr_code(db, qr_code_id, user_id, updates)


@router.delete("/qr-codes/{qr_code_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_qr_code(
    qr_code_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> Response:
    if not storage.delete_qr_code(db, qr_code_id, user_id):
        raise HTTPException(status_code=404, detail=QR_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
