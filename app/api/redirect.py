from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from app.services import storage
from database import get_db

router = APIRouter()


@router.get("/r/{short_url}")
def follow_short_url(short_url: str, db: Session = Depends(get_db)) -> RedirectResponse:
    qr_code = storage.get_qr_code_by_short_url(db, short_url)
    if not qr_code or not qr_code.is_dynamic or not qr_code.destination_url:
        raise HTTPException(status_code=404, detail="Short URL not found")
    return RedirectResponse(url=qr_code.destination_url, status_code=302)
