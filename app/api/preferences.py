from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user_id
from app.schemas.preferences import PreferencesCreate, PreferencesRead, PreferencesUpdate
from app.services import storage
from database import get_db

router = APIRouter()

PREFERENCES_NOT_FOUND = "User preferences not found"


def _check_default_template(db: Session, template_id: str | None, user_id: str) -> None:
    if template_id and not storage.get_template_for_user(db, template_id, user_id):
        raise HTTPException(status_code=400, detail="Default template does not exist")


@router.get("/preferences", response_model=PreferencesRead)
def get_preferences(user_id: str = Depends(get_current_user_id), db: Session = Depends(get_db)):
    preferences = storage.get_preferences(db, user_id)
    if not preferences:
        raise HTTPException(status_code=404, detail=PREFERENCES_NOT_FOUND)
    return preferences


@router.post("/preferences", response_model=PreferencesRead, status_code=status.HTTP_201_CREATED)
def create_preferences(
    payload: PreferencesCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    if storage.get_preferences(db, user_id):
        raise HTTPException(status_code=409, detail="User preferences already exist")
    _check_default_template(db, payload.default_template_id, user_id)
    return storage.create_preferences(db, user_id, payload.model_dump(mode="json"))


@router.put("/preferences", response_model=PreferencesRead)
def update_preferences(
    payload: PreferencesUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    _check_default_template(db, payload.default_template_id, user_id)
    preferences = storage.update_preferences(db, user_id, payload.model_dump(mode="json", exclude_unset=True))
    if not preferences:
        raise HTTPException(status_code=404, detail=PREFERENCES_NOT_FOUND)
    return preferences
