from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_current_user_id
from app.schemas.template import TemplateCreate, TemplateRead, TemplateUpdate
from app.services import storage
from database import get_db

router = APIRouter()

TEMPLATE_NOT_FOUND = "Template not found"


@router.get("/templates", response_model=List[TemplateRead])
def list_templates(
    public: bool = Query(False, description="List public templates instead of your own"),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    if public:
        return storage.list_public_templates(db)
    return storage.list_templates(db, user_id)


@router.post("/templates", response_model=TemplateRead, status_code=status.HTTP_201_CREATED)
def create_template(
    payload: TemplateCreate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    return storage.create_template(db, user_id, payload.model_dump(mode="json"))


@router.get("/templates/{template_id}", response_model=TemplateRead)
def get_template(
    template_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    template = storage.get_template_for_user(db, template_id, user_id)
    if not template:
        raise HTTPException(status_code=404, detail=TEMPLATE_NOT_FOUND)
    return template


@router.post("/templates/{template_id}/use", status_code=status.HTTP_204_NO_CONTENT)
def use_template(
    template_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> Response:
    # Only templates the caller can see may be counted.
    if not storage.get_template_for_user(db, template_id, user_id):
        raise HTTPException(status_code=404, detail=TEMPLATE_NOT_FOUND)
    storage.increment_template_usage(db, template_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.put("/templates/{template_id}", response_model=TemplateRead)
def update_template(
    template_id: str,
    payload: TemplateUpdate,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    template = storage.update_template(db, template_id, user_id, payload.model_dump(mode="json", exclude_unset=True))
    if not template:
        raise HTTPException(status_code=404, detail=TEMPLATE_NOT_FOUND)
    return template


@router.delete("/templates/{template_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_template(
    template_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> Response:
    if not storage.delete_template(db, template_id, user_id):
        raise HTTPException(status_code=404, detail=TEMPLATE_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
