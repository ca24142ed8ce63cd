"""User administration and profile images."""
import logging
from typing import List

from fastapi import APIRouter, Depends, File, Request, Response, UploadFile, status
from sqlalchemy.orm import Session

from pharmacy.api.deps import get_db
from pharmacy.core.audit import AuditLog
from pharmacy.schemas.user import ImageUploadResponse, UserCreate, UserResponse, UserUpdate
from pharmacy.services import media_service, user_service

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("", response_model=List[UserResponse])
def list_users(db: Session = Depends(get_db)):
    return user_service.list_users(db)


@router.get("/rolesDropDown", response_model=List[str])
def roles_dropdown():
    return user_service.role_options()


@router.post("/UploadImage/{user_id}", response_model=ImageUploadResponse)
def upload_image(user_id: int, file: UploadFile = File(...), db: Session = Depends(get_db)):
    """Store a profile image and point the user at it. Replaces any previous image."""
    user = user_service.get_user(db, user_id)
    previous = user.image_url

    image_url = media_service.save_user_image(file)
    try:
        user_service.set_image_url(db, user_id, image_url)
    except Exception:
        media_service.delete_media(image_url)
        raise
    if previous and previous != image_url:
        media_service.delete_media(previous)

    return ImageUploadResponse(image_url=image_url)


@router.get("/{user_id}", response_model=UserResponse)
def get_user(user_id: int, db: Session = Depends(get_db)):
    return user_service.get_user(db, user_id)


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
def create_user(data: UserCreate, request: Request, response: Response, db: Session = Depends(get_db)):
    user = user_service.create_user(db, data.full_name, data.email, data.password, data.role)
    AuditLog.log_action("create", "user", user.id, changes={"role": user.role})
    response.headers["Location"] = str(request.url_for("get_user", user_id=user.id))
    return user


@router.put("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def update_user(user_id: int, data: UserUpdate, db: Session = Depends(get_db)):
    user_service.update_user(db, user_id, data.full_name, data.email, data.role, data.password)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_user(user_id: int, db: Session = Depends(get_db)):
    user_service.delete_user(db, user_id)
    AuditLog.log_action("delete", "user", user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
