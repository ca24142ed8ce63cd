"""Uploaded files stored on local disk under MEDIA_ROOT."""
import logging
import shutil
from pathlib import Path
from uuid import uuid4

from fastapi import UploadFile

from pharmacy.core.config import settings
from pharmacy.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

USER_IMAGES = "user-images"


def save_user_image(file: UploadFile) -> str:
    """
    Write an uploaded profile image to MEDIA_ROOT/user-images/<uuid><ext>.

    Returns the public URL under MEDIA_URL. The client's file name is only
    used for its extension.
    """
    if not file or not file.filename:
        raise ValidationError("No file uploaded.")

    ext = Path(file.filename).suffix.lower()
    if ext not in settings.ALLOWED_IMAGE_EXTENSIONS:
        raise ValidationError("Invalid file type. Only .jpg, .jpeg, .png and .gif are allowed.")

    head = file.file.read(1)
    if not head:
        raise ValidationError("No file uploaded.")
    file.file.seek(0)

    disk_dir = Path(settings.MEDIA_ROOT).resolve() / USER_IMAGES
    disk_dir.mkdir(parents=True, exist_ok=True)
    fname = f"{uuid4().hex}{ext}"
    disk_path = disk_dir / fname

    try:
        with disk_path.open("wb") as out:
            shutil.copyfileobj(file.file, out)
    finally:
        file.file.close()

    logger.info(f"Stored upload {file.filename!r} as {disk_path.name} ({disk_path.stat().st_size} bytes)")
    return f"{settings.MEDIA_URL}/{USER_IMAGES}/{fname}"


def delete_media(url: str) -> None:
    """Remove a previously stored file given its public URL. Missing files are ignored."""
    prefix = f"{settings.MEDIA_URL}/"
    if not url or not url.startswith(prefix):
        return
    path = Path(settings.MEDIA_ROOT).resolve() / url[len(prefix):]
    path.unlink(missing_ok=True)
