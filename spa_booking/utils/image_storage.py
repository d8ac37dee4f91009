"""
Image storage utilities for feedback and appointment photos.
Handles validation, local disk storage and public URL generation.
"""

import logging
import time
from pathlib import Path
from typing import Callable, Optional, Tuple

from fastapi import File, Request, UploadFile
from pydantic import BaseModel

from ..config import IMAGE_URL_PREFIX, MAX_IMAGE_SIZE_MB, UPLOAD_DIR
from ..errors import BadRequestError

logger = logging.getLogger(__name__)

MAX_IMAGE_SIZE_BYTES = MAX_IMAGE_SIZE_MB * 1024 * 1024
ALLOWED_IMAGE_MIME_TYPES = ["image/jpeg", "image/jpg", "image/png"]
ALLOWED_IMAGE_EXTENSIONS = ["jpeg", "jpg", "png"]
DANGEROUS_FILENAME_CHARS = ["..", "/", "\\", "<", ">", ":", '"', "|", "?", "*"]
INVALID_TYPE_MESSAGE = "Only accept image file (jpeg, jpg, png)"


def validate_image_file(
    filename: str, size_bytes: int, mime_type: Optional[str]
) -> Tuple[bool, Optional[str]]:
    """
    Validate an image before it is written to disk.

    Returns:
        Tuple of (is_valid, error_message)
    """
    for char in DANGEROUS_FILENAME_CHARS:
        if char in filename:
            return False, f"Invalid filename - contains dangerous character '{char}'"

    if len(filename) > 255:
        return False, "Filename too long - maximum 255 characters"

    ext = filename.lower().rsplit(".", 1)[-1] if "." in filename else ""
    if ext not in ALLOWED_IMAGE_EXTENSIONS:
        return False, INVALID_TYPE_MESSAGE

    if (mime_type or "").lower() not in ALLOWED_IMAGE_MIME_TYPES:
        return False, INVALID_TYPE_MESSAGE

    if size_bytes > MAX_IMAGE_SIZE_BYTES:
        return False, f"Image size exceeds maximum of {MAX_IMAGE_SIZE_MB}MB"

    return True, None


def build_image_url(base_url: str, stored_name: str) -> str:
    """Public URL of a stored image, served from the static images mount"""
    return f"{base_url.rstrip('/')}{IMAGE_URL_PREFIX}/{stored_name}"


class PendingImage(BaseModel):
    """A validated upload held in memory until the request is authorized"""

    filename: str
    contents: bytes
    base_url: str


async def read_image(upload: UploadFile, request: Request) -> PendingImage:
    """Validate an uploaded image without writing it anywhere"""
    contents = await upload.read()
    filename = upload.filename or ""

    is_valid, error = validate_image_file(filename, len(contents), upload.content_type)
    if not is_valid:
        logger.warning(f"❌ Rejected image upload '{filename}': {error}")
        raise BadRequestError(error)

    return PendingImage(filename=filename, contents=contents, base_url=str(request.base_url))


def store_image(image: PendingImage) -> str:
    """Save a validated image under UPLOAD_DIR, returning its public URL"""
    stored_name = f"{int(time.time() * 1000)}-{image.filename}"
    target_dir = Path(UPLOAD_DIR)
    target_dir.mkdir(parents=True, exist_ok=True)
    (target_dir / stored_name).write_bytes(image.contents)

    logger.info(f"✅ Stored image {stored_name} ({len(image.contents)} bytes)")
    return build_image_url(image.base_url, stored_name)


def image_upload(field_name: str = "image") -> Callable:
    """
    Build a dependency reading one optional image field from a multipart body.

    The dependency resolves to a validated PendingImage, or None when the
    field was not sent. Nothing touches the disk until store_image is called.
    """

    async def upload_dependency(
        request: Request,
        upload: Optional[UploadFile] = File(None, alias=field_name),
    ) -> Optional[PendingImage]:
        if upload is None or not upload.filename:
            return None
        return await read_image(upload, request)

    return upload_dependency
