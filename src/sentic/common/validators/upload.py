# File: common/validators/upload.py

from typing import Optional

from fastapi import UploadFile

from sentic.common.exceptions.base_exception import PayloadTooLargeError, ValidationError
from sentic.domain.reports.services.report_service import ImageUpload

ALLOWED_IMAGE_TYPES = {"image/jpeg", "image/png", "image/jpg"}


async def read_image_upload(file: Optional[UploadFile], max_bytes: int) -> Optional[ImageUpload]:
    """
    Enforce type and size limits on an uploaded image before it reaches the pipeline.

    Returns None when no file was sent; the pipeline reports that as a missing image.
    """
    if file is None or not file.filename:
        return None

    if file.content_type not in ALLOWED_IMAGE_TYPES:
        raise ValidationError("Only JPG and PNG images are allowed")

    # One byte past the limit is enough to detect an oversize upload.
    content = await file.read(max_bytes + 1)
    if len(content) > max_bytes:
        limit_mb = max_bytes // (1024 * 1024)
        raise PayloadTooLargeError(f"Image exceeds the {limit_mb} MB limit")

    return ImageUpload(content=content, mime_type=file.content_type, filename=file.filename)
