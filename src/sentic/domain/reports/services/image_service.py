import base64
from typing import Optional

from sentic.common.exceptions.base_exception import ValidationError
from sentic.domain.reports.entities.report_entity import DEFAULT_MIME_TYPE


def encode_image(file_bytes: Optional[bytes], mime_type: Optional[str] = None) -> str:
    """Return the upload as base64 text so it can be stored inline."""
    if not file_bytes:
        raise ValidationError("Image file is required")
    return base64.b64encode(file_bytes).decode("ascii")


def build_data_url(base64_data: str, mime_type: Optional[str] = None) -> str:
    return f"data:{mime_type or DEFAULT_MIME_TYPE};base64,{base64_data}"
