import math
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel

from sentic.common.exceptions.base_exception import ValidationError


class IssueType(str, Enum):
    POTHOLE = "pothole"
    GARBAGE = "garbage"
    TREE_FALL = "tree_fall"


class ReportStatus(str, Enum):
    OPEN = "open"
    RESOLVED = "resolved"
    FLAGGED = "flagged"


# Declaration order matters: the classifier falls back to the first entry.
ISSUE_TYPES = [issue.value for issue in IssueType]
STATUSES = [status.value for status in ReportStatus]

DEFAULT_MIME_TYPE = "image/jpeg"
SEVERITY_MIN = 0
SEVERITY_MAX = 100


class ReportLocation(BaseModel):
    area: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None


class Reporter(BaseModel):
    name: Optional[str] = None
    phone: Optional[str] = None


def is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, int):
        return True
    return math.isfinite(value)


def validate_status(status: Any) -> str:
    if status not in STATUSES:
        raise ValidationError("Invalid status value")
    return status


def validate_report(document: Dict[str, Any]) -> Dict[str, Any]:
    """Check a report document before it is persisted."""
    if not document.get("imageData"):
        raise ValidationError("Image is required")
    if not document.get("imageMimeType"):
        raise ValidationError("Image type is required")
    if document.get("issueType") not in ISSUE_TYPES:
        raise ValidationError("Invalid issue type")

    severity = document.get("severity")
    if not is_finite_number(severity) or not SEVERITY_MIN <= severity <= SEVERITY_MAX:
        raise ValidationError("Severity must be a number between 0 and 100")

    validate_status(document.get("status"))

    location = document.get("location") or {}
    for key in ("latitude", "longitude"):
        if key in location and not is_finite_number(location[key]):
            raise ValidationError(f"Invalid {key}")
    return document


def public_view(report: Dict[str, Any]) -> Dict[str, Any]:
    """Strip reporter contact details for unauthenticated callers."""
    return {key: value for key, value in report.items() if key != "reporter"}
