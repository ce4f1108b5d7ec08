from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from sentic.common.exceptions.base_exception import ValidationError
from sentic.common.logging.logger import log_error, log_info, log_warning
from sentic.domain.reports.entities.report_entity import (
    DEFAULT_MIME_TYPE,
    ReportLocation,
    Reporter,
    ReportStatus,
    validate_report,
)
from sentic.domain.reports.services.image_service import build_data_url, encode_image
from sentic.infrastructure.database.mongodb.repositories.report_repository import ReportRepository
from sentic.infrastructure.external.ml.classifier_client import ClassificationResult, IssueClassifier

# Substituted when classification fails. Separate from the classifier default (ISSUE_TYPES[0]).
ASSEMBLER_FALLBACK = {"issueType": "pothole", "severity": 50}


@dataclass
class ImageUpload:
    content: bytes
    mime_type: Optional[str] = None
    filename: Optional[str] = None


def _clean_text(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def _coerce_coordinate(name: str, value: Any) -> Optional[float]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        raise ValidationError(f"Invalid {name}")


def build_location(location: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    location = location or {}
    return ReportLocation(
        area=_clean_text(location.get("area")),
        latitude=_coerce_coordinate("latitude", location.get("latitude")),
        longitude=_coerce_coordinate("longitude", location.get("longitude")),
    ).model_dump(exclude_none=True)


def build_reporter(reporter: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not reporter:
        return None
    cleaned = Reporter(
        name=_clean_text(reporter.get("name")),
        phone=_clean_text(reporter.get("phone")),
    ).model_dump(exclude_none=True)
    return cleaned or None


class ReportService:
    """Report creation pipeline plus the read and triage operations around it."""

    def __init__(self, repository: ReportRepository, classifier: IssueClassifier):
        self.repository = repository
        self.classifier = classifier

    async def _classify(self, image_data_url: str) -> Dict[str, Any]:
        try:
            result: ClassificationResult = await self.classifier.classify(image_data_url)
        except Exception as exc:
            log_error("Classifier raised unexpectedly", extra={"error": str(exc)}, exc_info=True)
            return dict(ASSEMBLER_FALLBACK)

        if not result.ok:
            log_warning("Classification unavailable, using fallback", extra={
                "error": result.error.message,
                "fallback": ASSEMBLER_FALLBACK,
            })
            return dict(ASSEMBLER_FALLBACK)
        return {"issueType": result.issue_type, "severity": result.severity}

    async def create_report(
        self,
        image: Optional[ImageUpload],
        location: Optional[Dict[str, Any]] = None,
        reporter: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        if image is None or not image.content:
            raise ValidationError("Image is required")

        mime_type = image.mime_type or DEFAULT_MIME_TYPE
        image_data = encode_image(image.content, mime_type)
        classification = await self._classify(build_data_url(image_data, mime_type))

        document: Dict[str, Any] = {
            "imageData": image_data,
            "imageMimeType": mime_type,
            "issueType": classification["issueType"],
            "severity": classification["severity"],
            "location": build_location(location),
            "status": ReportStatus.OPEN.value,
        }
        reporter_doc = build_reporter(reporter)
        if reporter_doc:
            document["reporter"] = reporter_doc

        validate_report(document)
        report = await self.repository.create(document)

        log_info("Report created", extra={
            "report_id": report["_id"],
            "issue_type": report["issueType"],
            "severity": report["severity"],
        })
        return report

    async def list_public(self) -> List[Dict[str, Any]]:
        return await self.repository.find_all_public()

    async def list_admin(self) -> List[Dict[str, Any]]:
        return await self.repository.find_all_admin()

    async def get_report(self, report_id: str, include_reporter: bool = False) -> Dict[str, Any]:
        return await self.repository.find_by_id(report_id, include_reporter=include_reporter)

    async def update_status(self, report_id: str, status: Any) -> Dict[str, Any]:
        report = await self.repository.update_status(report_id, status)
        log_info("Report status updated", extra={"report_id": report_id, "status": status})
        return report
