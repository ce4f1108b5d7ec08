"""
Client for the external issue classifier.

The service receives a self-contained image data URL and answers with
``{"issueType": ..., "severity": ...}``. Every outcome is returned as a
``ClassificationResult``; callers decide how to recover from a failure.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Optional

import httpx

from sentic.common.config.settings import Settings
from sentic.common.exceptions.base_exception import UpstreamClassificationError
from sentic.common.logging.logger import log_info, log_warning
from sentic.domain.reports.entities.report_entity import (
    ISSUE_TYPES,
    SEVERITY_MAX,
    SEVERITY_MIN,
    is_finite_number,
)

DEFAULT_SEVERITY = 50
ANALYZE_PATH = "/analyze"


@dataclass(frozen=True)
class ClassificationResult:
    issue_type: str
    severity: float
    error: Optional[UpstreamClassificationError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def failure(cls, error: UpstreamClassificationError) -> "ClassificationResult":
        return cls(issue_type=ISSUE_TYPES[0], severity=DEFAULT_SEVERITY, error=error)


def default_classification() -> ClassificationResult:
    return ClassificationResult(issue_type=ISSUE_TYPES[0], severity=DEFAULT_SEVERITY)


def normalize_prediction(data: Any) -> ClassificationResult:
    """Accept each field independently, substituting the default for invalid ones."""
    fallback = default_classification()
    if not isinstance(data, dict):
        return fallback

    issue_type = data.get("issueType")
    if issue_type not in ISSUE_TYPES:
        issue_type = fallback.issue_type

    severity = data.get("severity")
    if not is_finite_number(severity):
        severity = fallback.severity
    severity = min(max(severity, SEVERITY_MIN), SEVERITY_MAX)

    return ClassificationResult(issue_type=issue_type, severity=severity)


class IssueClassifier:
    def __init__(self, settings: Settings, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = settings.ML_API_URL.rstrip("/")
        self.api_key = settings.ML_API_KEY
        self.timeout = settings.ML_API_TIMEOUT / 1000
        self.transport = transport

    @property
    def configured(self) -> bool:
        return bool(self.base_url)

    async def classify(self, image_data_url: str) -> ClassificationResult:
        if not self.configured:
            log_info("Classifier not configured, using default classification")
            return default_classification()

        try:
            # httpx timeouts apply per phase; the deadline covers the whole exchange.
            data = await asyncio.wait_for(self._request(image_data_url), timeout=self.timeout)
        except (asyncio.TimeoutError, httpx.TimeoutException) as exc:
            log_warning("ML inference timed out", extra={"timeout_s": self.timeout, "error": str(exc)})
            return ClassificationResult.failure(UpstreamClassificationError("ML inference timed out"))
        except httpx.HTTPStatusError as exc:
            log_warning("ML inference failed", extra={"status_code": exc.response.status_code})
            return ClassificationResult.failure(UpstreamClassificationError("ML inference failed"))
        except (httpx.HTTPError, ValueError) as exc:
            log_warning("ML inference failed", extra={"error": str(exc)})
            return ClassificationResult.failure(UpstreamClassificationError("ML inference failed"))

        result = normalize_prediction(data)
        log_info("ML inference succeeded", extra={"issue_type": result.issue_type, "severity": result.severity})
        return result

    async def _request(self, image_data_url: str) -> Any:
        headers = {"x-api-key": self.api_key} if self.api_key else None
        async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
            response = await client.post(
                self.base_url + ANALYZE_PATH,
                json={"imageUrl": image_data_url},
                headers=headers,
            )
            response.raise_for_status()
            return response.json()
