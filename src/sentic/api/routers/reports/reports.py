# File: api/routers/reports/reports.py

from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile, status

from sentic.common.config.settings import Settings
from sentic.common.dependencies.service_dep import get_app_settings, get_report_service
from sentic.common.logging.logger import log_info
from sentic.common.schemas.standard_response import StandardResponse
from sentic.common.validators.upload import read_image_upload
from sentic.domain.reports.entities.report_entity import public_view
from sentic.domain.reports.services.report_service import ReportService

router = APIRouter(prefix="/api/reports", tags=["Reports"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=StandardResponse,
    summary="Submit a civic issue report",
    responses={
        201: {"description": "Report created."},
        400: {"description": "Missing image, wrong image type or invalid coordinates."},
        413: {"description": "Image too large."},
    }
)
async def create_report(
    request: Request,
    image: Optional[UploadFile] = File(default=None),
    area: Optional[str] = Form(default=None),
    latitude: Optional[str] = Form(default=None),
    longitude: Optional[str] = Form(default=None),
    name: Optional[str] = Form(default=None),
    phone: Optional[str] = Form(default=None),
    settings: Settings = Depends(get_app_settings),
    service: ReportService = Depends(get_report_service),
):
    """
    Upload a photo with its location. The image is classified by the ML service
    when one is configured; classification problems never block the submission.
    """
    upload = await read_image_upload(image, settings.MAX_UPLOAD_BYTES)
    report = await service.create_report(
        upload,
        location={"area": area, "latitude": latitude, "longitude": longitude},
        reporter={"name": name, "phone": phone},
    )

    log_info("Report submitted", extra={
        "report_id": report["_id"],
        "ip": request.client.host if request.client else "unknown",
    })
    return StandardResponse.ok(data=public_view(report), message="Report created")


@router.get("", response_model=StandardResponse, summary="List reports for the public gallery")
async def list_reports(service: ReportService = Depends(get_report_service)):
    reports = await service.list_public()
    return StandardResponse.ok(data=reports, message="Reports fetched")


@router.get("/{report_id}", response_model=StandardResponse, summary="Fetch one report")
async def get_report(report_id: str, service: ReportService = Depends(get_report_service)):
    report = await service.get_report(report_id, include_reporter=False)
    return StandardResponse.ok(data=report, message="Report fetched")
