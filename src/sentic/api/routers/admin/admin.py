# File: api/routers/admin/admin.py

from typing import Optional

from fastapi import APIRouter, Depends, Request, status

from sentic.common.config.settings import Settings
from sentic.common.dependencies.auth_dep import require_admin
from sentic.common.dependencies.service_dep import (
    get_admin_repository,
    get_app_settings,
    get_report_service,
)
from sentic.common.exceptions.base_exception import ValidationError
from sentic.common.schemas.standard_response import StandardResponse
from sentic.domain.admin.entities.admin_entity import LoginAdminRequest, StatusUpdateRequest
from sentic.domain.admin.services.login_admin import login_admin_service
from sentic.domain.reports.services.report_service import ReportService
from sentic.infrastructure.database.mongodb.repositories.admin_repository import AdminRepository

router = APIRouter(prefix="/api/admin", tags=["Admin"])

# Everything registered on this router requires a valid admin token.
protected = APIRouter(dependencies=[Depends(require_admin)])


@router.post(
    "/login",
    status_code=status.HTTP_200_OK,
    response_model=StandardResponse,
    summary="Admin login",
    responses={
        200: {"description": "Login successful, token returned."},
        400: {"description": "Username or password missing."},
        401: {"description": "Invalid credentials."},
    }
)
async def login_admin(
    request: Request,
    data: Optional[LoginAdminRequest] = None,
    settings: Settings = Depends(get_app_settings),
    admins: AdminRepository = Depends(get_admin_repository),
):
    """Exchange a username/password pair for a signed bearer token."""
    data = data or LoginAdminRequest()
    result = await login_admin_service(
        settings,
        admins,
        data.username,
        data.password,
        client_ip=request.client.host if request.client else "unknown",
    )
    return StandardResponse.ok(data=result.model_dump(), message="Login successful")


@protected.get("/reports", response_model=StandardResponse, summary="List all reports including reporter details")
async def list_reports_admin(service: ReportService = Depends(get_report_service)):
    reports = await service.list_admin()
    return StandardResponse.ok(data=reports, message="Reports fetched")


@protected.patch("/reports/{report_id}/status", response_model=StandardResponse, summary="Change a report's status")
async def update_report_status(
    report_id: str,
    data: Optional[StatusUpdateRequest] = None,
    service: ReportService = Depends(get_report_service),
):
    if data is None or not data.status:
        raise ValidationError("Status is required")

    report = await service.update_status(report_id, data.status)
    return StandardResponse.ok(data=report, message="Status updated")


router.include_router(protected)
