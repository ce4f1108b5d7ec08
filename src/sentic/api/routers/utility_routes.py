# File: api/routers/utility_routes.py

from fastapi import APIRouter
from fastapi.responses import PlainTextResponse

from sentic.common.schemas.standard_response import StandardResponse

router = APIRouter(tags=["Utility"])


@router.get("/", response_class=PlainTextResponse)
async def root():
    return "Welcome to the SENTIC backend API"


@router.get("/favicon.ico", response_class=PlainTextResponse)
async def favicon():
    return ""


@router.get("/health", status_code=200, response_model=StandardResponse, response_model_exclude_none=True)
async def health_check():
    return StandardResponse.ok(message="SENTIC backend is running")
