# File: api/routers/all_endpoints.py

from fastapi import APIRouter

from sentic.api.routers.admin import admin
from sentic.api.routers.reports import reports
from sentic.api.routers.utility_routes import router as utility_router


# Main router
all_routers = APIRouter()

# Include routers
all_routers.include_router(utility_router)
all_routers.include_router(reports.router)
all_routers.include_router(admin.router)
