# File: main.py
"""
SENTIC API application factory.

Run with: uvicorn sentic.main:create_app --factory --port 5000
"""

from contextlib import asynccontextmanager
from typing import Optional

import sentry_sdk
from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from sentry_sdk.integrations.fastapi import FastApiIntegration

from sentic.api.middleware.error_middleware import ErrorLoggingMiddleware
from sentic.api.routers.all_endpoints import all_routers
from sentic.common.config.settings import Settings, get_settings
from sentic.common.exceptions.exception_handlers import register_exception_handlers
from sentic.common.logging.logger import configure_logging, log_error, log_info
from sentic.infrastructure.database.mongodb.connection import MongoDBConnection
from sentic.infrastructure.database.mongodb.repositories.admin_repository import AdminRepository
from sentic.infrastructure.setup.initial_setup import ensure_admin


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings: Settings = app.state.settings
    mongo: MongoDBConnection = app.state.mongo

    # Startup tasks
    try:
        await mongo.connect()

        if settings.ADMIN_USERNAME and settings.ADMIN_PASSWORD:
            await ensure_admin(AdminRepository(mongo.get_db()), settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)

        log_info("SENTIC API started", extra={"version": app.version, "environment": settings.ENVIRONMENT})
    except Exception as e:
        log_error("Startup failed", extra={"error": str(e)})
        sentry_sdk.capture_exception(e)
        raise

    yield  # Application is running

    # Shutdown tasks
    await mongo.disconnect()
    log_info("SENTIC API stopped")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    load_dotenv()
    settings = settings or get_settings()
    configure_logging(settings)

    if settings.SENTRY_DSN:
        sentry_sdk.init(
            dsn=settings.SENTRY_DSN,
            integrations=[FastApiIntegration()],
            traces_sample_rate=settings.SENTRY_TRACES_SAMPLE_RATE,
            environment=settings.ENVIRONMENT,
        )

    app = FastAPI(
        title="SENTIC Civic Issue API",
        version="1.0.0",
        description="Citizen photo reports of civic issues with ML triage and an admin panel.",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.mongo = MongoDBConnection(settings)

    # Request logger middleware
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        log_info("Incoming request", extra={"method": request.method, "url": str(request.url)})
        return await call_next(request)

    # Register middlewares
    app.add_middleware(ErrorLoggingMiddleware)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)
    app.include_router(all_routers)
    return app
