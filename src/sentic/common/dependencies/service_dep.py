# File: common/dependencies/service_dep.py
from fastapi import Depends, Request
from motor.motor_asyncio import AsyncIOMotorDatabase

from sentic.common.config.settings import Settings
from sentic.domain.reports.services.report_service import ReportService
from sentic.infrastructure.database.mongodb.repositories.admin_repository import AdminRepository
from sentic.infrastructure.database.mongodb.repositories.report_repository import ReportRepository
from sentic.infrastructure.external.ml.classifier_client import IssueClassifier


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_database(request: Request) -> AsyncIOMotorDatabase:
    return request.app.state.mongo.get_db()


def get_report_repository(db: AsyncIOMotorDatabase = Depends(get_database)) -> ReportRepository:
    return ReportRepository(db)


def get_admin_repository(db: AsyncIOMotorDatabase = Depends(get_database)) -> AdminRepository:
    return AdminRepository(db)


def get_classifier(settings: Settings = Depends(get_app_settings)) -> IssueClassifier:
    return IssueClassifier(settings)


def get_report_service(
    repository: ReportRepository = Depends(get_report_repository),
    classifier: IssueClassifier = Depends(get_classifier),
) -> ReportService:
    return ReportService(repository, classifier)
