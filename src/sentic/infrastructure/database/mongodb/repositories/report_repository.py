# File: infrastructure/database/mongodb/repositories/report_repository.py
from datetime import datetime, timezone
from typing import Any, Dict, List

from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import DESCENDING

from sentic.common.exceptions.base_exception import NotFoundError
from sentic.domain.reports.entities.report_entity import validate_status
from sentic.infrastructure.database.mongodb.repository import MongoRepository

REPORTS_COLLECTION = "reports"

PUBLIC_PROJECTION = {"reporter": 0}
NEWEST_FIRST = [("createdAt", DESCENDING)]


class ReportRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.repo = MongoRepository(db, REPORTS_COLLECTION)

    async def create(self, record: Dict[str, Any]) -> Dict[str, Any]:
        document = dict(record)
        document["createdAt"] = datetime.now(timezone.utc)
        document["_id"] = await self.repo.insert_one(document)
        return document

    async def find_all_public(self) -> List[Dict[str, Any]]:
        return await self.repo.find({}, projection=PUBLIC_PROJECTION, sort=NEWEST_FIRST)

    async def find_all_admin(self) -> List[Dict[str, Any]]:
        return await self.repo.find({}, sort=NEWEST_FIRST)

    async def find_by_id(self, report_id: str, include_reporter: bool = False) -> Dict[str, Any]:
        projection = None if include_reporter else PUBLIC_PROJECTION
        report = await self.repo.find_one({"_id": report_id}, projection=projection)
        if report is None:
            raise NotFoundError("Report not found")
        return report

    async def update_status(self, report_id: str, status: str) -> Dict[str, Any]:
        validate_status(status)
        report = await self.repo.find_one_and_update({"_id": report_id}, {"status": status})
        if report is None:
            raise NotFoundError("Report not found")
        return report
