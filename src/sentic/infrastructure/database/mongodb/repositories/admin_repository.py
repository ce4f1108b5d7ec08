# File: infrastructure/database/mongodb/repositories/admin_repository.py
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from motor.motor_asyncio import AsyncIOMotorDatabase

from sentic.infrastructure.database.mongodb.repository import MongoRepository

ADMINS_COLLECTION = "admins"


class AdminRepository:
    def __init__(self, db: AsyncIOMotorDatabase):
        self.repo = MongoRepository(db, ADMINS_COLLECTION)

    async def find_by_username(self, username: str) -> Optional[Dict[str, Any]]:
        return await self.repo.find_one({"username": username})

    async def create(self, username: str, password_hash: str) -> str:
        return await self.repo.insert_one({
            "username": username,
            "password": password_hash,
            "createdAt": datetime.now(timezone.utc),
        })
