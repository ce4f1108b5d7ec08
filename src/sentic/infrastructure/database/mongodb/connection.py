# File: infrastructure/database/mongodb/connection.py

from typing import Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from sentic.common.config.settings import Settings
from sentic.common.exceptions.base_exception import ServiceUnavailableException
from sentic.common.logging.logger import log_info, log_error


class MongoDBConnection:
    """Owns the motor client for the lifetime of the application."""

    def __init__(self, settings: Settings):
        self.settings = settings
        self._client: Optional[AsyncIOMotorClient] = None
        self._db: Optional[AsyncIOMotorDatabase] = None

    async def connect(self):
        if self._client is not None:
            return

        mongo_uri = self.settings.MONGO_URI
        timeout = self.settings.MONGO_TIMEOUT
        try:
            log_info("Attempting MongoDB connection", extra={"db": self.settings.MONGO_DB, "timeout": timeout})

            client = AsyncIOMotorClient(mongo_uri, serverSelectionTimeoutMS=timeout)
            await client.admin.command("ping")

            self._client = client
            self._db = client[self.settings.MONGO_DB]
            log_info("MongoDB connection established", extra={"db": self.settings.MONGO_DB})

        except Exception as e:
            log_error("MongoDB connection failed", extra={
                "timeout": timeout,
                "error": str(e)
            }, exc_info=True)
            raise ServiceUnavailableException("MongoDB unavailable")

    async def disconnect(self):
        if self._client is not None:
            self._client.close()
            log_info("MongoDB connection closed", extra={"db": self.settings.MONGO_DB})
            self._client = None
            self._db = None

    def get_db(self) -> AsyncIOMotorDatabase:
        if self._db is None:
            log_error("Attempt to access MongoDB before connection was established")
            raise ServiceUnavailableException("MongoDB not connected. Call connect() first.")
        return self._db
