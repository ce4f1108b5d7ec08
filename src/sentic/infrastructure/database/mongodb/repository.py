# File: infrastructure/database/mongodb/repository.py

from typing import Any, Dict, List, Optional, Tuple

from bson import ObjectId
from motor.motor_asyncio import AsyncIOMotorDatabase
from pymongo import ReturnDocument

from sentic.common.exceptions.base_exception import ServiceUnavailableException
from sentic.common.logging.logger import log_debug, log_error


class MongoRepository:
    def __init__(self, db: AsyncIOMotorDatabase, collection_name: str):
        self.db = db
        self.collection_name = collection_name
        self.collection = db[collection_name]

    @staticmethod
    def _convert_to_objectid(value: Any) -> Any:
        if isinstance(value, str) and ObjectId.is_valid(value):
            return ObjectId(value)
        return value

    def _normalize_query(self, query: Dict[str, Any]) -> Dict[str, Any]:
        query = dict(query)
        if "_id" in query:
            query["_id"] = self._convert_to_objectid(query["_id"])
        return query

    @staticmethod
    def _stringify_id(document: Optional[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if document and "_id" in document:
            document["_id"] = str(document["_id"])
        return document

    async def insert_one(self, document: Dict[str, Any]) -> str:
        try:
            if "_id" in document and isinstance(document["_id"], str):
                document["_id"] = self._convert_to_objectid(document["_id"])
            result = await self.collection.insert_one(document)
            inserted_id = str(result.inserted_id)
            log_debug("Mongo insert_one", extra={"collection": self.collection_name, "id": inserted_id})
            return inserted_id
        except Exception as e:
            log_error("Mongo insert_one failed", extra={"collection": self.collection_name, "error": str(e)}, exc_info=True)
            raise ServiceUnavailableException("Failed to insert document: Internal DB error")

    async def find_one(
        self,
        query: Dict[str, Any],
        projection: Optional[Dict[str, int]] = None,
    ) -> Optional[Dict[str, Any]]:
        query = self._normalize_query(query)
        try:
            result = await self.collection.find_one(query, projection)
            log_debug("Mongo find_one", extra={"collection": self.collection_name, "query": str(query), "found": bool(result)})
            return self._stringify_id(result)
        except Exception as e:
            log_error("Mongo find_one failed", extra={"collection": self.collection_name, "error": str(e)}, exc_info=True)
            raise ServiceUnavailableException("Failed to find document: Internal DB error")

    async def find(
        self,
        query: Dict[str, Any],
        projection: Optional[Dict[str, int]] = None,
        sort: Optional[List[Tuple[str, int]]] = None,
    ) -> List[Dict[str, Any]]:
        query = self._normalize_query(query)
        try:
            cursor = self.collection.find(query, projection)
            if sort:
                cursor = cursor.sort(sort)
            result = await cursor.to_list(length=None)
            for doc in result:
                self._stringify_id(doc)
            log_debug("Mongo find", extra={"collection": self.collection_name, "query": str(query), "sort": sort, "count": len(result)})
            return result
        except Exception as e:
            log_error("Mongo find failed", extra={"collection": self.collection_name, "error": str(e)}, exc_info=True)
            raise ServiceUnavailableException("Failed to fetch documents: Internal DB error")

    async def find_one_and_update(
        self,
        query: Dict[str, Any],
        update: Dict[str, Any],
        projection: Optional[Dict[str, int]] = None,
    ) -> Optional[Dict[str, Any]]:
        query = self._normalize_query(query)
        try:
            result = await self.collection.find_one_and_update(
                query,
                {"$set": update},
                projection=projection,
                return_document=ReturnDocument.AFTER,
            )
            log_debug("Mongo find_one_and_update", extra={"collection": self.collection_name, "query": str(query), "found": bool(result)})
            return self._stringify_id(result)
        except Exception as e:
            log_error("Mongo find_one_and_update failed", extra={"collection": self.collection_name, "error": str(e)}, exc_info=True)
            raise ServiceUnavailableException("Failed to update document: Internal DB error")
