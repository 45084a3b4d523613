"""Base MongoDB repository with reusable patterns.

Provides common functionality for all MongoDB repositories:
- Connection management
- Document mapping helpers (UUID, timezone-aware datetimes)
- Error handling and logging

Storage errors are logged and raised as PersistenceError. Duplicate keys
are re-raised unchanged because callers use them for compare-and-set.
"""

from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, Generic, List, Optional, Tuple, TypeVar
from uuid import UUID
import logging

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection
from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from ecotaste.infrastructure.config import get_mongodb_database, get_mongodb_uri
from ecotaste.infrastructure.persistence.errors import PersistenceError

TEntity = TypeVar("TEntity")

logger = logging.getLogger(__name__)

Collection = AsyncIOMotorCollection


class MongoBaseRepository(ABC, Generic[TEntity]):
    """
    Abstract base class for MongoDB repositories.

    Subclasses must implement:
    - collection_name: Name of the primary collection
    - to_document(): Convert domain entity to MongoDB document
    - from_document(): Convert MongoDB document to domain entity

    Helpers take an optional ``collection`` so a repository can own more
    than one collection.
    """

    def __init__(self, client: Optional[AsyncIOMotorClient] = None):
        """
        Args:
            client: Motor client (if None, creates new one from config)

        Raises:
            ValueError: If no client is given and MONGODB_URI is not set
        """
        if client is None:
            uri = get_mongodb_uri()
            if not uri:
                raise ValueError(
                    "MONGODB_URI not configured. "
                    "Set MONGODB_URI, MONGODB_USER and MONGODB_PASSWORD environment variables."
                )
            self._client: AsyncIOMotorClient = AsyncIOMotorClient(uri, tz_aware=True)
        else:
            self._client = client

        self._db = self._client[get_mongodb_database()]
        self._collection = self._db[self.collection_name]

        logger.info(
            f"Initialized {self.__class__.__name__} for collection '{self.collection_name}'"
        )

    @property
    @abstractmethod
    def collection_name(self) -> str:
        """Primary MongoDB collection name."""
        pass

    @abstractmethod
    def to_document(self, entity: TEntity) -> Dict[str, Any]:
        pass

    @abstractmethod
    def from_document(self, doc: Dict[str, Any]) -> TEntity:
        """
        Raises:
            ValueError: If document is invalid or missing required fields
        """
        pass

    @property
    def collection(self) -> Collection:
        return self._collection

    @staticmethod
    def uuid_to_str(uuid_value: UUID) -> str:
        return str(uuid_value)

    @staticmethod
    def str_to_uuid(str_value: str) -> UUID:
        return UUID(str_value)

    @staticmethod
    def datetime_to_iso(dt: datetime) -> str:
        """
        Convert datetime to an ISO 8601 string in UTC.

        All stored timestamps share the UTC offset, so string order is
        chronological order.
        """
        if dt.tzinfo is None:
            raise ValueError("Datetime must be timezone-aware")
        return dt.astimezone(timezone.utc).isoformat()

    @staticmethod
    def iso_to_datetime(iso_str: str) -> datetime:
        dt = datetime.fromisoformat(iso_str)
        if dt.tzinfo is None:
            dt = dt.replace(tzinfo=timezone.utc)
        return dt

    def _fail(self, operation: str, collection: Collection, error: Exception) -> PersistenceError:
        logger.error(
            f"Error in {operation}: collection={collection.name}, error={error}",
            extra={"operation": operation, "collection": collection.name},
        )
        return PersistenceError(f"{operation} failed on {collection.name}: {error}")

    async def _find_one(
        self,
        filter_dict: Dict[str, Any],
        projection: Optional[Dict[str, int]] = None,
        collection: Optional[Collection] = None,
    ) -> Optional[Dict[str, Any]]:
        coll = collection if collection is not None else self._collection
        try:
            return await coll.find_one(filter_dict, projection)
        except PyMongoError as e:
            raise self._fail("find_one", coll, e) from e

    async def _find_many(
        self,
        filter_dict: Dict[str, Any],
        sort: Optional[List[Tuple[str, int]]] = None,
        limit: Optional[int] = None,
        skip: Optional[int] = None,
        collection: Optional[Collection] = None,
    ) -> List[Dict[str, Any]]:
        coll = collection if collection is not None else self._collection
        try:
            cursor = coll.find(filter_dict)
            if sort:
                cursor = cursor.sort(sort)
            if skip:
                cursor = cursor.skip(skip)
            if limit:
                cursor = cursor.limit(limit)
            return await cursor.to_list(length=limit)
        except PyMongoError as e:
            raise self._fail("find_many", coll, e) from e

    async def _insert_one(
        self, document: Dict[str, Any], collection: Optional[Collection] = None
    ) -> None:
        coll = collection if collection is not None else self._collection
        try:
            await coll.insert_one(document)
        except DuplicateKeyError:
            raise
        except PyMongoError as e:
            raise self._fail("insert_one", coll, e) from e

    async def _update_one(
        self,
        filter_dict: Dict[str, Any],
        update_dict: Dict[str, Any],
        upsert: bool = False,
        collection: Optional[Collection] = None,
    ) -> int:
        """Returns the number of matched documents (0 or 1)."""
        coll = collection if collection is not None else self._collection
        try:
            result = await coll.update_one(filter_dict, update_dict, upsert=upsert)
            return result.matched_count
        except PyMongoError as e:
            raise self._fail("update_one", coll, e) from e

    async def _find_one_and_update(
        self,
        filter_dict: Dict[str, Any],
        update_dict: Dict[str, Any],
        upsert: bool = False,
        collection: Optional[Collection] = None,
    ) -> Optional[Dict[str, Any]]:
        """Apply the update atomically and return the document after it."""
        coll = collection if collection is not None else self._collection
        try:
            return await coll.find_one_and_update(
                filter_dict,
                update_dict,
                upsert=upsert,
                return_document=ReturnDocument.AFTER,
            )
        except PyMongoError as e:
            raise self._fail("find_one_and_update", coll, e) from e

    async def _delete_one(
        self, filter_dict: Dict[str, Any], collection: Optional[Collection] = None
    ) -> int:
        coll = collection if collection is not None else self._collection
        try:
            result = await coll.delete_one(filter_dict)
            return result.deleted_count
        except PyMongoError as e:
            raise self._fail("delete_one", coll, e) from e

    async def _delete_many(
        self, filter_dict: Dict[str, Any], collection: Optional[Collection] = None
    ) -> int:
        coll = collection if collection is not None else self._collection
        try:
            result = await coll.delete_many(filter_dict)
            return result.deleted_count
        except PyMongoError as e:
            raise self._fail("delete_many", coll, e) from e

    def close(self) -> None:
        """Close the MongoDB client."""
        self._client.close()
        logger.info(f"Closed connection for {self.__class__.__name__}")
