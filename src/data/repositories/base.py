"""
Base repository class providing common CRUD operations.

All entity-specific repositories inherit from this base class.
"""

from abc import ABC, abstractmethod
from typing import Any, Generic, Optional, TypeVar

from bson import ObjectId
from bson.errors import InvalidId
from pydantic import ValidationError
from pymongo.collection import Collection
from pymongo.results import DeleteResult, InsertOneResult, UpdateResult

from src.data.database import DatabaseManager, get_database_manager
from src.data.models.base import BaseDocument, utc_now
from src.utils.logger import get_logger

logger = get_logger(__name__)

# Type variable for document models
T = TypeVar("T", bound=BaseDocument)


class BaseRepository(ABC, Generic[T]):
    """
    Abstract base repository providing common database operations.

    Subclasses must define the collection name and model class.
    """

    @property
    @abstractmethod
    def collection_name(self) -> str:
        """Name of the MongoDB collection."""
        pass

    @property
    @abstractmethod
    def model_class(self) -> type[T]:
        """Pydantic model class for this repository."""
        pass

    def __init__(self, db_manager: Optional[DatabaseManager] = None) -> None:
        """Initialize repository with database connection."""
        self._db_manager = db_manager or get_database_manager()

    # -------------------------------------------------------------------------
    # Collection Access
    # -------------------------------------------------------------------------

    def _get_collection(self) -> Collection:
        """Get collection instance."""
        return self._db_manager.get_collection(self.collection_name)

    # -------------------------------------------------------------------------
    # Document Conversion
    # -------------------------------------------------------------------------

    def _to_model(self, document: Optional[dict[str, Any]]) -> Optional[T]:
        """Convert MongoDB document to Pydantic model."""
        if document is None:
            return None
        return self.model_class.model_validate(document)

    def _to_models(self, documents: list[dict[str, Any]]) -> list[T]:
        """
        Convert list of MongoDB documents to Pydantic models.

        Documents that fail validation are logged and skipped.
        """
        models = []
        for doc in documents:
            if doc is None:
                continue
            try:
                models.append(self.model_class.model_validate(doc))
            except ValidationError as e:
                logger.warning(
                    f"Skipping invalid {self.collection_name} document {doc.get('_id')}: "
                    f"{e.error_count()} validation error(s)"
                )
        return models

    def _to_document(self, model: T) -> dict[str, Any]:
        """Convert Pydantic model to MongoDB document."""
        return model.model_dump_mongo()

    @staticmethod
    def _to_object_id(id_value: str | ObjectId) -> Optional[ObjectId]:
        """Convert string to ObjectId if needed; malformed ids map to None."""
        if isinstance(id_value, ObjectId):
            return id_value
        try:
            return ObjectId(id_value)
        except (InvalidId, TypeError):
            return None

    # -------------------------------------------------------------------------
    # CRUD Operations
    # -------------------------------------------------------------------------

    def insert(self, model: T) -> T:
        """Insert a new document."""
        collection = self._get_collection()
        document = self._to_document(model)
        now = utc_now()
        document["createdAt"] = now
        document["updatedAt"] = now

        result: InsertOneResult = collection.insert_one(document)
        model.id = result.inserted_id
        logger.debug(f"Created {self.collection_name} document: {result.inserted_id}")
        return model

    def get_by_id(self, id_value: str | ObjectId) -> Optional[T]:
        """Get a document by its ID."""
        object_id = self._to_object_id(id_value)
        if object_id is None:
            return None
        document = self._get_collection().find_one({"_id": object_id})
        return self._to_model(document)

    def find(
        self,
        query: dict[str, Any],
        skip: int = 0,
        limit: int = 0,
        sort_by: str = "_id",
        sort_order: int = 1,
    ) -> list[T]:
        """Find documents matching a query. ``limit=0`` means no limit."""
        cursor = (
            self._get_collection()
            .find(query)
            .sort(sort_by, sort_order)
            .skip(skip)
            .limit(limit)
        )
        return self._to_models(list(cursor))

    def set_fields(self, id_value: str | ObjectId, update_data: dict[str, Any]) -> Optional[T]:
        """Set fields on a document by ID; returns the fresh document or None if missing."""
        object_id = self._to_object_id(id_value)
        if object_id is None:
            return None

        update_data = {**update_data, "updatedAt": utc_now()}
        result: UpdateResult = self._get_collection().update_one(
            {"_id": object_id},
            {"$set": update_data},
        )

        if result.matched_count == 0:
            return None
        logger.debug(f"Updated {self.collection_name} document: {id_value}")
        return self.get_by_id(object_id)

    def remove(self, id_value: str | ObjectId) -> bool:
        """Delete a document by ID."""
        object_id = self._to_object_id(id_value)
        if object_id is None:
            return False
        result: DeleteResult = self._get_collection().delete_one({"_id": object_id})
        if result.deleted_count > 0:
            logger.debug(f"Deleted {self.collection_name} document: {id_value}")
            return True
        return False
