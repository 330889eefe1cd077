"""
Database connection manager for RecruitCRM.

Provides MongoDB connection management through a shared PyMongo client.
PyMongo clients are thread-safe, so request handlers and background
embedding workers share one connection pool.
"""

from typing import Any, Optional
from urllib.parse import quote_plus

from pymongo import MongoClient
from pymongo.database import Database
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from src.utils.config import get_settings
from src.utils.logger import get_logger

logger = get_logger(__name__)


class DatabaseManager:
    """
    Manages MongoDB database connections.

    Implements singleton pattern for connection reuse.
    """

    _instance: Optional["DatabaseManager"] = None
    _client: Optional[MongoClient] = None

    def __new__(cls) -> "DatabaseManager":
        """Ensure singleton instance."""
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self) -> None:
        """Initialize database manager with settings."""
        if hasattr(self, "_initialized") and self._initialized:
            return

        self._settings = get_settings()
        self._db_name = self._settings.database.name
        self._uri = self._build_uri()
        self._initialized = True

    def _build_uri(self) -> str:
        """
        Build MongoDB connection URI from settings.

        Security: URL-encodes credentials to prevent injection attacks.
        """
        db_settings = self._settings.database

        host = db_settings.host.strip()
        if not host or any(c in host for c in [";", "&", "|", "$", "`"]):
            raise ValueError(f"Invalid database host: {host}")

        auth = ""
        if db_settings.username and db_settings.password:
            encoded_user = quote_plus(db_settings.username)
            encoded_pass = quote_plus(db_settings.password)
            auth = f"{encoded_user}:{encoded_pass}@"

        return f"mongodb://{auth}{host}:{db_settings.port}"

    # -------------------------------------------------------------------------
    # Client
    # -------------------------------------------------------------------------

    def get_client(self) -> MongoClient:
        """Get or create the MongoDB client."""
        if self._client is None:
            logger.info("Creating MongoDB client")
            try:
                self._client = MongoClient(
                    self._uri,
                    serverSelectionTimeoutMS=5000,
                    connectTimeoutMS=5000,
                    maxPoolSize=50,
                    minPoolSize=5,
                )
            except Exception as e:
                self._client = None
                logger.error(f"Failed to create MongoDB client: {e}")
                raise
        return self._client

    def get_database(self) -> Database:
        """Get database instance."""
        return self.get_client()[self._db_name]

    def get_collection(self, collection_name: str) -> Any:
        """Get a collection by name."""
        return self.get_database()[collection_name]

    def check_connection(self) -> bool:
        """Check if the connection is healthy."""
        try:
            self.get_client().admin.command("ping")
            return True
        except (ConnectionFailure, ServerSelectionTimeoutError) as e:
            logger.error(f"Connection check failed: {e}")
            self._client = None
            return False

    # -------------------------------------------------------------------------
    # Lifecycle Management
    # -------------------------------------------------------------------------

    def close(self) -> None:
        """Close the client connection."""
        if self._client:
            logger.info("Closing MongoDB client")
            self._client.close()
            self._client = None

    # -------------------------------------------------------------------------
    # Index Management
    # -------------------------------------------------------------------------

    def ensure_indexes(self) -> None:
        """Create indexes for the candidates collection."""
        logger.info("Ensuring database indexes")

        candidates = self.get_collection("candidates")
        candidates.create_index("email", sparse=True)
        candidates.create_index("status")
        candidates.create_index("tags")
        candidates.create_index("createdAt")

        logger.info("Database indexes created successfully")


# Global database manager instance
_db_manager: Optional[DatabaseManager] = None


def get_database_manager() -> DatabaseManager:
    """Get the global database manager instance."""
    global _db_manager
    if _db_manager is None:
        _db_manager = DatabaseManager()
    return _db_manager


def get_db() -> Database:
    """Convenience function to get the database."""
    return get_database_manager().get_database()
