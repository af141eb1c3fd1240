"""
Social Saver MongoDB Database Client Module

Async MongoDB connection management for bookmark storage using Motor:
- Connection pooling sized from settings
- Connect-with-retry and exponential backoff at startup
- Ping health check
- Accessors for the ``bookmarks`` and ``users`` collections
- Index creation for the dashboard's filter, sort and search queries
"""

import asyncio
import logging

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorCollection,
    AsyncIOMotorDatabase,
)
from pymongo import ASCENDING, DESCENDING, TEXT
from pymongo.errors import ConnectionFailure, ServerSelectionTimeoutError

from app.config import Settings, get_settings


logger = logging.getLogger(__name__)

BOOKMARKS_COLLECTION = "bookmarks"
USERS_COLLECTION = "users"

_NOT_CONNECTED_MESSAGE = "MongoDB database not available. Call connect() first or check connection status."


class DatabaseClient:
    """
    Async MongoDB client wrapper with connection pooling and lifecycle management.

    Example usage:
        ```python
        db_client = DatabaseClient(get_settings())
        await db_client.connect()

        bookmarks = db_client.get_bookmarks_collection()
        await bookmarks.count_documents({})

        await db_client.close()
        ```
    """

    def __init__(self, settings: Settings) -> None:
        self._settings = settings
        self._mongodb_uri = settings.mongodb_uri
        self._db_name = settings.mongodb_db_name
        self._min_pool_size = settings.mongodb_min_pool_size
        self._max_pool_size = settings.mongodb_max_pool_size
        self._client: AsyncIOMotorClient | None = None
        self._database: AsyncIOMotorDatabase | None = None

        logger.info(
            f"DatabaseClient initialized with pool size {self._min_pool_size}-{self._max_pool_size} "
            f"for database: {self._db_name}"
        )

    async def connect(self, max_retries: int = 3, retry_delay: float = 1.0) -> bool:
        """
        Establish the MongoDB connection, retrying with exponential backoff.

        Args:
            max_retries: Number of connection attempts before giving up
            retry_delay: Initial delay between attempts in seconds (doubled each time)

        Returns:
            bool: True if the server answered a ping, False after all retries failed.
        """
        for attempt in range(1, max_retries + 1):
            try:
                logger.info(
                    f"Attempting MongoDB connection (attempt {attempt}/{max_retries}) "
                    f"to {self._db_name}..."
                )

                self._client = AsyncIOMotorClient(
                    self._mongodb_uri,
                    minPoolSize=self._min_pool_size,
                    maxPoolSize=self._max_pool_size,
                    serverSelectionTimeoutMS=5000,
                )
                self._database = self._client[self._db_name]

                await self._client.admin.command("ping")

                logger.info(f"Successfully connected to MongoDB database: {self._db_name}")
                return True

            except (ServerSelectionTimeoutError, ConnectionFailure) as e:
                logger.warning(
                    f"MongoDB connection failure (attempt {attempt}/{max_retries}): {e}"
                )
            except Exception:
                logger.exception(
                    f"Unexpected error connecting to MongoDB (attempt {attempt}/{max_retries})"
                )

            if attempt < max_retries:
                logger.warning(f"Retrying in {retry_delay} seconds...")
                await asyncio.sleep(retry_delay)
                retry_delay *= 2

        logger.error(
            f"Failed to connect to MongoDB after {max_retries} attempts. "
            "Check connection URI and server availability."
        )
        self._client = None
        self._database = None
        return False

    async def close(self) -> None:
        """Close the Motor client. Safe to call when not connected."""
        if self._client is None:
            logger.warning("MongoDB close called but no active connection exists")
            return

        try:
            self._client.close()
            logger.info(f"MongoDB connection closed for database: {self._db_name}")
        except Exception:
            logger.exception("Error closing MongoDB connection")
        finally:
            self._client = None
            self._database = None

    async def ping(self) -> bool:
        """Health check using the MongoDB admin ping command."""
        if self._client is None:
            return False

        try:
            await self._client.admin.command("ping")
            return True
        except (ConnectionFailure, ServerSelectionTimeoutError):
            logger.exception("MongoDB ping failed")
            return False

    def get_database(self) -> AsyncIOMotorDatabase:
        if self._database is None:
            raise RuntimeError(_NOT_CONNECTED_MESSAGE)
        return self._database

    def get_bookmarks_collection(self) -> AsyncIOMotorCollection:
        """
        Get the bookmarks collection.

        Each document holds the extracted and classified fields of one saved
        link (platform, title, caption, summary, category, tags, media URLs),
        the owning ``user`` id, the ``pinned`` flag and timestamps.
        """
        return self.get_database()[BOOKMARKS_COLLECTION]

    def get_users_collection(self) -> AsyncIOMotorCollection:
        """Get the users collection (one document per WhatsApp phone number)."""
        return self.get_database()[USERS_COLLECTION]

    async def create_indexes(self) -> None:
        """
        Create indexes used by the dashboard queries.

        - bookmarks: user, platform, category, pinned, created_at, the
          pinned-then-newest sort, and a text index over title, caption,
          summary and tags for search
        - users: unique phone
        """
        database = self.get_database()

        try:
            logger.info("Creating MongoDB indexes...")

            bookmarks = database[BOOKMARKS_COLLECTION]
            await bookmarks.create_index("user")
            await bookmarks.create_index("platform")
            await bookmarks.create_index("category")
            await bookmarks.create_index("pinned")
            await bookmarks.create_index("created_at")
            await bookmarks.create_index([("pinned", DESCENDING), ("created_at", DESCENDING)])
            await bookmarks.create_index(
                [("title", TEXT), ("caption", TEXT), ("summary", TEXT), ("tags", TEXT)],
                name="bookmark_text_search",
            )
            logger.info(f"Created indexes on {BOOKMARKS_COLLECTION} collection")

            users = database[USERS_COLLECTION]
            await users.create_index([("phone", ASCENDING)], unique=True)
            logger.info(f"Created indexes on {USERS_COLLECTION} collection")

        except Exception:
            logger.exception("Error creating MongoDB indexes")
            raise


class _DatabaseClientContainer:
    """Holds the process-wide database client."""

    client: DatabaseClient | None = None


_container = _DatabaseClientContainer()


async def init_db(settings: Settings | None = None) -> DatabaseClient:
    """
    Initialize the global database client: connect and create indexes.

    Called during FastAPI startup.

    Raises:
        RuntimeError: If the connection fails after all retries.
    """
    if _container.client is not None:
        logger.warning("Database client already initialized, returning existing instance")
        return _container.client

    client = DatabaseClient(settings or get_settings())

    if not await client.connect():
        raise RuntimeError(
            "Failed to establish MongoDB connection. "
            "Check mongodb_uri configuration and server availability."
        )

    await client.create_indexes()
    _container.client = client

    logger.info("MongoDB database client initialization complete")
    return client


async def close_db() -> None:
    """Close the global database client (FastAPI shutdown)."""
    if _container.client is not None:
        await _container.client.close()
        _container.client = None
        logger.info("MongoDB database client closed")


def get_db_client() -> DatabaseClient:
    """
    Get the global database client.

    Raises:
        RuntimeError: If ``init_db`` has not completed successfully.
    """
    if _container.client is None:
        raise RuntimeError(
            "Database client not initialized. Call init_db() first during application startup."
        )
    return _container.client
