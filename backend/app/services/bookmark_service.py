"""
Bookmark persistence service for Social Saver.

CRUD and aggregation over the ``bookmarks`` and ``users`` collections for
the webhook handlers and the dashboard API: filtered pagination, random
pick, category counts, dashboard stats and the pin limit.
"""

import logging
import math
import random
from datetime import UTC, datetime
from typing import Any

from bson import ObjectId
from bson.errors import InvalidId
from motor.motor_asyncio import AsyncIOMotorCollection
from pymongo import ReturnDocument

from app.core.database import DatabaseClient
from app.models.bookmark import Bookmark, BookmarkDraft, BookmarkStats, CategoryCount, User


logger = logging.getLogger(__name__)

ALL_CATEGORIES = "All"
ALL_PLATFORMS = "all"
TOP_CATEGORY_LIMIT = 5


class BookmarkServiceError(Exception):
    """Base exception for bookmark persistence errors."""


class BookmarkNotFoundError(BookmarkServiceError):
    """No bookmark exists with the given id (or the id is not a valid ObjectId)."""

    def __init__(self, bookmark_id: str) -> None:
        self.bookmark_id = bookmark_id
        super().__init__(f"Bookmark not found: {bookmark_id}")


class PinLimitExceededError(BookmarkServiceError):
    """Pinning would exceed the configured maximum of pinned bookmarks."""

    def __init__(self, limit: int) -> None:
        self.limit = limit
        super().__init__(f"You can pin at most {limit} posts.")


def _to_object_id(bookmark_id: str) -> ObjectId:
    try:
        return ObjectId(bookmark_id)
    except (InvalidId, TypeError) as e:
        raise BookmarkNotFoundError(bookmark_id) from e


class BookmarkService:
    """
    Bookmark and user storage on MongoDB.

    Example:
        >>> service = BookmarkService(get_db_client(), max_pinned=3)
        >>> user = await service.get_or_create_user("whatsapp:+15551234567", "Maria")
        >>> bookmark = await service.save_bookmark(draft, user.id)
    """

    def __init__(self, db_client: DatabaseClient, max_pinned: int = 3) -> None:
        self.db_client = db_client
        self.max_pinned = max_pinned

    @property
    def bookmarks(self) -> AsyncIOMotorCollection:
        return self.db_client.get_bookmarks_collection()

    @property
    def users(self) -> AsyncIOMotorCollection:
        return self.db_client.get_users_collection()

    # =========================================================================
    # Users
    # =========================================================================

    async def get_or_create_user(self, phone: str, name: str | None = None) -> User:
        """Find the user for ``phone`` or create one named ``name`` (default "User")."""
        document = await self.users.find_one({"phone": phone})
        if document is None:
            user = User(phone=phone, name=name or "User")
            result = await self.users.insert_one(user.model_dump(exclude={"id"}))
            user.id = str(result.inserted_id)
            logger.info(f"Created user for {phone}")
            return user
        return User(**document)

    # =========================================================================
    # Bookmarks
    # =========================================================================

    async def save_bookmark(self, draft: BookmarkDraft, user_id: str | None) -> Bookmark:
        now = datetime.now(UTC)
        document: dict[str, Any] = {
            **draft.model_dump(),
            "user": ObjectId(user_id) if user_id else None,
            "pinned": False,
            "created_at": now,
            "updated_at": now,
        }
        result = await self.bookmarks.insert_one(document)
        document["_id"] = result.inserted_id
        logger.info(f"Saved bookmark {result.inserted_id} ({draft.platform}, {draft.category})")
        return Bookmark(**document)

    def build_filter(
        self,
        search: str | None = None,
        category: str | None = None,
        platform: str | None = None,
        pinned: bool | None = None,
    ) -> dict[str, Any]:
        """Mongo filter for the list endpoint; ``All``/``all`` disable a filter."""
        query: dict[str, Any] = {}
        if pinned:
            query["pinned"] = True
        if category and category != ALL_CATEGORIES:
            query["category"] = category
        if platform and platform != ALL_PLATFORMS:
            query["platform"] = platform
        if search:
            query["$text"] = {"$search": search}
        return query

    async def list_bookmarks(
        self,
        search: str | None = None,
        category: str | None = None,
        platform: str | None = None,
        pinned: bool | None = None,
        page: int = 1,
        limit: int = 9,
    ) -> dict[str, Any]:
        """
        One page of bookmarks, pinned first then newest.

        Returns:
            Dictionary with ``bookmarks``, ``total``, ``page`` and ``total_pages``.
        """
        page = max(page, 1)
        limit = max(limit, 1)
        query = self.build_filter(search, category, platform, pinned)

        cursor = (
            self.bookmarks.find(query)
            .sort([("pinned", -1), ("created_at", -1)])
            .skip((page - 1) * limit)
            .limit(limit)
        )
        documents = await cursor.to_list(length=limit)
        total = await self.bookmarks.count_documents(query)

        return {
            "bookmarks": [Bookmark(**document) for document in documents],
            "total": total,
            "page": page,
            "total_pages": math.ceil(total / limit),
        }

    async def get_bookmark(self, bookmark_id: str) -> Bookmark:
        document = await self.bookmarks.find_one({"_id": _to_object_id(bookmark_id)})
        if document is None:
            raise BookmarkNotFoundError(bookmark_id)
        return Bookmark(**document)

    async def delete_bookmark(self, bookmark_id: str) -> None:
        result = await self.bookmarks.delete_one({"_id": _to_object_id(bookmark_id)})
        if result.deleted_count == 0:
            raise BookmarkNotFoundError(bookmark_id)
        logger.info(f"Deleted bookmark {bookmark_id}")

    async def get_random_bookmark(self) -> Bookmark | None:
        """Any one bookmark, or ``None`` when there are none."""
        count = await self.bookmarks.count_documents({})
        if count == 0:
            return None
        documents = await self.bookmarks.find({}).skip(random.randrange(count)).limit(1).to_list(length=1)
        return Bookmark(**documents[0]) if documents else None

    async def get_categories(self) -> list[CategoryCount]:
        """Bookmark count per category, largest first."""
        pipeline = [
            {"$group": {"_id": "$category", "count": {"$sum": 1}}},
            {"$sort": {"count": -1}},
        ]
        rows = await self.bookmarks.aggregate(pipeline).to_list(length=None)
        return [CategoryCount(name=row["_id"] or "Uncategorized", count=row["count"]) for row in rows]

    async def get_stats(self) -> BookmarkStats:
        total = await self.bookmarks.count_documents({})
        pinned = await self.bookmarks.count_documents({"pinned": True})
        platform_rows = await self.bookmarks.aggregate(
            [{"$group": {"_id": "$platform", "count": {"$sum": 1}}}]
        ).to_list(length=None)
        categories = await self.get_categories()

        return BookmarkStats(
            total=total,
            pinned=pinned,
            platforms={row["_id"]: row["count"] for row in platform_rows if row["_id"]},
            top_categories=categories[:TOP_CATEGORY_LIMIT],
        )

    async def set_pinned(self, bookmark_id: str, pinned: bool) -> Bookmark:
        """
        Pin or unpin a bookmark.

        Raises:
            BookmarkNotFoundError: Unknown id.
            PinLimitExceededError: ``max_pinned`` bookmarks are already pinned.
        """
        object_id = _to_object_id(bookmark_id)

        if pinned:
            pinned_count = await self.bookmarks.count_documents(
                {"pinned": True, "_id": {"$ne": object_id}}
            )
            if pinned_count >= self.max_pinned:
                raise PinLimitExceededError(self.max_pinned)

        document = await self.bookmarks.find_one_and_update(
            {"_id": object_id},
            {"$set": {"pinned": pinned, "updated_at": datetime.now(UTC)}},
            return_document=ReturnDocument.AFTER,
        )
        if document is None:
            raise BookmarkNotFoundError(bookmark_id)
        return Bookmark(**document)
