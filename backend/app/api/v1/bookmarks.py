"""
FastAPI Router for the bookmark dashboard - Social Saver.

Endpoints:
    GET    /             - Filtered, paginated list (pinned first, newest first)
    GET    /random       - One random bookmark
    GET    /categories   - Bookmark count per category
    GET    /stats        - Totals, pinned count, per-platform counts, top categories
    GET    /{id}         - Single bookmark
    DELETE /{id}         - Delete a bookmark
    PATCH  /{id}         - Pin or unpin (at most ``max_pinned_bookmarks`` pinned)
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.config import Settings, get_settings
from app.core.container import get_bookmark_service
from app.models.bookmark import (
    Bookmark,
    BookmarkListResponse,
    BookmarkStats,
    CategoryCount,
    PinUpdateRequest,
)
from app.services.bookmark_service import (
    BookmarkNotFoundError,
    BookmarkService,
    PinLimitExceededError,
)


logger = logging.getLogger(__name__)

router = APIRouter(tags=["bookmarks"])


def _not_found(e: BookmarkNotFoundError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail={"error": "not_found", "message": str(e)},
    )


@router.get("", response_model=BookmarkListResponse)
async def list_bookmarks(
    search: str | None = Query(default=None, description="Full-text search over title, caption, summary, tags"),
    category: str | None = Query(default=None, description="Category name, or 'All'"),
    platform: str | None = Query(default=None, description="Platform name, or 'all'"),
    pinned: bool | None = Query(default=None, description="Only pinned bookmarks when true"),
    page: int = Query(default=1, ge=1),
    limit: int | None = Query(default=None, ge=1),
    bookmarks: BookmarkService = Depends(get_bookmark_service),
    settings: Settings = Depends(get_settings),
) -> BookmarkListResponse:
    page_size = min(limit or settings.default_page_size, settings.max_page_size)
    result = await bookmarks.list_bookmarks(
        search=search,
        category=category,
        platform=platform,
        pinned=pinned,
        page=page,
        limit=page_size,
    )
    return BookmarkListResponse(**result)


@router.get("/random", response_model=Bookmark)
async def get_random_bookmark(bookmarks: BookmarkService = Depends(get_bookmark_service)) -> Bookmark:
    bookmark = await bookmarks.get_random_bookmark()
    if bookmark is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail={"error": "not_found", "message": "No bookmarks yet"},
        )
    return bookmark


@router.get("/categories", response_model=list[CategoryCount])
async def get_categories(bookmarks: BookmarkService = Depends(get_bookmark_service)) -> list[CategoryCount]:
    return await bookmarks.get_categories()


@router.get("/stats", response_model=BookmarkStats)
async def get_stats(bookmarks: BookmarkService = Depends(get_bookmark_service)) -> BookmarkStats:
    return await bookmarks.get_stats()


@router.get("/{bookmark_id}", response_model=Bookmark)
async def get_bookmark(
    bookmark_id: str,
    bookmarks: BookmarkService = Depends(get_bookmark_service),
) -> Bookmark:
    try:
        return await bookmarks.get_bookmark(bookmark_id)
    except BookmarkNotFoundError as e:
        raise _not_found(e) from e


@router.delete("/{bookmark_id}")
async def delete_bookmark(
    bookmark_id: str,
    bookmarks: BookmarkService = Depends(get_bookmark_service),
) -> dict[str, bool]:
    try:
        await bookmarks.delete_bookmark(bookmark_id)
    except BookmarkNotFoundError as e:
        raise _not_found(e) from e
    return {"success": True}


@router.patch("/{bookmark_id}", response_model=Bookmark)
async def update_bookmark(
    bookmark_id: str,
    update: PinUpdateRequest,
    bookmarks: BookmarkService = Depends(get_bookmark_service),
) -> Bookmark:
    """Pin or unpin a bookmark."""
    try:
        return await bookmarks.set_pinned(bookmark_id, update.pinned)
    except BookmarkNotFoundError as e:
        raise _not_found(e) from e
    except PinLimitExceededError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "pin_limit_exceeded", "message": str(e)},
        ) from e
