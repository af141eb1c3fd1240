"""
Process-wide service instances and FastAPI dependency functions.

The pipeline, WhatsApp transport and their lazily created clients are built
once per process on first use and shared by every request; tests replace
them through ``app.dependency_overrides``.
"""

from fastapi import HTTPException, status

from app.config import get_settings
from app.core.database import get_db_client
from app.services.bookmark_pipeline import BookmarkPipeline, create_bookmark_pipeline
from app.services.bookmark_service import BookmarkService
from app.services.whatsapp_service import WhatsAppService, create_whatsapp_service


class _ServiceContainer:
    """Holds the shared service singletons."""

    pipeline: BookmarkPipeline | None = None
    whatsapp: WhatsAppService | None = None


_container = _ServiceContainer()


def get_bookmark_pipeline() -> BookmarkPipeline:
    if _container.pipeline is None:
        _container.pipeline = create_bookmark_pipeline(get_settings())
    return _container.pipeline


def get_whatsapp_service() -> WhatsAppService:
    if _container.whatsapp is None:
        _container.whatsapp = create_whatsapp_service(get_settings())
    return _container.whatsapp


def get_optional_bookmark_service() -> BookmarkService | None:
    """Bookmark storage, or ``None`` while the database is unavailable."""
    try:
        db_client = get_db_client()
    except RuntimeError:
        return None
    return BookmarkService(db_client, max_pinned=get_settings().max_pinned_bookmarks)


def get_bookmark_service() -> BookmarkService:
    """
    Bookmark storage bound to the global database client.

    Raises:
        HTTPException: 503 while the database is unavailable.
    """
    service = get_optional_bookmark_service()
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={"error": "database_unavailable", "message": "Bookmark storage is not available"},
        )
    return service


def reset_services() -> None:
    """Drop the cached singletons (used on shutdown and in tests)."""
    _container.pipeline = None
    _container.whatsapp = None
