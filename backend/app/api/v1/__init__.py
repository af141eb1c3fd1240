"""
Social Saver API v1 Router Aggregator.

Combines the v1 endpoint routers for registration under ``/api/v1``:
    - /webhook:   WhatsApp webhook and direct test submissions
    - /bookmarks: Dashboard listing, stats, pinning and deletion
"""

import logging

from fastapi import APIRouter

from app.api.v1.bookmarks import router as bookmarks_router
from app.api.v1.webhook import router as webhook_router


logger = logging.getLogger(__name__)

api_router = APIRouter()

api_router.include_router(webhook_router, prefix="/webhook", tags=["webhook"])
api_router.include_router(bookmarks_router, prefix="/bookmarks", tags=["bookmarks"])

loaded_routers: list[str] = ["webhook", "bookmarks"]

__all__ = ["api_router", "loaded_routers"]
