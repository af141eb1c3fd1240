"""
Pytest Configuration and Test Fixtures for the Social Saver Backend

Provides:
- Test settings with every external credential unset
- Mocked HTTP client, meta scraper and media resolver for extractor tests
- Mocked Motor collections for the bookmark service
- FastAPI TestClient with service dependencies overridden
- Sample bookmark documents

No fixture opens a network connection; the app's startup handler (which
connects to MongoDB) is not run because the TestClient is not entered as a
context manager.
"""

from collections.abc import Generator
from datetime import UTC, datetime
from typing import Any
from unittest.mock import AsyncMock, MagicMock

import pytest

from bson import ObjectId
from fastapi.testclient import TestClient

from app.config import Settings, get_settings
from app.core.container import (
    get_bookmark_pipeline,
    get_bookmark_service,
    get_optional_bookmark_service,
    get_whatsapp_service,
)
from app.core.database import DatabaseClient
from app.services.bookmark_pipeline import BookmarkPipeline
from app.services.bookmark_service import BookmarkService
from app.services.media_resolver import MediaResolver
from app.services.meta_scraper import MetaTagScraper
from app.services.whatsapp_service import WhatsAppService
from app.utils.http import HttpClient


# ==============================================================================
# Settings Fixtures
# ==============================================================================


@pytest.fixture
def test_settings() -> Settings:
    """Settings for an offline test run: no AI keys, no Twilio, no media resolver."""
    return Settings(
        app_env="testing",
        app_name="Social-Saver-Test",
        debug=True,
        mongodb_uri="mongodb://localhost:27017/test_social_saver",
        mongodb_db_name="test_social_saver",
        gemini_api_key=None,
        cohere_api_key=None,
        twilio_account_sid=None,
        twilio_auth_token=None,
        enable_media_resolver=False,
        frontend_url="http://localhost:3000",
        max_pinned_bookmarks=3,
        default_page_size=9,
        max_page_size=50,
    )


# ==============================================================================
# Extraction Fixtures
# ==============================================================================


@pytest.fixture
def mock_http() -> MagicMock:
    http = MagicMock(spec=HttpClient)
    http.get_text = AsyncMock(return_value="")
    http.get_json = AsyncMock(return_value={})
    return http


@pytest.fixture
def mock_scraper() -> MagicMock:
    """Meta scraper whose secondary lookups find nothing unless a test says otherwise."""
    scraper = MagicMock(spec=MetaTagScraper)
    scraper.scrape = AsyncMock()
    scraper.try_scrape = AsyncMock()
    scraper.scrape_image = AsyncMock(return_value="")
    scraper.scrape_video_url = AsyncMock(return_value="")
    return scraper


@pytest.fixture
def mock_media_resolver() -> MagicMock:
    resolver = MagicMock(spec=MediaResolver)
    resolver.resolve = AsyncMock(return_value=None)
    return resolver


# ==============================================================================
# MongoDB Fixtures
# ==============================================================================


def make_cursor(documents: list[dict[str, Any]] | None = None) -> MagicMock:
    """Motor-style cursor: chainable sort/skip/limit and an async ``to_list``."""
    cursor = MagicMock()
    cursor.sort.return_value = cursor
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    cursor.to_list = AsyncMock(return_value=documents or [])
    return cursor


def make_collection() -> MagicMock:
    collection = MagicMock()
    collection.find.return_value = make_cursor()
    collection.find_one = AsyncMock(return_value=None)
    collection.insert_one = AsyncMock(return_value=MagicMock(inserted_id=ObjectId()))
    collection.delete_one = AsyncMock(return_value=MagicMock(deleted_count=1))
    collection.count_documents = AsyncMock(return_value=0)
    collection.find_one_and_update = AsyncMock(return_value=None)
    collection.aggregate.return_value = make_cursor()
    return collection


@pytest.fixture
def cursor_factory():
    """Builds Motor-style cursors over a list of documents."""
    return make_cursor


@pytest.fixture
def bookmarks_collection() -> MagicMock:
    return make_collection()


@pytest.fixture
def users_collection() -> MagicMock:
    return make_collection()


@pytest.fixture
def mock_db_client(bookmarks_collection: MagicMock, users_collection: MagicMock) -> MagicMock:
    db_client = MagicMock(spec=DatabaseClient)
    db_client.get_bookmarks_collection.return_value = bookmarks_collection
    db_client.get_users_collection.return_value = users_collection
    return db_client


@pytest.fixture
def bookmark_document() -> dict[str, Any]:
    """A stored bookmark as Motor returns it."""
    now = datetime.now(UTC)
    return {
        "_id": ObjectId(),
        "url": "https://blog.example.com/how-to-bake-bread",
        "platform": "article",
        "title": "How To Bake Bread",
        "caption": "Saved from the web",
        "summary": "A cooking post saved from the web.",
        "category": "Cooking",
        "tags": ["bake", "bread"],
        "thumbnail": "",
        "video_url": "",
        "embed_url": "https://blog.example.com/how-to-bake-bread",
        "author": "",
        "raw_data": {},
        "user": ObjectId(),
        "pinned": False,
        "created_at": now,
        "updated_at": now,
    }


# ==============================================================================
# API Fixtures
# ==============================================================================


@pytest.fixture
def mock_pipeline() -> MagicMock:
    pipeline = MagicMock(spec=BookmarkPipeline)
    pipeline.process_url = AsyncMock()
    return pipeline


@pytest.fixture
def mock_bookmark_service() -> MagicMock:
    return MagicMock(spec=BookmarkService)


@pytest.fixture
def mock_whatsapp() -> MagicMock:
    whatsapp = MagicMock(spec=WhatsAppService)
    whatsapp.send_reply = AsyncMock(return_value=None)
    return whatsapp


@pytest.fixture
def client(
    test_settings: Settings,
    mock_pipeline: MagicMock,
    mock_bookmark_service: MagicMock,
    mock_whatsapp: MagicMock,
) -> Generator[TestClient, None, None]:
    """TestClient with every service dependency replaced by a mock."""
    from app.main import app

    app.dependency_overrides[get_settings] = lambda: test_settings
    app.dependency_overrides[get_bookmark_pipeline] = lambda: mock_pipeline
    app.dependency_overrides[get_bookmark_service] = lambda: mock_bookmark_service
    app.dependency_overrides[get_optional_bookmark_service] = lambda: mock_bookmark_service
    app.dependency_overrides[get_whatsapp_service] = lambda: mock_whatsapp

    yield TestClient(app)

    app.dependency_overrides.clear()

