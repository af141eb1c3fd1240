"""
FastAPI Router for link submission webhooks - Social Saver.

Endpoints:
    POST /whatsapp - Twilio WhatsApp webhook (form-encoded). Answers at once
                     with an empty TwiML response and processes the message
                     in a background task, replying over the Twilio REST API.
    POST /test     - JSON submission of a single URL, processed synchronously.
"""

import logging

from fastapi import APIRouter, BackgroundTasks, Depends, Form, HTTPException, Response, status

from app.config import Settings, get_settings
from app.core.container import (
    get_bookmark_pipeline,
    get_bookmark_service,
    get_optional_bookmark_service,
    get_whatsapp_service,
)
from app.models.bookmark import LinkSubmissionRequest, LinkSubmissionResponse
from app.services.bookmark_pipeline import (
    ERROR_REPLY_MESSAGE,
    GUIDANCE_MESSAGE,
    BookmarkPipeline,
    InvalidSubmissionError,
    build_reply_message,
    find_url,
    validate_submission_url,
)
from app.services.bookmark_service import BookmarkService
from app.services.whatsapp_service import WhatsAppService


logger = logging.getLogger(__name__)

router = APIRouter(tags=["webhook"])

EMPTY_TWIML_RESPONSE = "<Response></Response>"


# =============================================================================
# Background processing
# =============================================================================


async def process_whatsapp_message(
    message_text: str,
    sender: str,
    profile_name: str | None,
    pipeline: BookmarkPipeline,
    bookmarks: BookmarkService | None,
    whatsapp: WhatsAppService,
    frontend_url: str,
) -> None:
    """
    Handle one inbound WhatsApp message end to end.

    Nothing escapes this function: processing failures become the error
    reply, and a failed reply is only logged.
    """
    text = (message_text or "").strip()
    logger.info(f"WhatsApp message from {sender}: {text[:200]}")

    url = find_url(text)
    if url is not None:
        try:
            url = validate_submission_url(url)
        except InvalidSubmissionError as e:
            logger.info(f"Ignoring unusable link from {sender}: {e}")
            url = None

    if url is None:
        reply = GUIDANCE_MESSAGE
    else:
        try:
            if bookmarks is None:
                raise RuntimeError("Bookmark storage is not available")
            user = await bookmarks.get_or_create_user(sender, profile_name)
            draft = await pipeline.process_url(url)
            bookmark = await bookmarks.save_bookmark(draft, user.id)
            logger.info(f"Saved bookmark {bookmark.id} for {sender}")
            reply = build_reply_message(draft, frontend_url)
        except Exception:
            logger.exception(f"Error processing URL from {sender}: {url}")
            reply = ERROR_REPLY_MESSAGE

    try:
        await whatsapp.send_reply(sender, reply)
    except Exception:
        logger.exception(f"Failed to send WhatsApp reply to {sender}")


# =============================================================================
# Endpoints
# =============================================================================


@router.post("/whatsapp", response_class=Response)
async def whatsapp_webhook(
    background_tasks: BackgroundTasks,
    body: str = Form(default="", alias="Body"),
    sender: str = Form(default="", alias="From"),
    profile_name: str | None = Form(default=None, alias="ProfileName"),
    pipeline: BookmarkPipeline = Depends(get_bookmark_pipeline),
    bookmarks: BookmarkService | None = Depends(get_optional_bookmark_service),
    whatsapp: WhatsAppService = Depends(get_whatsapp_service),
    settings: Settings = Depends(get_settings),
) -> Response:
    """Acknowledge Twilio immediately so it does not retry, then process in the background."""
    background_tasks.add_task(
        process_whatsapp_message,
        message_text=body,
        sender=sender,
        profile_name=profile_name,
        pipeline=pipeline,
        bookmarks=bookmarks,
        whatsapp=whatsapp,
        frontend_url=settings.frontend_url,
    )
    return Response(content=EMPTY_TWIML_RESPONSE, media_type="application/xml")


@router.post("/test", response_model=LinkSubmissionResponse)
async def submit_test_link(
    request: LinkSubmissionRequest,
    pipeline: BookmarkPipeline = Depends(get_bookmark_pipeline),
    bookmarks: BookmarkService = Depends(get_bookmark_service),
) -> LinkSubmissionResponse:
    """
    Save a link without going through WhatsApp.

    Raises:
        HTTPException: 400 when the URL is missing or invalid, 500 on storage errors.
    """
    try:
        url = validate_submission_url(request.url)
    except InvalidSubmissionError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail={"error": "invalid_url", "message": str(e)},
        ) from e

    try:
        user = await bookmarks.get_or_create_user(request.phone, "Test User")
        draft = await pipeline.process_url(url)
        bookmark = await bookmarks.save_bookmark(draft, user.id)
    except Exception as e:
        logger.exception("Test submission failed")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "internal_error", "message": str(e)},
        ) from e

    return LinkSubmissionResponse(
        message=f'Saved to "{bookmark.category}" bucket!',
        bookmark=bookmark,
    )
