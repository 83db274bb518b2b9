import logging
import threading
from typing import Optional
from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from shortfeed.schemas.video import ErrorResponse, FeedResponse
from shortfeed.services.feed_service import FeedPage, FeedService, build_feed_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/feed", tags=["Feed"])

# One instance per process: it owns the shared page cursor
_feed_service: Optional[FeedService] = None
_feed_service_lock = threading.Lock()


def get_feed_service() -> FeedService:
    global _feed_service
    if _feed_service is None:
        with _feed_service_lock:
            if _feed_service is None:
                _feed_service = build_feed_service()
    return _feed_service


def to_response(result: FeedPage) -> FeedResponse:
    return FeedResponse(videos=result.videos, page=result.page, next_page=result.next_page)

# ---------------------------------------------------------
# 1. MAIN FEED (store first, then Pexels / Pixabay)
# ---------------------------------------------------------
@router.get("", response_model=FeedResponse, responses={500: {"model": ErrorResponse}})
def global_feed(
    page: Optional[int] = Query(None, ge=1),
    service: FeedService = Depends(get_feed_service),
):
    try:
        result = service.fetch_global_videos(page=page)
    except Exception as e:
        logger.exception(f"❌ Error in /api/feed: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to load global feed"})

    return to_response(result)

# ---------------------------------------------------------
# 2. LOAD MORE (always external)
# ---------------------------------------------------------
@router.get("/next", response_model=FeedResponse, responses={500: {"model": ErrorResponse}})
def next_feed_page(
    page: Optional[int] = Query(None, ge=1),
    service: FeedService = Depends(get_feed_service),
):
    try:
        result = service.fetch_more_external_videos(page=page)
    except Exception as e:
        logger.exception(f"❌ Error in /api/feed/next: {e}")
        return JSONResponse(status_code=500, content={"error": "Failed to load next page"})

    return to_response(result)
