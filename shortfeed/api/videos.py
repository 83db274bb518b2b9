import logging
from typing import List
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from shortfeed.core.exceptions import StoreUnavailable
from shortfeed.schemas.video import ErrorResponse, LegacyVideo
from shortfeed.services.video_store import VideoStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/videos", tags=["Videos (legacy)"])


def get_video_store():
    return VideoStore()

# ---------------------------------------------------------
# LEGACY: rows straight from the local table, no providers
# ---------------------------------------------------------
@router.get("", response_model=List[LegacyVideo], responses={500: {"model": ErrorResponse}})
def list_videos(store: VideoStore = Depends(get_video_store)):
    try:
        rows = store.get_all_videos()
        return [LegacyVideo.model_validate(row) for row in rows]
    except StoreUnavailable as e:
        logger.error(f"❌ Error fetching videos: {e}")
    except Exception as e:
        logger.exception(f"❌ Unexpected error fetching videos: {e}")

    return JSONResponse(status_code=500, content={"error": "Failed to fetch videos"})
