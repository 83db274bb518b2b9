"""
shortfeed/services/feed_service.py

Builds the short-video feed with a fallback chain:

    local store  ->  Pexels  ->  Pixabay  ->  []

Each step runs only if the previous one produced nothing. Nothing in here
raises to the route handlers: store and provider failures are logged and
treated as "no videos from this source".

Paging:
  - Clients may send an explicit page token (?page=N) and get nextPage back.
  - Without a token, a process-wide PageCursor hands out pages 1, 2, 3...
    It is shared by every client, so its pages are not contiguous per client.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Optional

from shortfeed.core.config import settings
from shortfeed.core.exceptions import ProviderError, StoreUnavailable
from shortfeed.models.video import Video
from shortfeed.providers import PexelsProvider, PixabayProvider, VideoProvider
from shortfeed.schemas.video import AppVideo
from shortfeed.services.video_store import VideoStore

logger = logging.getLogger(__name__)


class PageCursor:
    """Thread-safe monotonically increasing page counter, starting at 1."""

    def __init__(self, start: int = 1):
        self._lock = threading.Lock()
        self._next = start

    def next(self) -> int:
        with self._lock:
            page = self._next
            self._next += 1
            return page

    def peek(self) -> int:
        with self._lock:
            return self._next


@dataclass
class FeedPage:
    videos: list[AppVideo] = field(default_factory=list)
    source: Optional[str] = None  # "store", provider name, or None
    page: Optional[int] = None
    next_page: Optional[int] = None


def video_to_app_video(row: Video) -> AppVideo:
    return AppVideo(
        id=str(row.id),
        video_url=row.video_url,
        description=row.description,
        username=row.username,
        likes_count=row.likes_count,
        shares_count=row.shares_count,
    )


class FeedService:
    def __init__(
        self,
        store: VideoStore,
        providers: list[VideoProvider],
        cursor: Optional[PageCursor] = None,
        page_size: Optional[int] = None,
    ):
        self.store = store
        self.providers = providers
        self.cursor = cursor or PageCursor()
        self.page_size = page_size or settings.PROVIDER_PAGE_SIZE

    # ------------------------------------------------------------------
    # PUBLIC
    # ------------------------------------------------------------------

    def fetch_global_videos(self, page: Optional[int] = None) -> FeedPage:
        """Store rows if there are any, otherwise one page from the providers."""
        try:
            rows = self.store.get_all_videos()
        except StoreUnavailable as e:
            # Same as an empty table: keep going to the providers
            logger.warning(f"⚠️ Store unavailable, falling back to providers: {e}")
            rows = []

        if rows:
            return FeedPage(videos=[video_to_app_video(r) for r in rows], source="store")

        return self._fetch_external(page)

    def fetch_more_external_videos(self, page: Optional[int] = None) -> FeedPage:
        """'Load more': always external, never reads the store."""
        return self._fetch_external(page)

    # ------------------------------------------------------------------
    # PRIVATE
    # ------------------------------------------------------------------

    def _fetch_external(self, page: Optional[int]) -> FeedPage:
        if page is None:
            page = self.cursor.next()

        for provider in self.providers:
            if not provider.enabled:
                logger.debug(f"{provider.name} disabled (no API key), skipping")
                continue

            try:
                videos = provider.fetch_page(page, self.page_size)
            except ProviderError as e:
                logger.warning(f"⚠️ {e}, trying next provider")
                continue
            except Exception as e:
                logger.exception(f"❌ {provider.name} fetch failed unexpectedly: {e}")
                continue

            if videos:
                return FeedPage(videos=videos, source=provider.name, page=page, next_page=page + 1)

            logger.info(f"{provider.name} returned no videos for page {page}")

        logger.warning(f"💀 No videos from any provider for page {page}")
        return FeedPage(videos=[], source=None, page=page, next_page=page + 1)


def build_feed_service() -> FeedService:
    """Production wiring: real DB session factory, Pexels first, then Pixabay."""
    return FeedService(
        store=VideoStore(),
        providers=[PexelsProvider(), PixabayProvider()],
    )
