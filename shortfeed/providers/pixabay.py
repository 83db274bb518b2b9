from typing import Optional

from shortfeed.core.config import settings
from shortfeed.providers.base import (
    DEFAULT_DESCRIPTION,
    VideoProvider,
    normalize_username,
    synthesize_counts,
)
from shortfeed.schemas.provider import PixabayHit, PixabayRendition, PixabayRenditions, PixabaySearchResponse
from shortfeed.schemas.video import AppVideo


def pick_rendition(videos: PixabayRenditions) -> Optional[PixabayRendition]:
    """Largest available rendition first: large, medium, small."""
    for size in ["large", "medium", "small"]:
        rendition = getattr(videos, size)
        if rendition is not None:
            return rendition
    return None


class PixabayProvider(VideoProvider):
    name = "pixabay"
    item_schema = PixabayHit

    def __init__(self, api_key: Optional[str] = None, timeout=None, rng=None, base_url: Optional[str] = None):
        super().__init__(settings.PIXABAY_API_KEY if api_key is None else api_key, timeout=timeout, rng=rng)
        self.base_url = base_url or settings.PIXABAY_API_URL

    def build_request(self, topic: str, page: int, page_size: int):
        params = {
            "key": self.api_key,
            "q": topic,
            "orientation": "vertical",
            "page": page,
            "per_page": page_size,
        }
        return self.base_url, params, {}

    def extract_items(self, data: dict) -> list:
        return PixabaySearchResponse.model_validate(data).hits or []

    def normalize(self, item: PixabayHit) -> Optional[AppVideo]:
        rendition = pick_rendition(item.videos)
        if rendition is None or not rendition.url:
            return None

        likes, shares = item.likes, item.downloads
        if likes is None or shares is None:
            fake_likes, fake_shares = synthesize_counts(self.name, item.id)
            likes = fake_likes if likes is None else likes
            shares = fake_shares if shares is None else shares

        return AppVideo(
            id=str(item.id),
            video_url=rendition.url,
            description=item.tags or DEFAULT_DESCRIPTION,
            username=normalize_username(item.user),
            likes_count=likes,
            shares_count=shares,
        )
