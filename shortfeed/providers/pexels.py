from typing import Optional
from urllib.parse import urlparse

from shortfeed.core.config import settings
from shortfeed.providers.base import (
    DEFAULT_DESCRIPTION,
    VideoProvider,
    normalize_username,
    synthesize_counts,
)
from shortfeed.schemas.provider import PexelsSearchResponse, PexelsVideo, PexelsVideoFile
from shortfeed.schemas.video import AppVideo


def pick_video_file(files: list[PexelsVideoFile]) -> Optional[PexelsVideoFile]:
    """Smallest vertical mp4 by height, else the first listed file."""
    vertical = sorted((f for f in files if f.is_vertical_mp4), key=lambda f: f.height)
    if vertical:
        return vertical[0]
    return files[0] if files else None


def description_from_url(url: Optional[str]) -> str:
    """
    Pexels page urls end with a readable slug, e.g.
    https://www.pexels.com/video/waves-on-the-shore-1851190/
    """
    if not url:
        return DEFAULT_DESCRIPTION
    segments = [s for s in urlparse(url).path.split("/") if s]
    return segments[-1] if segments else DEFAULT_DESCRIPTION


class PexelsProvider(VideoProvider):
    name = "pexels"
    item_schema = PexelsVideo

    def __init__(self, api_key: Optional[str] = None, timeout=None, rng=None, base_url: Optional[str] = None):
        super().__init__(settings.PEXELS_API_KEY if api_key is None else api_key, timeout=timeout, rng=rng)
        self.base_url = base_url or settings.PEXELS_API_URL

    def build_request(self, topic: str, page: int, page_size: int):
        params = {
            "query": topic,
            "orientation": "portrait",
            "size": "small",
            "page": page,
            "per_page": page_size,
        }
        headers = {"Authorization": self.api_key}
        return self.base_url, params, headers

    def extract_items(self, data: dict) -> list:
        return PexelsSearchResponse.model_validate(data).videos or []

    def normalize(self, item: PexelsVideo) -> Optional[AppVideo]:
        chosen = pick_video_file(item.video_files)
        if chosen is None:
            return None

        video_url = chosen.link or chosen.file
        if not video_url:
            return None

        author = None
        if item.user:
            author = item.user.name or item.user.username

        likes, shares = synthesize_counts(self.name, item.id)

        return AppVideo(
            id=str(item.id),
            video_url=video_url,
            description=description_from_url(item.url),
            username=normalize_username(author),
            likes_count=likes,
            shares_count=shares,
        )
