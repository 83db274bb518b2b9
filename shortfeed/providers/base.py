"""
shortfeed/providers/base.py

Shared plumbing for the external short-video providers.

A provider fetches ONE page of search results for a random topic and maps
every usable item into an AppVideo. Subclasses only declare:
  - how the HTTP request looks (url, params, headers)
  - where the item list lives in the response
  - how one validated item becomes an AppVideo (or None to drop it)
"""

import logging
import random
import re
from typing import Any, Optional

import requests
from pydantic import BaseModel, ValidationError

from shortfeed.core.config import settings
from shortfeed.core.exceptions import ProviderError
from shortfeed.schemas.video import AppVideo

logger = logging.getLogger(__name__)


TOPIC_CATEGORIES = ["nature", "technology", "people", "street", "art"]

DEFAULT_DESCRIPTION = "Short video"
DEFAULT_USERNAME = "creator"

# Synthesized engagement ranges, inclusive
LIKES_RANGE = (100, 5099)
SHARES_RANGE = (10, 609)


def normalize_username(raw: Optional[str]) -> str:
    """Lower-cases and strips all whitespace. Empty -> 'creator'."""
    cleaned = re.sub(r"\s+", "", (raw or "")).lower()
    return cleaned or DEFAULT_USERNAME


def synthesize_counts(provider: str, item_id: Any) -> tuple[int, int]:
    """
    Fake (likes, shares) for providers that don't expose engagement.
    Seeded from the item id so the same item always gets the same numbers.
    """
    rng = random.Random(f"{provider}:{item_id}")
    likes = rng.randint(*LIKES_RANGE)
    shares = rng.randint(*SHARES_RANGE)
    return likes, shares


class VideoProvider:
    name = "provider"
    item_schema: type[BaseModel] = BaseModel

    def __init__(self, api_key: Optional[str], timeout: Optional[float] = None, rng: Optional[random.Random] = None):
        self.api_key = (api_key or "").strip()
        self.timeout = timeout if timeout is not None else settings.PROVIDER_TIMEOUT_SECONDS
        self.rng = rng or random.Random()

    # ------------------------------------------------------------------
    # TO OVERRIDE
    # ------------------------------------------------------------------

    def build_request(self, topic: str, page: int, page_size: int) -> tuple[str, dict, dict]:
        """Returns (url, params, headers)."""
        raise NotImplementedError

    def extract_items(self, data: dict) -> list:
        raise NotImplementedError

    def normalize(self, item: BaseModel) -> Optional[AppVideo]:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # PUBLIC
    # ------------------------------------------------------------------

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    def pick_topic(self) -> str:
        return self.rng.choice(TOPIC_CATEGORIES)

    def parse_item(self, raw: Any) -> Optional[BaseModel]:
        """Validates one raw item against the provider schema. None = malformed."""
        try:
            return self.item_schema.model_validate(raw)
        except ValidationError as e:
            logger.debug(f"{self.name}: dropping malformed item ({e.error_count()} errors)")
            return None

    def map_items(self, raw_items: list) -> list[AppVideo]:
        videos = []
        for raw in raw_items:
            item = self.parse_item(raw)
            if item is None:
                continue
            video = self.normalize(item)
            if video is None:
                logger.debug(f"{self.name}: dropping item {getattr(item, 'id', '?')} with no playable asset")
                continue
            videos.append(video)
        return videos

    def fetch_page(self, page: int, page_size: int = 10) -> list[AppVideo]:
        """
        Fetches one page for a random topic.
        Returns [] if the provider has no API key.
        Raises ProviderError on non-2xx, transport errors or invalid JSON.
        """
        if not self.enabled:
            return []

        topic = self.pick_topic()
        url, params, headers = self.build_request(topic, page, page_size)

        try:
            resp = requests.get(url, params=params, headers=headers, timeout=self.timeout)
        except requests.exceptions.Timeout as e:
            raise ProviderError(self.name, None, f"timeout after {self.timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise ProviderError(self.name, None, str(e)) from e

        if not resp.ok:
            raise ProviderError(self.name, resp.status_code)

        try:
            data = resp.json()
        except ValueError as e:
            raise ProviderError(self.name, resp.status_code, "invalid JSON body") from e

        if not isinstance(data, dict):
            raise ProviderError(self.name, resp.status_code, "unexpected response shape")

        try:
            raw_items = self.extract_items(data)
        except ValidationError as e:
            raise ProviderError(self.name, resp.status_code, "unexpected response shape") from e

        videos = self.map_items(raw_items)
        logger.info(f"{self.name}: page {page} '{topic}' -> {len(videos)} videos")
        return videos
