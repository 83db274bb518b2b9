"""
Raw payload schemas for the external video providers.

Only the fields the feed reads are declared; everything else in the provider
JSON is ignored. A raw item that does not validate against its schema is
treated as malformed and dropped by the provider.
"""

from pydantic import BaseModel
from typing import Any, Optional, List, Union

# ---------------------------------------------------------
# PEXELS  (GET /videos/search)
# ---------------------------------------------------------
class PexelsVideoFile(BaseModel):
    id: Optional[int] = None
    quality: Optional[str] = None
    file_type: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    link: Optional[str] = None
    # Older payloads used "file" instead of "link"
    file: Optional[str] = None

    @property
    def is_vertical_mp4(self) -> bool:
        if not self.width or not self.height:
            return False
        return self.height > self.width and "mp4" in (self.file_type or "").lower()

class PexelsUser(BaseModel):
    id: Optional[int] = None
    name: Optional[str] = None
    username: Optional[str] = None
    url: Optional[str] = None

class PexelsVideo(BaseModel):
    id: Union[int, str]
    url: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[int] = None
    user: Optional[PexelsUser] = None
    video_files: List[PexelsVideoFile]

class PexelsSearchResponse(BaseModel):
    page: Optional[int] = None
    per_page: Optional[int] = None
    total_results: Optional[int] = None
    videos: Optional[List[Any]] = None

# ---------------------------------------------------------
# PIXABAY  (GET /api/videos/)
# ---------------------------------------------------------
class PixabayRendition(BaseModel):
    url: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    size: Optional[int] = None

class PixabayRenditions(BaseModel):
    large: Optional[PixabayRendition] = None
    medium: Optional[PixabayRendition] = None
    small: Optional[PixabayRendition] = None
    tiny: Optional[PixabayRendition] = None

class PixabayHit(BaseModel):
    id: Union[int, str]
    tags: Optional[str] = None
    user: Optional[str] = None
    likes: Optional[int] = None
    downloads: Optional[int] = None
    views: Optional[int] = None
    videos: PixabayRenditions

class PixabaySearchResponse(BaseModel):
    total: Optional[int] = None
    totalHits: Optional[int] = None
    hits: Optional[List[Any]] = None
