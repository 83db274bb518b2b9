from pydantic import BaseModel, Field
from typing import Optional, List

# --- FEED ITEM (store rows and provider items share this shape) ---
class AppVideo(BaseModel):
    id: str
    video_url: str = Field(alias="videoUrl")
    description: str
    username: str
    likes_count: int = Field(0, alias="likesCount")
    shares_count: int = Field(0, alias="sharesCount")

    class Config:
        populate_by_name = True

# --- LEGACY /api/videos ROW (integer id, read straight off the table) ---
class LegacyVideo(BaseModel):
    id: int
    video_url: str = Field(alias="videoUrl")
    description: str
    username: str
    likes_count: int = Field(0, alias="likesCount")
    shares_count: int = Field(0, alias="sharesCount")

    class Config:
        from_attributes = True
        populate_by_name = True

# --- FEED RESPONSE ---
class FeedResponse(BaseModel):
    videos: List[AppVideo]
    # Page token the client re-submits as ?page= to continue
    page: Optional[int] = None
    next_page: Optional[int] = Field(None, alias="nextPage")

    class Config:
        populate_by_name = True

class ErrorResponse(BaseModel):
    error: str

class HealthResponse(BaseModel):
    ok: bool
