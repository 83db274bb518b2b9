from .base import VideoProvider, TOPIC_CATEGORIES
from .pexels import PexelsProvider
from .pixabay import PixabayProvider

__all__ = [
    "VideoProvider",
    "TOPIC_CATEGORIES",
    "PexelsProvider",
    "PixabayProvider",
]
