import os
from urllib.parse import quote_plus
from dotenv import load_dotenv

load_dotenv()


def _database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url

    # Split DB_* vars, same as the migration env
    host = os.getenv("DB_HOST")
    if host:
        user = os.getenv("DB_USER", "postgres")
        password = quote_plus(os.getenv("DB_PASSWORD", ""))
        port = os.getenv("DB_PORT", "5432")
        name = os.getenv("DB_NAME", "shortfeed")
        return f"postgresql://{user}:{password}@{host}:{port}/{name}"

    return "sqlite:///./shortfeed.db"


class Settings:
    # DATABASE
    DATABASE_URL = _database_url()

    # VIDEO PROVIDERS (a missing key disables that provider)
    PEXELS_API_KEY = os.getenv("PEXELS_API_KEY", "").strip()
    PIXABAY_API_KEY = os.getenv("PIXABAY_API_KEY", "").strip()
    PEXELS_API_URL = os.getenv("PEXELS_API_URL", "https://api.pexels.com/videos/search")
    PIXABAY_API_URL = os.getenv("PIXABAY_API_URL", "https://pixabay.com/api/videos/")

    PROVIDER_PAGE_SIZE = int(os.getenv("PROVIDER_PAGE_SIZE", "10"))
    PROVIDER_TIMEOUT_SECONDS = float(os.getenv("PROVIDER_TIMEOUT_SECONDS", "15"))

    # SERVER
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
    CORS_ORIGINS = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:3000,http://127.0.0.1:3000").split(",")
        if origin.strip()
    ]
    HOST = os.getenv("HOST", "0.0.0.0")
    PORT = int(os.getenv("PORT", "8000"))

settings = Settings()
