import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shortfeed.core.database import Base
from shortfeed.core.exceptions import ProviderError, StoreUnavailable
from shortfeed.models.video import Video
from shortfeed.schemas.video import AppVideo


@pytest.fixture
def engine():
    eng = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=eng)
    yield eng
    eng.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


def seed_videos(session_factory, count):
    db = session_factory()
    try:
        for i in range(1, count + 1):
            db.add(Video(
                id=i,
                video_url=f"https://cdn.example.com/{i}.mp4",
                description=f"clip {i}",
                username=f"user{i}",
                likes_count=i * 10,
                shares_count=i,
            ))
        db.commit()
    finally:
        db.close()


def make_row(video_id):
    return Video(
        id=video_id,
        video_url=f"https://cdn.example.com/{video_id}.mp4",
        description=f"clip {video_id}",
        username=f"user{video_id}",
        likes_count=video_id * 10,
        shares_count=video_id,
    )


def make_app_video(video_id, provider="fake"):
    return AppVideo(
        id=f"{provider}-{video_id}",
        video_url=f"https://{provider}.example.com/{video_id}.mp4",
        description="Short video",
        username="creator",
        likes_count=100,
        shares_count=10,
    )


class FakeStore:
    def __init__(self, rows=None, error=False):
        self.rows = rows or []
        self.error = error
        self.calls = 0

    def get_all_videos(self):
        self.calls += 1
        if self.error:
            raise StoreUnavailable("connection refused")
        return list(self.rows)


class FakeProvider:
    def __init__(self, name, videos=None, enabled=True, error=None):
        self.name = name
        self.videos = videos or []
        self.enabled = enabled
        self.error = error
        self.pages = []

    @property
    def calls(self):
        return len(self.pages)

    def fetch_page(self, page, page_size=10):
        self.pages.append(page)
        if self.error == "status":
            raise ProviderError(self.name, 503)
        if self.error == "crash":
            raise RuntimeError("boom")
        return list(self.videos)


class FakeResponse:
    def __init__(self, status_code=200, payload=None):
        self.status_code = status_code
        self._payload = payload

    @property
    def ok(self):
        return 200 <= self.status_code < 400

    def json(self):
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


@pytest.fixture
def client():
    from shortfeed.main import app

    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
