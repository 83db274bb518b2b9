import threading
import time

import shortfeed.api.feed as feed_module
from shortfeed.api.feed import get_feed_service
from shortfeed.api.videos import get_video_store
from shortfeed.main import app
from shortfeed.models.video import Video
from shortfeed.services.feed_service import FeedService, PageCursor
from tests.conftest import FakeProvider, FakeStore, make_app_video, make_row


def use_feed_service(store, pexels=None, pixabay=None):
    service = FeedService(
        store=store,
        providers=[pexels or FakeProvider("pexels"), pixabay or FakeProvider("pixabay")],
        cursor=PageCursor(),
        page_size=10,
    )
    app.dependency_overrides[get_feed_service] = lambda: service
    return service


class ExplodingFeedService:
    def fetch_global_videos(self, page=None):
        raise RuntimeError("boom")

    def fetch_more_external_videos(self, page=None):
        raise RuntimeError("boom")


def test_health_always_ok(client):
    app.dependency_overrides[get_video_store] = lambda: FakeStore(error=True)
    use_feed_service(FakeStore(error=True), FakeProvider("pexels", error="crash"))

    resp = client.get("/api/health")

    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


def test_legacy_videos_endpoint(client):
    app.dependency_overrides[get_video_store] = lambda: FakeStore(rows=[make_row(2), make_row(1)])

    resp = client.get("/api/videos")

    assert resp.status_code == 200
    body = resp.json()
    assert [v["id"] for v in body] == [2, 1]
    assert body[0] == {
        "id": 2,
        "videoUrl": "https://cdn.example.com/2.mp4",
        "description": "clip 2",
        "username": "user2",
        "likesCount": 20,
        "sharesCount": 2,
    }


def test_legacy_videos_store_failure(client):
    app.dependency_overrides[get_video_store] = lambda: FakeStore(error=True)

    resp = client.get("/api/videos")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to fetch videos"}


def test_feed_from_store(client):
    use_feed_service(FakeStore(rows=[make_row(5)]))

    resp = client.get("/api/feed")

    assert resp.status_code == 200
    body = resp.json()
    assert body["videos"][0]["id"] == "5"
    assert body["videos"][0]["videoUrl"] == "https://cdn.example.com/5.mp4"
    assert body["page"] is None
    assert body["nextPage"] is None


def test_feed_from_provider_with_page_token(client):
    use_feed_service(FakeStore(), FakeProvider("pexels", [make_app_video(1, "pexels")]))

    resp = client.get("/api/feed")

    body = resp.json()
    assert resp.status_code == 200
    assert body["videos"][0]["id"] == "pexels-1"
    assert body["videos"][0]["likesCount"] == 100
    assert body["page"] == 1
    assert body["nextPage"] == 2


def test_feed_total_failure_is_empty_200(client):
    use_feed_service(FakeStore(error=True), FakeProvider("pexels", error="status"), FakeProvider("pixabay", error="status"))

    resp = client.get("/api/feed")

    assert resp.status_code == 200
    assert resp.json()["videos"] == []


def test_feed_next_uses_client_page(client):
    service = use_feed_service(FakeStore(rows=[make_row(1)]), FakeProvider("pexels", [make_app_video(1)]))

    resp = client.get("/api/feed/next", params={"page": 4})

    assert resp.status_code == 200
    assert resp.json()["page"] == 4
    assert resp.json()["nextPage"] == 5
    assert service.store.calls == 0


def test_feed_next_rejects_invalid_page(client):
    use_feed_service(FakeStore())

    assert client.get("/api/feed/next", params={"page": 0}).status_code == 422


def test_feed_errors_return_500(client):
    app.dependency_overrides[get_feed_service] = lambda: ExplodingFeedService()

    feed = client.get("/api/feed")
    more = client.get("/api/feed/next")

    assert feed.status_code == 500
    assert feed.json() == {"error": "Failed to load global feed"}
    assert more.status_code == 500
    assert more.json() == {"error": "Failed to load next page"}


def test_legacy_videos_bad_row_returns_json_error(client):
    broken = Video(id=1, video_url=None, description="clip", username="user1", likes_count=0, shares_count=0)
    app.dependency_overrides[get_video_store] = lambda: FakeStore(rows=[broken])

    resp = client.get("/api/videos")

    assert resp.status_code == 500
    assert resp.json() == {"error": "Failed to fetch videos"}


def test_error_schema_documented_for_500s(client):
    paths = client.get("/openapi.json").json()["paths"]

    for path in ["/api/videos", "/api/feed", "/api/feed/next"]:
        schema = paths[path]["get"]["responses"]["500"]["content"]["application/json"]["schema"]
        assert schema["$ref"].endswith("/ErrorResponse")


def test_feed_service_built_once_under_concurrent_first_requests(monkeypatch):
    built = []

    def slow_build():
        time.sleep(0.05)
        service = FeedService(
            store=FakeStore(),
            providers=[FakeProvider("pexels", [make_app_video(1)])],
            cursor=PageCursor(),
            page_size=10,
        )
        built.append(service)
        return service

    monkeypatch.setattr(feed_module, "build_feed_service", slow_build)
    monkeypatch.setattr(feed_module, "_feed_service", None)

    services = []
    threads = [threading.Thread(target=lambda: services.append(feed_module.get_feed_service())) for _ in range(2)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(built) == 1
    assert services[0] is services[1]
    pages = sorted(s.fetch_more_external_videos().page for s in services)
    assert pages == [1, 2]
