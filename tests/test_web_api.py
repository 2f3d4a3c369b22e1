"""Tests for the post, summary and key API routes."""

import httpx
import pytest
from fastapi.testclient import TestClient

from tweetsum.models import ErrorKind, Post, RevealConfig, TweetsumConfig
from tweetsum.web.app import create_app
from tweetsum.web.routes._errors import error_status

POST_URL = "https://x.com/SentientAGI/status/1956438251914637366"
SUMMARY = "**Dobby** launch\n\n- open model"


class FakeUpstream:
    def __init__(self, markdown: str):
        self.markdown = markdown
        self.proxy_status = 200
        self.api_status = 200
        self.api_requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        if request.method == "GET":
            return httpx.Response(self.proxy_status, text=self.markdown)
        self.api_requests.append(request)
        if self.api_status != 200:
            return httpx.Response(self.api_status, json={"error": "nope"})
        return httpx.Response(200, json={"choices": [{"message": {"content": SUMMARY}}]})


@pytest.fixture
def upstream(post_markdown):
    return FakeUpstream(post_markdown)


@pytest.fixture
def make_client(upstream, make_credentials):
    def _make(env_key: str = "", user_key: str | None = None):
        credentials = make_credentials(env_key=env_key, user_key=user_key)
        settings = TweetsumConfig(reveal=RevealConfig(interval_seconds=0.0, step=4))
        app = create_app(settings=settings, credentials=credentials, transport=httpx.MockTransport(upstream))
        return TestClient(app), credentials

    return _make


def _post_body() -> dict:
    return Post(
        author_name="Sentient",
        handle="@SentientAGI",
        content="Introducing <b>Dobby</b>",
        media=["https://pbs.twimg.com/media/a.jpg"],
        timestamp="4:12 PM · Aug 15, 2025",
    ).model_dump()


# ============================================================================
# /api/post
# ============================================================================


def test_load_post(make_client):
    client, _ = make_client()

    response = client.post("/api/post", json={"url": POST_URL})

    assert response.status_code == 200
    data = response.json()
    assert data["author_name"] == "Sentient"
    assert data["handle"] == "@SentientAGI"
    assert data["url"] == POST_URL
    assert data["media"] == ["https://pbs.twimg.com/media/GyQ1abc.jpg"]


def test_load_post_invalid_url(make_client):
    client, _ = make_client()

    response = client.post("/api/post", json={"url": "https://example.com/x/status/1"})

    assert response.status_code == 422
    assert response.json()["detail"] == "Please enter a valid X/Tweet URL."


def test_load_post_proxy_failure(make_client, upstream):
    client, _ = make_client()
    upstream.proxy_status = 503

    response = client.post("/api/post", json={"url": POST_URL})

    assert response.status_code == 502


# ============================================================================
# /api/summary
# ============================================================================


def test_summary_missing_key(make_client, upstream):
    client, _ = make_client()

    response = client.post("/api/summary", json={"post": _post_body()})

    assert response.status_code == 401
    assert response.json()["error"] == "missing_credential"
    assert upstream.api_requests == []


def test_summary_success(make_client):
    client, _ = make_client(env_key="E")

    response = client.post("/api/summary", json={"post": _post_body()})

    assert response.status_code == 200
    data = response.json()
    assert data["text"] == SUMMARY
    assert data["error"] is None


def test_summary_stream_concatenates_to_full_text(make_client):
    client, _ = make_client(env_key="E")

    response = client.post("/api/summary", json={"post": _post_body(), "stream": True})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert response.text == SUMMARY


def test_summary_rejected_user_key_is_cleared(make_client, upstream, key_store):
    client, credentials = make_client(user_key="U")
    upstream.api_status = 401

    response = client.post("/api/summary", json={"post": _post_body()})

    assert response.status_code == 403
    assert response.json()["message"] == "Error: API key invalid or expired"
    assert key_store.get("API_KEY") is None
    assert client.get("/api/key").json() == {"configured": False, "source": None}


def test_summary_upstream_error(make_client, upstream):
    client, credentials = make_client(env_key="E")
    upstream.api_status = 500

    response = client.post("/api/summary", json={"post": _post_body()})

    assert response.status_code == 502
    assert response.json()["status_code"] == 500
    assert credentials.active_key == "E"


# ============================================================================
# /api/key
# ============================================================================


def test_key_lifecycle(make_client, key_store):
    client, _ = make_client()

    assert client.get("/api/key").json() == {"configured": False, "source": None}

    response = client.put("/api/key", json={"key": " fw_user "})
    assert response.status_code == 200
    assert response.json() == {"configured": True, "source": "user"}
    assert key_store.get("API_KEY") == "fw_user"

    response = client.delete("/api/key")
    assert response.json() == {"configured": False, "source": None}
    assert key_store.get("API_KEY") is None


def test_put_blank_key_is_rejected(make_client):
    client, _ = make_client()

    response = client.put("/api/key", json={"key": "   "})

    assert response.status_code == 400


def test_env_key_reported_without_value(make_client):
    client, _ = make_client(env_key="secret-env")

    data = client.get("/api/key").json()

    assert data == {"configured": True, "source": "env"}
    assert "secret-env" not in str(data)


def test_every_error_kind_has_a_status():
    assert {kind: error_status(kind) for kind in ErrorKind} == {
        ErrorKind.INVALID_URL: 422,
        ErrorKind.FETCH_FAILURE: 502,
        ErrorKind.MISSING_CREDENTIAL: 401,
        ErrorKind.AUTH_REJECTED: 403,
        ErrorKind.UPSTREAM_ERROR: 502,
        ErrorKind.EMPTY_RESPONSE: 502,
    }
    assert error_status(None) == 500
