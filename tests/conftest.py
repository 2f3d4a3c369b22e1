"""Shared pytest fixtures for tweetsum tests."""

import sys
from pathlib import Path

import pytest

# Add the package to the path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from tweetsum.auth import CredentialState, JsonKeyStore  # noqa: E402

POST_URL = "https://x.com/SentientAGI/status/1956438251914637366"

POST_MARKDOWN = """Title: Sentient on X: "Introducing Dobby" / X

URL Source: https://x.com/SentientAGI/status/1956438251914637366

Markdown Content:
Post
----

Conversation
============

[![Image 1: Square profile picture](https://pbs.twimg.com/profile_images/1790/abc_normal.jpg)](https://x.com/SentientAGI)

[Sentient ![Image 2: 🤖](https://abs-0.twimg.com/emoji/v2/svg/1f916.svg)](https://x.com/SentientAGI)

[@SentientAGI](https://x.com/SentientAGI)

Introducing **Dobby**, our open model.
Read more at [sentient.xyz](https://t.co/abc123)

![Image 3](https://pbs.twimg.com/media/GyQ1abc.jpg)

![Image 4](https://unavatar.io/x/SentientAGI)

[4:12 PM · Aug 15, 2025](https://x.com/SentientAGI/status/1956438251914637366)

·

12.5K

Views

[](https://x.com/SentientAGI/status/1956438251914637366/analytics)
"""


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch, tmp_path):
    """Keep config, data and ~/.env lookups inside the test's tmp dir."""
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("TWEETSUM_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.delenv("FIREWORKS_API_KEY", raising=False)


@pytest.fixture
def post_markdown():
    return POST_MARKDOWN


@pytest.fixture
def post_url():
    return POST_URL


@pytest.fixture
def key_store(tmp_path):
    return JsonKeyStore(tmp_path / "keys" / "credentials.json")


@pytest.fixture
def make_credentials(key_store):
    """Build a CredentialState with an optional env key and persisted user key."""

    def _make(env_key: str = "", user_key: str | None = None) -> CredentialState:
        if user_key is not None:
            key_store.set("API_KEY", user_key)
        return CredentialState(key_store, env_key=env_key)

    return _make
