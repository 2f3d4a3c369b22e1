"""Tests for credential resolution, eviction and the key store."""

import json
import stat

from tweetsum.auth import (
    API_KEY_ENTRY,
    SOURCE_ENV,
    SOURCE_USER,
    AuthFailureDecision,
    CredentialState,
    JsonKeyStore,
    get_env_key,
    load_env_file,
    on_auth_failure,
    resolve_initial_key,
    save_user_key,
)

# ============================================================================
# Pure policy
# ============================================================================


def test_resolve_initial_key_precedence():
    assert resolve_initial_key("E", "U") == "E"
    assert resolve_initial_key("", "U") == "U"
    assert resolve_initial_key(None, None) == ""


def test_on_auth_failure_env_key_keeps_store():
    assert on_auth_failure("E", "E") == AuthFailureDecision(next_key="", evict_persisted=False)


def test_on_auth_failure_user_key_evicts_store():
    assert on_auth_failure("U", "") == AuthFailureDecision(next_key="", evict_persisted=True)
    assert on_auth_failure("U", "E") == AuthFailureDecision(next_key="", evict_persisted=True)


# ============================================================================
# CredentialState
# ============================================================================


def test_env_key_wins_and_rejection_leaves_store_untouched(make_credentials, key_store):
    credentials = make_credentials(env_key="E", user_key="U")
    assert credentials.active_key == "E"
    assert credentials.source == SOURCE_ENV

    decision = credentials.handle_auth_failure("E")

    assert decision == AuthFailureDecision(next_key="", evict_persisted=False)
    assert credentials.active_key == ""
    assert key_store.get(API_KEY_ENTRY) == "U"


def test_user_key_rejection_evicts_store(make_credentials, key_store):
    credentials = make_credentials(user_key="U")
    assert credentials.active_key == "U"
    assert credentials.source == SOURCE_USER

    credentials.handle_auth_failure("U")

    assert credentials.active_key == ""
    assert key_store.get(API_KEY_ENTRY) is None
    # A fresh session no longer sees the evicted key
    assert CredentialState(key_store).active_key == ""


def test_stale_rejection_is_ignored(make_credentials, key_store):
    credentials = make_credentials(user_key="NEW")

    assert credentials.handle_auth_failure("OLD") is None
    assert credentials.active_key == "NEW"
    assert key_store.get(API_KEY_ENTRY) == "NEW"


def test_save_user_key_persists_and_activates(make_credentials, key_store):
    credentials = make_credentials()
    assert credentials.active_key == ""

    assert save_user_key(credentials, "  K1  ") is True

    assert credentials.active_key == "K1"
    assert credentials.source == SOURCE_USER
    assert key_store.get(API_KEY_ENTRY) == "K1"


def test_save_user_key_rejects_empty(make_credentials, key_store):
    credentials = make_credentials(env_key="E")

    assert credentials.save_user_key("") is False
    assert credentials.save_user_key(None) is False
    assert credentials.active_key == "E"
    assert key_store.get(API_KEY_ENTRY) is None


def test_clear_user_key_deactivates_only_user_keys(make_credentials, key_store):
    credentials = make_credentials(env_key="E", user_key="U")
    credentials.clear_user_key()
    assert credentials.active_key == "E"
    assert key_store.get(API_KEY_ENTRY) is None

    credentials.save_user_key("U2")
    credentials.clear_user_key()
    assert credentials.active_key == ""


def test_from_environment_reads_env_var(monkeypatch, key_store):
    monkeypatch.setenv("FIREWORKS_API_KEY", "from-env")

    credentials = CredentialState.from_environment(key_store)

    assert credentials.env_key == "from-env"
    assert credentials.active_key == "from-env"


def test_from_environment_uses_default_store(tmp_path):
    credentials = CredentialState.from_environment()
    credentials.save_user_key("stored")

    stored = json.loads((tmp_path / "data" / "credentials.json").read_text())
    assert stored == {"API_KEY": "stored"}


# ============================================================================
# Env file and key store
# ============================================================================


def test_get_env_key_falls_back_to_dotenv(tmp_path):
    home = tmp_path / "home"
    home.mkdir()
    (home / ".env").write_text("# comment\nexport FIREWORKS_API_KEY='dotenv-key'\nOTHER=1\n")

    assert load_env_file()["OTHER"] == "1"
    assert get_env_key() == "dotenv-key"


def test_get_env_key_missing_is_empty():
    assert get_env_key() == ""


def test_json_key_store_roundtrip_and_permissions(tmp_path):
    store = JsonKeyStore(tmp_path / "nested" / "keys.json")
    assert store.get("API_KEY") is None

    store.set("API_KEY", "secret")
    assert store.get("API_KEY") == "secret"
    assert stat.S_IMODE(store.path.stat().st_mode) == 0o600

    store.remove("API_KEY")
    assert store.get("API_KEY") is None
    store.remove("API_KEY")


def test_json_key_store_ignores_corrupt_file(tmp_path):
    path = tmp_path / "keys.json"
    path.write_text("{not json")

    assert JsonKeyStore(path).get("API_KEY") is None

    path.write_bytes(b"\xff\xfe{}")
    assert JsonKeyStore(path).get("API_KEY") is None


def test_json_key_store_skips_non_string_entries(tmp_path):
    path = tmp_path / "keys.json"
    path.write_text('{"API_KEY": null, "OTHER": 5}')

    credentials = CredentialState(JsonKeyStore(path))

    assert credentials.active_key == ""
    assert credentials.source is None


def test_credentials_survive_undecodable_store(tmp_path):
    path = tmp_path / "keys.json"
    path.write_bytes(b"\xff")

    credentials = CredentialState(JsonKeyStore(path), env_key="E")

    assert credentials.active_key == "E"
