"""Environment-file parsing, the persisted key store and the active credential."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

log = logging.getLogger(__name__)

DEFAULT_API_KEY_ENV = "FIREWORKS_API_KEY"
API_KEY_ENTRY = "API_KEY"

SOURCE_ENV = "env"
SOURCE_USER = "user"


def load_env_file(path: Path | None = None) -> dict[str, str]:
    """Parse a .env file, returning a dict of key-value pairs.

    Skips blank lines and comments.  Handles ``export KEY=value`` and
    quoted values.  If *path* is ``None`` the default ``~/.env`` is used.
    """
    if path is None:
        path = Path.home() / ".env"

    env: dict[str, str] = {}
    if not path.exists():
        return env

    with open(path) as f:
        for line in f:
            line = line.strip()
            if not line or line.startswith("#") or "=" not in line:
                continue
            if line.startswith("export "):
                line = line[7:]
            key, value = line.split("=", 1)
            value = value.strip("\"'")
            env[key] = value

    return env


def get_env_key(key_name: str = DEFAULT_API_KEY_ENV) -> str:
    """Return an API key from the environment or ``~/.env``, or ``""``."""
    value = os.environ.get(key_name)
    if not value:
        value = load_env_file().get(key_name)
    return (value or "").strip()


class KeyValueStore(Protocol):
    """Minimal persistent key-value store."""

    def get(self, name: str) -> str | None: ...

    def set(self, name: str, value: str) -> None: ...

    def remove(self, name: str) -> None: ...


class JsonKeyStore:
    """Key-value store persisted as a small JSON object on disk."""

    def __init__(self, path: Path) -> None:
        self.path = path

    def _load(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, encoding="utf-8") as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError, OSError) as exc:
            log.warning("Ignoring unreadable key store at %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): v for k, v in data.items() if isinstance(v, str)}

    def _save(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "w") as f:
            json.dump(data, f, indent=2)
        os.chmod(self.path, 0o600)

    def get(self, name: str) -> str | None:
        return self._load().get(name)

    def set(self, name: str, value: str) -> None:
        data = self._load()
        data[name] = value
        self._save(data)

    def remove(self, name: str) -> None:
        data = self._load()
        if data.pop(name, None) is not None:
            self._save(data)


@dataclass(frozen=True)
class AuthFailureDecision:
    """What to do after the generation endpoint rejects a key."""

    next_key: str
    evict_persisted: bool


def resolve_initial_key(env_key: str | None, persisted_key: str | None) -> str:
    """Pick the starting key: environment first, then the persisted user key."""
    if env_key:
        return env_key
    if persisted_key:
        return persisted_key
    return ""


def on_auth_failure(active_key: str, env_key: str | None) -> AuthFailureDecision:
    """Decide how to invalidate a rejected key.

    A rejected environment key is only dropped from memory. Anything else
    came from the store and is evicted from it too.
    """
    if active_key and env_key and active_key == env_key:
        return AuthFailureDecision(next_key="", evict_persisted=False)
    return AuthFailureDecision(next_key="", evict_persisted=True)


class CredentialState:
    """The single active API key for a session and where it came from.

    The environment key is read once, at construction.
    """

    def __init__(self, store: KeyValueStore, env_key: str = "") -> None:
        self.store = store
        self.env_key = env_key
        self.active_key = ""
        self.source: str | None = None
        self.resolve()

    @classmethod
    def from_environment(
        cls,
        store: KeyValueStore | None = None,
        key_name: str = DEFAULT_API_KEY_ENV,
    ) -> CredentialState:
        """Build the state from ``$FIREWORKS_API_KEY`` and the default key store."""
        if store is None:
            from .config import get_key_store_path

            store = JsonKeyStore(get_key_store_path())
        return cls(store, env_key=get_env_key(key_name))

    def resolve(self) -> str:
        persisted = self.store.get(API_KEY_ENTRY) or ""
        self.active_key = resolve_initial_key(self.env_key, persisted)
        if not self.active_key:
            self.source = None
        elif self.active_key == self.env_key:
            self.source = SOURCE_ENV
        else:
            self.source = SOURCE_USER
        log.debug("Resolved API key source: %s", self.source or "none")
        return self.active_key

    def handle_auth_failure(self, rejected_key: str) -> AuthFailureDecision | None:
        """Invalidate *rejected_key* if it is still the active key.

        Store eviction completes before this returns.
        """
        if not rejected_key or rejected_key != self.active_key:
            log.debug("Ignoring auth failure for a key that is no longer active")
            return None

        decision = on_auth_failure(self.active_key, self.env_key)
        self.active_key = decision.next_key
        self.source = None
        if decision.evict_persisted:
            self.store.remove(API_KEY_ENTRY)
            log.warning("Stored API key was rejected and has been removed")
        else:
            log.warning("Environment API key was rejected; a user key is required")
        return decision

    def save_user_key(self, key: str | None) -> bool:
        return save_user_key(self, key)

    def clear_user_key(self) -> None:
        """Forget the stored user key, deactivating it if it was in use."""
        self.store.remove(API_KEY_ENTRY)
        if self.source == SOURCE_USER:
            self.active_key = ""
            self.source = None


def save_user_key(state: CredentialState, key: str | None) -> bool:
    """Persist and activate a user-supplied key. Empty input is ignored."""
    key = (key or "").strip()
    if not key:
        return False
    state.store.set(API_KEY_ENTRY, key)
    state.active_key = key
    state.source = SOURCE_USER
    return True
