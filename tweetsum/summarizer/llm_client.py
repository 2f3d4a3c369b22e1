"""Chat-completions transport: payload building, the POST itself, response parsing."""

from typing import Any

import httpx

# Statuses treated as a rejected credential rather than a generic upstream error.
AUTH_FAILURE_STATUSES = frozenset({401, 403})


def build_chat_payload(prompt: str, *, model: str, max_tokens: int = 700, temperature: float = 1.0) -> dict[str, Any]:
    """Single-turn chat payload; no history is carried between requests."""
    return {
        "model": model,
        "max_tokens": max_tokens,
        "temperature": temperature,
        "messages": [{"role": "user", "content": prompt}],
    }


async def post_chat_completion(
    client: httpx.AsyncClient,
    api_url: str,
    api_key: str,
    payload: dict[str, Any],
    *,
    timeout: float = 60.0,
) -> httpx.Response:
    """POST *payload* with bearer auth and return the raw response."""
    return await client.post(
        api_url,
        json=payload,
        headers={
            "Authorization": f"Bearer {api_key}",
            "Content-Type": "application/json",
        },
        timeout=timeout,
    )


def is_auth_failure(status_code: int) -> bool:
    return status_code in AUTH_FAILURE_STATUSES


def extract_completion_text(data: Any) -> str:
    """Return the first choice's message content, stripped, or ``""``."""
    if not isinstance(data, dict):
        return ""
    choices = data.get("choices")
    if not isinstance(choices, list) or not choices:
        return ""
    first = choices[0]
    if not isinstance(first, dict):
        return ""
    message = first.get("message")
    if not isinstance(message, dict):
        return ""
    content = message.get("content")
    if not isinstance(content, str):
        return ""
    return content.strip()
