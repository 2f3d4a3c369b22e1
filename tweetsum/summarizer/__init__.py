"""LLM-powered post summaries."""

from .llm_client import (
    build_chat_payload,
    extract_completion_text,
    is_auth_failure,
    post_chat_completion,
)
from .orchestrator import (
    AUTH_REJECTED_MESSAGE,
    EMPTY_RESPONSE_MESSAGE,
    MISSING_KEY_MESSAGE,
    SummaryOrchestrator,
    upstream_error_message,
)
from .prompts import SUMMARY_PROMPT, build_post_context, build_summary_prompt

__all__ = [
    "AUTH_REJECTED_MESSAGE",
    "EMPTY_RESPONSE_MESSAGE",
    "MISSING_KEY_MESSAGE",
    "SUMMARY_PROMPT",
    "SummaryOrchestrator",
    "build_chat_payload",
    "build_post_context",
    "build_summary_prompt",
    "extract_completion_text",
    "is_auth_failure",
    "post_chat_completion",
    "upstream_error_message",
]
