# FILE: xalgrow/services/ai_safeguards.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

import anthropic
import openai

# Normalizes provider failures (OpenAI or Anthropic SDK, or anything else
# raised around them) into a stable code + HTTP status + user-facing text.

@dataclass
class NormalizedAIError(Exception):
    code: str                 # e.g. "RATE_LIMIT", "POLICY", "AUTH", "TIMEOUT", "SERVER", "BAD_REQUEST", "UNKNOWN"
    message: str              # short user-facing text
    retryable: bool
    status_code: int          # HTTP status returned to the client
    raw: Optional[str] = None # raw error, for logs only

    def to_http_detail(self) -> Dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "retryable": self.retryable,
        }


_RATE_LIMIT = (openai.RateLimitError, anthropic.RateLimitError)
_TIMEOUT = (openai.APITimeoutError, anthropic.APITimeoutError)
_AUTH = (
    openai.AuthenticationError, anthropic.AuthenticationError,
    openai.PermissionDeniedError, anthropic.PermissionDeniedError,
)
_SERVER = (
    openai.InternalServerError, anthropic.InternalServerError,
    openai.APIConnectionError, anthropic.APIConnectionError,
)
_BAD_REQUEST = (openai.BadRequestError, anthropic.BadRequestError)


def _safe_str(x: Any) -> str:
    try:
        return str(x)
    except Exception:
        return "<unprintable>"


def _looks_like_policy(msg: str) -> bool:
    m = msg.lower()
    return (
            "policy" in m
            or "safety" in m
            or "violat" in m
            or ("content" in m and "not allowed" in m)
            or "disallowed" in m
            or "moderation" in m
    )


def _looks_like_rate_limit(msg: str) -> bool:
    m = msg.lower()
    return "rate limit" in m or "too many requests" in m or "429" in m


def _looks_like_timeout(msg: str) -> bool:
    m = msg.lower()
    return "timeout" in m or "timed out" in m


def _looks_like_auth(msg: str) -> bool:
    m = msg.lower()
    return (
            "invalid api key" in m
            or ("api key" in m and "invalid" in m)
            or "api_key not configured" in m
            or "unauthorized" in m
    )


def _policy(raw: str) -> NormalizedAIError:
    return NormalizedAIError(
        code="POLICY",
        message="AI refused this request due to safety/policy constraints. Please rephrase or remove disallowed content.",
        retryable=False,
        status_code=400,
        raw=raw,
    )


def _auth(raw: str) -> NormalizedAIError:
    return NormalizedAIError(
        code="AUTH",
        message="AI authentication failed (API key/permission).",
        retryable=False,
        status_code=503,  # frontend shows it as 'service not available'
        raw=raw,
    )


def _rate_limit(raw: str) -> NormalizedAIError:
    return NormalizedAIError(
        code="RATE_LIMIT",
        message="AI is rate-limited or quota exceeded. Try again in a moment.",
        retryable=True,
        status_code=429,
        raw=raw,
    )


def _timeout(raw: str) -> NormalizedAIError:
    return NormalizedAIError(
        code="TIMEOUT",
        message="AI request timed out. Try again.",
        retryable=True,
        status_code=504,
        raw=raw,
    )


def _server(raw: str) -> NormalizedAIError:
    return NormalizedAIError(
        code="SERVER",
        message="AI service is temporarily unavailable. Try again later.",
        retryable=True,
        status_code=503,
        raw=raw,
    )


def normalize_ai_exception(err: Exception) -> NormalizedAIError:
    """
    Map whatever SDK/HTTP exception to something stable for the API + UI.
    SDK exception types are checked first, message heuristics second.
    """
    msg = _safe_str(err)
    raw = msg[:4000]

    if isinstance(err, NormalizedAIError):
        return err

    # APITimeoutError subclasses APIConnectionError in both SDKs: check it first
    if isinstance(err, _TIMEOUT):
        return _timeout(raw)
    if isinstance(err, _RATE_LIMIT):
        return _rate_limit(raw)
    if isinstance(err, _AUTH):
        return _auth(raw)
    if isinstance(err, _SERVER):
        return _server(raw)
    if isinstance(err, _BAD_REQUEST):
        if _looks_like_policy(msg):
            return _policy(raw)
        return NormalizedAIError(
            code="BAD_REQUEST",
            message="AI request was rejected due to invalid input/parameters.",
            retryable=False,
            status_code=400,
            raw=raw,
        )

    # Untyped errors (config problems, wrappers, other clients)
    if _looks_like_auth(msg):
        return _auth(raw)
    if _looks_like_policy(msg):
        return _policy(raw)
    if _looks_like_rate_limit(msg):
        return _rate_limit(raw)
    if _looks_like_timeout(msg):
        return _timeout(raw)

    return NormalizedAIError(
        code="UNKNOWN",
        message="AI request failed unexpectedly.",
        retryable=True,
        status_code=502,
        raw=raw,
    )
