"""
api_manager.py

Single-shot request execution and HTTP -> domain error translation.

Responsibilities:
- Run a prepared googleapiclient request once
- Classify HttpError into quota / auth / other
- Log failures with the operation name before re-raising

Does NOT:
- Retry (a failed call aborts the sync)
- Rotate API keys
"""

from __future__ import annotations

from typing import Any, Callable, TypeVar

from googleapiclient.errors import HttpError

from logger import get_logger

logger = get_logger(__name__)
T = TypeVar("T")

QUOTA_REASONS = ("quotaExceeded", "dailyLimitExceeded", "rateLimitExceeded")
AUTH_REASONS = ("keyInvalid", "forbidden", "accessNotConfigured", "ipRefererBlocked")


# ============================================================
# Exceptions
# ============================================================


class CatalogAPIError(Exception):
    """A remote catalog call failed."""

    pass


class QuotaExhaustedError(CatalogAPIError):
    """Raised when the API key's daily quota is used up."""

    pass


class AuthenticationError(CatalogAPIError):
    """Raised when the API key is missing, invalid or not permitted."""

    pass


# ============================================================
# Error detection helpers
# ============================================================


def _error_reasons(e: HttpError) -> list[str]:
    """
    YouTube reports failure causes here:
    error.errors[].reason (also surfaced as HttpError.error_details)
    """
    reasons: list[str] = []

    details = getattr(e, "error_details", None)
    if isinstance(details, list):
        for d in details:
            if isinstance(d, dict) and d.get("reason"):
                reasons.append(str(d["reason"]))

    return reasons


def _status_of(e: HttpError) -> int | None:
    status = getattr(e, "status_code", None)
    if status is None:
        resp = getattr(e, "resp", None)
        status = getattr(resp, "status", None)
    try:
        return int(status) if status is not None else None
    except (TypeError, ValueError):
        return None


def classify_http_error(e: HttpError) -> str:
    """
    Returns: 'quota', 'auth', or 'other'
    """
    reasons = _error_reasons(e)
    if any(r in QUOTA_REASONS for r in reasons):
        return "quota"

    raw = ""
    content = getattr(e, "content", b"")
    if isinstance(content, bytes):
        raw = content.decode("utf-8", errors="ignore").lower()
    if "quotaexceeded" in raw or "dailylimitexceeded" in raw:
        return "quota"

    if any(r in AUTH_REASONS for r in reasons) or "keyinvalid" in raw:
        return "auth"

    status = _status_of(e)
    if status == 401 or (status == 400 and "api key not valid" in raw):
        return "auth"

    return "other"


# ============================================================
# Execution
# ============================================================


def execute_request(operation: Callable[[], T], name: str) -> T:
    """
    Run `operation` once, translating HttpError into CatalogAPIError subclasses.

    Args:
        operation: Zero-arg callable issuing one API request
        name: Operation label used in log lines and error messages

    Raises:
        QuotaExhaustedError: Quota used up
        AuthenticationError: Key rejected
        CatalogAPIError: Any other HTTP error
    """
    try:
        return operation()

    except HttpError as e:
        kind = classify_http_error(e)
        status = _status_of(e)

        if kind == "quota":
            logger.error(f"{name}: API quota exhausted")
            raise QuotaExhaustedError(f"{name}: API quota exhausted") from e

        if kind == "auth":
            logger.error(f"{name}: API key rejected (HTTP {status})")
            raise AuthenticationError(f"{name}: API key rejected (HTTP {status})") from e

        logger.error(f"{name} failed (HTTP {status}): {e}")
        raise CatalogAPIError(f"{name} failed (HTTP {status})") from e


__all__ = [
    "AuthenticationError",
    "CatalogAPIError",
    "QuotaExhaustedError",
    "classify_http_error",
    "execute_request",
]
