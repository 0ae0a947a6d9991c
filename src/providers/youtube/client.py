"""
client.py

YouTube Data API client builder (API-key auth only).
"""

from __future__ import annotations

from typing import Any

from googleapiclient.discovery import build

from logger import get_logger
from providers.youtube.api_manager import AuthenticationError, CatalogAPIError

logger = get_logger(__name__)


class YouTubeClientError(CatalogAPIError):
    """Raised when the client cannot be constructed."""

    pass


def build_youtube_client(api_key: str) -> Any:
    """
    Return a YouTube Data API v3 resource authorized with `api_key`.

    Raises:
        AuthenticationError: If no key is given
        YouTubeClientError: If discovery/build fails
    """
    if not api_key:
        raise AuthenticationError("YouTube API key is empty")

    try:
        youtube = build("youtube", "v3", developerKey=api_key, cache_discovery=False)
        logger.debug("Built YouTube API client")
        return youtube
    except Exception as e:
        logger.error(f"Failed to build YouTube client: {e}")
        raise YouTubeClientError(f"Failed to build client: {e}") from e
