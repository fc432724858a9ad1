from __future__ import annotations

import logging
import re

import httpx
import yt_dlp

from recipe_box.app.config import settings

from .errors import FetchError
from .ids import extract_video_id, is_youtube_url

logger = logging.getLogger(__name__)

SCRIPT_BLOCK_PATTERN = re.compile(r"<script\b[^>]*>.*?</script\s*>", re.IGNORECASE | re.DOTALL)
STYLE_BLOCK_PATTERN = re.compile(r"<style\b[^>]*>.*?</style\s*>", re.IGNORECASE | re.DOTALL)
TAG_PATTERN = re.compile(r"<[^>]+>")
WHITESPACE_PATTERN = re.compile(r"\s+")

YOUTUBE_WATCH_URL = "https://www.youtube.com/watch?v={video_id}"


def _create_ydl_options() -> dict:
    return {
        "quiet": True,
        "noprogress": True,
        "skip_download": True,
        "check_formats": False,
        "extractor_args": {"youtube": {"player_client": ["android"]}},
    }


def html_to_text(html: str, max_chars: int | None = None) -> str:
    limit = max_chars if max_chars is not None else settings.CONTENT_MAX_CHARS

    text = SCRIPT_BLOCK_PATTERN.sub("", html)
    text = STYLE_BLOCK_PATTERN.sub("", text)
    text = TAG_PATTERN.sub(" ", text)
    text = WHITESPACE_PATTERN.sub(" ", text).strip()
    return text[:limit]


def fetch_youtube_description(url: str) -> str:
    video_id = extract_video_id(url)
    if not video_id:
        raise FetchError(f"Invalid YouTube URL: could not extract video identifier from {url}")

    try:
        with yt_dlp.YoutubeDL(_create_ydl_options()) as ydl:
            info = ydl.extract_info(YOUTUBE_WATCH_URL.format(video_id=video_id), download=False)
    except yt_dlp.utils.DownloadError as error:
        raise FetchError(f"Failed to fetch video metadata: {error}") from error

    if not isinstance(info, dict):
        return ""
    description = info.get("description")
    return description if isinstance(description, str) else ""


def fetch_page_text(
    url: str,
    *,
    client: httpx.Client | None = None,
    max_chars: int | None = None,
) -> str:
    owns_client = client is None
    http = client or httpx.Client(timeout=settings.FETCH_TIMEOUT_SECONDS, follow_redirects=True)

    try:
        response = http.get(url)
    except (httpx.HTTPError, httpx.InvalidURL) as error:
        raise FetchError(f"Failed to fetch URL: {error}") from error
    finally:
        if owns_client:
            http.close()

    if not response.is_success:
        raise FetchError(f"Failed to fetch URL: {response.status_code} {response.reason_phrase}")

    return html_to_text(response.text, max_chars=max_chars)


def fetch_text(url: str, *, client: httpx.Client | None = None) -> str:
    if is_youtube_url(url):
        logger.info("fetch.youtube url=%s", url)
        return fetch_youtube_description(url)

    logger.info("fetch.page url=%s", url)
    return fetch_page_text(url, client=client)
