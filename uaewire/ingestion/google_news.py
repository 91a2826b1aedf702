"""Google News RSS search adapter."""

import calendar
import logging
from datetime import datetime
from typing import Any, Dict, List, Optional

import feedparser
import httpx
import pendulum

from ..errors import ProviderError
from ..models import ContentItem, Lane, NewsSource, classify_priority
from .base import SourceAdapter, lane_tags

logger = logging.getLogger(__name__)

GOOGLE_NEWS_RSS_BASE = "https://news.google.com/rss/search"

LOCALES: Dict[str, Dict[str, str]] = {
    "en": {"hl": "en", "gl": "AE", "ceid": "AE:en"},
    "ko": {"hl": "ko", "gl": "KR", "ceid": "KR:ko"},
}


def backfill_suffix(month: str) -> str:
    """Google search operators restricting results to one YYYY-MM month."""
    start = pendulum.from_format(month, "YYYY-MM", tz="UTC")
    end = start.end_of("month")
    return f" after:{start.format('YYYY-MM-DD')} before:{end.format('YYYY-MM-DD')}"


def parse_entry_date(entry: Any) -> datetime:
    """Publication time of a feed entry in UTC, or now when missing."""
    for key in ("published_parsed", "updated_parsed"):
        parsed = entry.get(key)
        if parsed:
            try:
                return pendulum.from_timestamp(calendar.timegm(parsed), tz="UTC")
            except (OverflowError, ValueError, TypeError):
                continue
    return pendulum.now("UTC")


def extract_media_image(entry: Any) -> Optional[str]:
    """Image URL from media:content, media:thumbnail or an image enclosure."""
    candidates: List[str] = []
    for media in entry.get("media_content", []) or []:
        candidates.append(media.get("url", ""))
    for thumb in entry.get("media_thumbnail", []) or []:
        candidates.append(thumb.get("url", ""))
    for enclosure in entry.get("enclosures", []) or []:
        if str(enclosure.get("type", "")).startswith("image"):
            candidates.append(enclosure.get("href", ""))

    for url in candidates:
        if url.startswith("//"):
            url = "https:" + url
        if url.startswith("http"):
            return url
    return None


def extract_publisher(entry: Any) -> str:
    source = entry.get("source") or {}
    name = (source.get("title") or "").strip()
    return name or "Unknown"


class GoogleNewsAdapter(SourceAdapter):
    """Search Google News RSS for a set of queries in one locale."""

    name = "google"

    def __init__(
        self,
        locale: str = "en",
        user_agent: str = "Mozilla/5.0 (compatible; uaewire/0.1)",
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        if locale not in LOCALES:
            raise ValueError(f"Unsupported locale: {locale}")
        self.locale = locale
        self.user_agent = user_agent

    def _client(self, **kwargs: Any) -> httpx.AsyncClient:
        return super()._client(headers={"User-Agent": self.user_agent}, follow_redirects=True)

    async def fetch_query(
        self,
        client: httpx.AsyncClient,
        query: str,
        lane: Optional[Lane],
        result_cap: int,
    ) -> List[ContentItem]:
        params = {"q": query, **LOCALES[self.locale]}
        response = await client.get(GOOGLE_NEWS_RSS_BASE, params=params)
        response.raise_for_status()

        feed = feedparser.parse(response.text)
        if feed.bozo and not feed.entries:
            raise ProviderError(self.name, f"Invalid RSS feed: {feed.bozo_exception}")

        entries = [e for e in feed.entries if e.get("title") and e.get("link")]
        return [self._to_item(entry, query, lane) for entry in entries[:result_cap]]

    def _to_item(self, entry: Any, query: str, lane: Optional[Lane]) -> ContentItem:
        publisher = extract_publisher(entry)
        title = (entry.get("title") or "").strip()
        # Google appends " - Publisher" to every headline
        suffix = f" - {publisher}"
        if publisher != "Unknown" and title.endswith(suffix):
            title = title[: -len(suffix)].rstrip()

        return ContentItem(
            title=title,
            url=entry.get("link", ""),
            publisher=publisher,
            source=NewsSource.GOOGLE,
            published_at=parse_entry_date(entry),
            tags=lane_tags(query, lane),
            priority=classify_priority(publisher),
            image_url=extract_media_image(entry),
            lane=lane,
            language=self.locale,
        )
