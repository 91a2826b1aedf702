"""Naver Search API adapter.

Naver returns title and description only, never full article text.
"""

import hashlib
import html
import logging
import re
from datetime import datetime
from email.utils import parsedate_to_datetime
from typing import Any, List, Optional, Sequence, Set, Tuple

import httpx
import pendulum

from ..models import ContentItem, Lane, NewsSource, Priority
from .base import SourceAdapter, lane_tags
from .models import AdapterResult
from .url_utils import extract_outlet

logger = logging.getLogger(__name__)

NAVER_NEWS_API = "https://openapi.naver.com/v1/search/news.json"

KOREAN_PUBLISHERS = {
    "hankyung.com": "한국경제",
    "mk.co.kr": "매일경제",
    "chosun.com": "조선일보",
    "donga.com": "동아일보",
    "joongang.co.kr": "중앙일보",
    "hani.co.kr": "한겨레",
    "khan.co.kr": "경향신문",
    "sedaily.com": "서울경제",
    "edaily.co.kr": "이데일리",
    "newsis.com": "뉴시스",
    "yna.co.kr": "연합뉴스",
    "news.mt.co.kr": "머니투데이",
    "biz.chosun.com": "조선비즈",
    "etnews.com": "전자신문",
    "zdnet.co.kr": "ZDNet Korea",
}

_TAG_RE = re.compile(r"<[^>]*>")


def strip_html(text: str) -> str:
    """Remove markup and decode entities from Naver's highlighted fields."""
    return html.unescape(_TAG_RE.sub("", text or "")).strip()


def parse_naver_date(value: str) -> Optional[datetime]:
    """Parse an RFC 2822 pubDate into UTC."""
    if not value:
        return None
    try:
        return pendulum.instance(parsedate_to_datetime(value)).in_timezone("UTC")
    except (TypeError, ValueError):
        return None


def publisher_from_url(url: str) -> Optional[str]:
    outlet = extract_outlet(url)
    if not outlet:
        return None
    return KOREAN_PUBLISHERS.get(outlet, outlet)


def batch_hash(url: str, published_at: Optional[datetime], title: str) -> str:
    """In-batch identity used to drop repeated hits across queries."""
    stamp = published_at.isoformat() if published_at else ""
    raw = "|".join(["naver", url, stamp, title])
    return hashlib.sha256(raw.encode("utf-8")).hexdigest()


class NaverNewsAdapter(SourceAdapter):
    """Search Naver news for Korean-language coverage."""

    name = "naver"

    def __init__(
        self,
        credentials: Optional[Tuple[str, str]],
        sort: str = "date",
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.credentials = credentials
        self.sort = sort
        self._seen: Set[str] = set()

    def precheck(self) -> Optional[str]:
        if not self.credentials:
            return "NAVER_CLIENT_ID or NAVER_CLIENT_SECRET not configured"
        return None

    def _client(self, **kwargs: Any) -> httpx.AsyncClient:
        headers = {}
        if self.credentials:
            client_id, client_secret = self.credentials
            headers = {
                "X-Naver-Client-Id": client_id,
                "X-Naver-Client-Secret": client_secret,
            }
        return super()._client(headers=headers)

    async def search(
        self,
        queries: Sequence[str],
        lane: Optional[Lane] = None,
        result_cap: int = 5,
        deadline: Optional[float] = None,
    ) -> AdapterResult:
        self._seen = set()
        return await super().search(queries, lane=lane, result_cap=result_cap, deadline=deadline)

    async def fetch_query(
        self,
        client: httpx.AsyncClient,
        query: str,
        lane: Optional[Lane],
        result_cap: int,
    ) -> List[ContentItem]:
        params = {"query": query, "display": str(max(1, min(result_cap, 100))), "sort": self.sort}
        response = await client.get(NAVER_NEWS_API, params=params)
        response.raise_for_status()

        data = response.json()
        items = []
        for raw in data.get("items") or []:
            item = self._to_item(raw, query, lane)
            if item is not None:
                items.append(item)
        return items

    def _to_item(self, raw: dict, query: str, lane: Optional[Lane]) -> Optional[ContentItem]:
        title = strip_html(raw.get("title", ""))
        summary = strip_html(raw.get("description", ""))
        url = raw.get("originallink") or raw.get("link") or ""
        if not title or not url:
            return None

        published_at = parse_naver_date(raw.get("pubDate", ""))
        key = batch_hash(url, published_at, title)
        if key in self._seen:
            return None
        self._seen.add(key)

        return ContentItem(
            title=title,
            url=url,
            publisher=publisher_from_url(url) or "Naver News",
            source=NewsSource.NAVER,
            published_at=published_at or pendulum.now("UTC"),
            summary=summary or None,
            tags=lane_tags(query, lane),
            priority=Priority.OTHER,
            lane=lane,
            language="ko",
            meta={"naver_link": raw.get("link"), "original_link": raw.get("originallink")},
        )
