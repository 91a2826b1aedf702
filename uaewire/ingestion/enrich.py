"""Preview image enrichment for news items."""

import base64
import binascii
import logging
import re
from typing import List, Optional, Sequence
from urllib.parse import urljoin

import httpx
from pydantic import BaseModel, Field
from trafilatura.metadata import extract_metadata

from ..concurrency import gather_settled, pause
from ..models import ContentItem

logger = logging.getLogger(__name__)

BROWSER_UA = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

_ARTICLE_ID_RE = re.compile(r"/articles/([^?/]+)")
_EMBEDDED_URL_RE = re.compile(r"https?://[^\x00-\x20\x7f\"<>]+")

_REDIRECT_PATTERNS = [
    re.compile(r'data-n-au="([^"]+)"'),
    re.compile(r'data-url="([^"]+)"'),
    re.compile(r"window\.location\.replace\(['\"]([^'\"]+)['\"]\)"),
    re.compile(r'<meta[^>]+property="og:url"[^>]+content="([^"]+)"'),
]

_IMAGE_META_PATTERNS = [
    re.compile(r"<meta[^>]*property=[\"']og:image[\"'][^>]*content=[\"']([^\"']+)[\"']", re.I),
    re.compile(r"<meta[^>]*content=[\"']([^\"']+)[\"'][^>]*property=[\"']og:image[\"']", re.I),
    re.compile(r"<meta[^>]*name=[\"']twitter:image[\"'][^>]*content=[\"']([^\"']+)[\"']", re.I),
    re.compile(r"<meta[^>]*content=[\"']([^\"']+)[\"'][^>]*name=[\"']twitter:image[\"']", re.I),
]


def is_google_news_url(url: str) -> bool:
    return "news.google.com" in (url or "")


def decode_google_news_url(url: str) -> Optional[str]:
    """
    Decode the publisher URL embedded in a Google News article link.

    Article ids are URL-safe base64 protobuf payloads; the publisher URL is
    the first http(s) string inside.
    """
    match = _ARTICLE_ID_RE.search(url or "")
    if not match:
        return None
    encoded = match.group(1)
    padded = encoded + "=" * (-len(encoded) % 4)
    try:
        decoded = base64.urlsafe_b64decode(padded).decode("utf-8", errors="ignore")
    except (binascii.Error, ValueError):
        return None

    found = _EMBEDDED_URL_RE.search(decoded)
    return found.group(0) if found else None


def find_preview_image(html: str, page_url: str) -> Optional[str]:
    """Absolute og:image (or twitter:image) URL from an HTML page."""
    image = None
    metadata = extract_metadata(html)
    if metadata is not None:
        image = getattr(metadata, "image", None)

    if not image:
        for pattern in _IMAGE_META_PATTERNS:
            match = pattern.search(html)
            if match:
                image = match.group(1)
                break

    if not image:
        return None
    if image.startswith("//"):
        image = "https:" + image
    elif image.startswith("/"):
        image = urljoin(page_url, image)
    return image if image.startswith("http") else None


class EnrichmentResult(BaseModel):
    """Outcome of enriching a batch of items."""

    items: List[ContentItem] = Field(default_factory=list)
    attempted: int = Field(0, description="Items inside the enrichment cap")
    enriched: int = Field(0, description="Items that gained an image")
    unenriched: int = Field(0, description="Items beyond the cap, left untouched")


class PreviewEnricher:
    """Resolve aggregator links and attach preview images."""

    def __init__(
        self,
        resolve_timeout: float = 5.0,
        fetch_timeout: float = 8.0,
        batch_size: int = 5,
        pacing: float = 0.5,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.resolve_timeout = resolve_timeout
        self.fetch_timeout = fetch_timeout
        self.batch_size = batch_size
        self.pacing = pacing
        self.transport = transport

    async def resolve_url(self, client: httpx.AsyncClient, url: str) -> str:
        """Publisher URL behind a Google News link; other URLs pass through."""
        if not is_google_news_url(url):
            return url

        decoded = decode_google_news_url(url)
        if decoded:
            return decoded

        try:
            response = await client.get(url, timeout=self.resolve_timeout)
        except httpx.HTTPError as e:
            logger.debug("Redirect resolution failed for %s: %s", url, e)
            return url

        if not is_google_news_url(str(response.url)):
            return str(response.url)

        for pattern in _REDIRECT_PATTERNS:
            match = pattern.search(response.text)
            if match and not is_google_news_url(match.group(1)):
                return match.group(1)
        return url

    async def fetch_image(self, client: httpx.AsyncClient, url: str) -> Optional[str]:
        try:
            response = await client.get(url, timeout=self.fetch_timeout)
        except httpx.HTTPError as e:
            logger.debug("Preview fetch failed for %s: %s", url, e)
            return None
        if response.status_code >= 400:
            return None
        return find_preview_image(response.text, str(response.url))

    async def enrich_item(self, client: httpx.AsyncClient, item: ContentItem) -> ContentItem:
        if item.image_url and item.image_url.startswith("http"):
            return item

        resolved = await self.resolve_url(client, item.url)
        image = await self.fetch_image(client, resolved)
        return item.model_copy(update={"url": resolved, "image_url": image or item.image_url})

    async def enrich(self, items: Sequence[ContentItem], limit: int = 20) -> EnrichmentResult:
        """Enrich the first ``limit`` items in small concurrent batches."""
        head = list(items[:limit])
        tail = list(items[limit:])
        enriched_items: List[ContentItem] = []
        enriched = 0

        headers = {"User-Agent": BROWSER_UA, "Accept": "text/html,application/xhtml+xml"}
        async with httpx.AsyncClient(
            headers=headers,
            follow_redirects=True,
            timeout=self.fetch_timeout,
            transport=self.transport,
        ) as client:
            for start in range(0, len(head), self.batch_size):
                batch = head[start:start + self.batch_size]
                outcomes = await gather_settled(
                    [self.enrich_item(client, item) for item in batch],
                    labels=[item.url for item in batch],
                    timeout=self.resolve_timeout + self.fetch_timeout,
                )
                for original, outcome in zip(batch, outcomes):
                    if outcome.ok:
                        if outcome.value.image_url and not original.image_url:
                            enriched += 1
                        enriched_items.append(outcome.value)
                    else:
                        logger.debug("Enrichment failed for %s: %s", original.url, outcome.describe_error())
                        enriched_items.append(original)

                if start + self.batch_size < len(head):
                    await pause(self.pacing)

        return EnrichmentResult(
            items=enriched_items + tail,
            attempted=len(head),
            enriched=enriched,
            unenriched=len(tail),
        )
