from datetime import datetime, timedelta, timezone
from typing import List, Optional

from uaewire.models import CandidatePhoto, ContentItem, Lane, NewsSource, PhotoProvider, Priority

BASE_TIME = datetime(2025, 10, 6, 8, 0, tzinfo=timezone.utc)


def make_item(
    title: str,
    priority: Priority = Priority.OTHER,
    hours: int = 0,
    lane: Optional[Lane] = None,
    summary: Optional[str] = None,
    url: Optional[str] = None,
    tags: Optional[List[str]] = None,
) -> ContentItem:
    slug = "-".join(title.lower().split())[:60]
    return ContentItem(
        title=title,
        url=url or f"https://news.example.com/{slug}",
        publisher=priority.value,
        source=NewsSource.GOOGLE,
        published_at=BASE_TIME + timedelta(hours=hours),
        summary=summary,
        tags=tags or [],
        priority=priority,
        lane=lane,
    )


def make_photo(
    ref: str,
    width: int,
    height: int,
    likes: int = 0,
    provider: PhotoProvider = PhotoProvider.UNSPLASH,
    description: str = "Dubai Marina skyline at dusk",
    verified: bool = False,
) -> CandidatePhoto:
    return CandidatePhoto(
        provider=provider,
        provider_ref=ref,
        image_url=f"https://images.example.com/{ref}.jpg",
        width=width,
        height=height,
        likes=likes,
        description=description,
        verified=verified,
        attribution_text=f"Photo {ref}",
    )
