"""Persistence gateway between the pipeline and the corpus store."""

import asyncio
import logging
from typing import List, Optional

from pydantic import BaseModel, Field

from ..ingestion.url_utils import canonicalize_url, content_hash
from ..models import ContentItem, CorpusDocument
from .store import CorpusStore

logger = logging.getLogger(__name__)


class SaveResult(BaseModel):
    """Outcome of persisting one batch."""

    saved: int = Field(0, description="New documents")
    skipped: int = Field(0, description="Documents already present, updated in place")
    errors: int = Field(0, description="Failed writes")
    error_messages: List[str] = Field(default_factory=list)


def to_document(item: ContentItem, category: Optional[str] = None) -> CorpusDocument:
    """Corpus view of an item, keyed by the canonical-URL hash."""
    if category is None and item.category is not None:
        category = item.category.value
    content = item.title if not item.summary else f"{item.title}\n\n{item.summary}"
    return CorpusDocument(
        content_hash=content_hash(item.url),
        source="news",
        title=item.title,
        content=content,
        summary=item.summary,
        url=canonicalize_url(item.url),
        tags=list(item.tags),
        category=category,
        image_url=item.image_url,
        published_at=item.published_at,
        metadata={
            "publisher": item.publisher,
            "provider": item.source.value,
            "priority": item.priority.value,
            "lane": item.lane.value if item.lane else None,
            "language": item.language,
            **item.meta,
        },
    )


class PersistenceGateway:
    """Idempotent batch upsert of content items."""

    def __init__(self, store: CorpusStore) -> None:
        self.store = store

    async def save_items(self, items: List[ContentItem], category: Optional[str] = None) -> SaveResult:
        result = SaveResult()
        for item in items:
            document = to_document(item, category)
            try:
                outcome = await asyncio.to_thread(self.store.upsert_document, document)
            except Exception as e:
                logger.warning("Failed to save %s: %s", item.url, e)
                result.errors += 1
                result.error_messages.append(f"{item.url}: {e}")
                continue

            if outcome.inserted:
                result.saved += 1
            else:
                result.skipped += 1

        logger.info("Saved %d, skipped %d, errors %d", result.saved, result.skipped, result.errors)
        return result
