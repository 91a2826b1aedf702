"""News source adapters and enrichment."""

from .base import SourceAdapter
from .enrich import EnrichmentResult, PreviewEnricher
from .google_news import GoogleNewsAdapter, backfill_suffix
from .models import AdapterResult, QueryError
from .naver import NaverNewsAdapter
from .url_utils import canonicalize_url, content_hash

__all__ = [
    "AdapterResult",
    "EnrichmentResult",
    "GoogleNewsAdapter",
    "NaverNewsAdapter",
    "PreviewEnricher",
    "QueryError",
    "SourceAdapter",
    "backfill_suffix",
    "canonicalize_url",
    "content_hash",
]
