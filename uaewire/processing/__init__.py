"""Filtering, deduplication and tagging of fetched items."""

from .dedup import SIMILARITY_THRESHOLD, deduplicate, jaccard_similarity, tokenize
from .noise import filter_noise, is_noisy
from .tagger import categorize, match_tags, tag_batch, tag_item

__all__ = [
    "SIMILARITY_THRESHOLD",
    "categorize",
    "deduplicate",
    "filter_noise",
    "is_noisy",
    "jaccard_similarity",
    "match_tags",
    "tag_batch",
    "tag_item",
    "tokenize",
]
