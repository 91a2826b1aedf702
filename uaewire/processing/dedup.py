"""
Near-duplicate collapsing for overlapping news coverage.

Titles are tokenized into sets of lowercase word tokens and compared with
Jaccard similarity. Each item joins the most similar kept cluster when the
similarity reaches the threshold; the cluster keeps whichever member has the
best publisher rank (earlier item on equal rank). Clustering is repeated over
the representatives until no more merges happen, so the output is stable
under a second pass.
"""

import logging
import re
from dataclasses import dataclass
from typing import AbstractSet, Callable, FrozenSet, List, Sequence

from ..models import ContentItem

logger = logging.getLogger(__name__)

SIMILARITY_THRESHOLD = 0.45

_NON_WORD_RE = re.compile(r"[^\w\s]")


def tokenize(text: str) -> FrozenSet[str]:
    """Lowercase word tokens longer than one character, any script."""
    cleaned = _NON_WORD_RE.sub("", (text or "").lower())
    return frozenset(token for token in cleaned.split() if len(token) > 1)


def jaccard_similarity(a: AbstractSet[str], b: AbstractSet[str]) -> float:
    """Intersection over union; two empty sets are identical."""
    if not a and not b:
        return 1.0
    intersection = len(a & b)
    union = len(a) + len(b) - intersection
    if union == 0:
        return 0.0
    return intersection / union


@dataclass
class _Entry:
    item: ContentItem
    tokens: FrozenSet[str]
    index: int


def _cluster(
    entries: Sequence[_Entry],
    threshold: float,
    rank: Callable[[ContentItem], int],
) -> List[_Entry]:
    kept: List[_Entry] = []
    for current in entries:
        best_index = -1
        best_similarity = -1.0
        for i, existing in enumerate(kept):
            similarity = jaccard_similarity(current.tokens, existing.tokens)
            if similarity > best_similarity:
                best_index, best_similarity = i, similarity

        if best_index >= 0 and best_similarity >= threshold:
            existing = kept[best_index]
            if rank(current.item) < rank(existing.item):
                kept[best_index] = current
        else:
            kept.append(current)
    return kept


def deduplicate(
    items: Sequence[ContentItem],
    threshold: float = SIMILARITY_THRESHOLD,
    rank: Callable[[ContentItem], int] = lambda item: item.rank,
) -> List[ContentItem]:
    """
    Collapse similar titles to one item per story.

    Returns representatives sorted by publication time, newest first, with
    ties kept in input order.
    """
    if not items:
        return []

    entries = [_Entry(item, tokenize(item.title), i) for i, item in enumerate(items)]
    kept = _cluster(entries, threshold, rank)
    while True:
        again = _cluster(sorted(kept, key=lambda e: e.index), threshold, rank)
        if len(again) == len(kept):
            break
        kept = again

    kept.sort(key=lambda e: (-e.item.published_at.timestamp(), e.index))
    logger.info("Deduplicated %d items into %d stories", len(items), len(kept))
    return [entry.item for entry in kept]
