"""Lane-aware noise filtering."""

import logging
from typing import Iterable, List, Optional, Sequence

from ..config.keyword_pack import NOISE_TERMS
from ..models import ContentItem

logger = logging.getLogger(__name__)

DEFAULT_EXEMPT_LANES = ("deal", "korea_uae", "uae_local")


def is_noisy(title: str, summary: Optional[str], noise_terms: Iterable[str] = NOISE_TERMS) -> bool:
    """True if title + summary contains any noise term (case-insensitive)."""
    combined = f"{title} {summary or ''}".lower()
    return any(term.lower() in combined for term in noise_terms if term)


def is_exempt(item: ContentItem, exempt_lanes: Iterable[str] = DEFAULT_EXEMPT_LANES) -> bool:
    return item.lane is not None and item.lane.value in set(exempt_lanes)


def filter_noise(
    items: Sequence[ContentItem],
    noise_terms: Iterable[str] = NOISE_TERMS,
    exempt_lanes: Iterable[str] = DEFAULT_EXEMPT_LANES,
) -> List[ContentItem]:
    """Drop promotional or off-topic items; exempt lanes are always kept."""
    terms = [t for t in noise_terms if t]
    lanes = set(exempt_lanes)
    kept = [
        item
        for item in items
        if is_exempt(item, lanes) or not is_noisy(item.title, item.summary, terms)
    ]
    if len(kept) != len(items):
        logger.info("Noise filter dropped %d of %d items", len(items) - len(kept), len(items))
    return kept
