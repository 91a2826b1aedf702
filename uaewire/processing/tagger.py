"""Keyword taxonomy tagging and corpus categorization."""

from typing import Iterable, List, Mapping, Optional, Sequence

from ..config.taxonomy import (
    ECONOMY_TERMS,
    INDUSTRY_TERMS,
    INVESTMENT_TERMS,
    KOREA_TERMS,
    POLITICS_TERMS,
    TOPIC_TAXONOMY,
)
from ..models import Category, ContentItem, Lane


def match_tags(text: str, taxonomy: Mapping[str, str] = TOPIC_TAXONOMY) -> List[str]:
    """Category tags whose term occurs in text, in taxonomy order, without repeats."""
    lowered = text.lower()
    tags: List[str] = []
    for term, tag in taxonomy.items():
        if term.lower() in lowered and tag not in tags:
            tags.append(tag)
    return tags


def tag_item(item: ContentItem, taxonomy: Mapping[str, str] = TOPIC_TAXONOMY) -> ContentItem:
    """
    Copy of item with taxonomy tags re-derived.

    Tags produced by the taxonomy are recomputed rather than appended, so
    tagging twice gives the same result.
    """
    taxonomy_tags = set(taxonomy.values())
    base = [t for t in dict.fromkeys(item.tags) if t not in taxonomy_tags]
    derived = match_tags(item.text, taxonomy)
    return item.model_copy(update={"tags": base + derived})


def _any(terms: Iterable[str], text: str) -> bool:
    return any(term in text for term in terms)


def categorize(item: ContentItem) -> Category:
    """Coarse corpus category; rules are checked in priority order."""
    text = f"{item.text} {' '.join(item.tags)}".lower()
    if _any(KOREA_TERMS, text):
        return Category.UAE_KOREA
    if item.lane == Lane.UAE_LOCAL:
        return Category.UAE_LOCAL
    if _any(INVESTMENT_TERMS, text):
        return Category.INVESTMENT
    if _any(INDUSTRY_TERMS, text):
        return Category.INDUSTRY
    if _any(POLITICS_TERMS, text):
        return Category.POLITICS
    if _any(ECONOMY_TERMS, text):
        return Category.ECONOMY
    return Category.GENERAL


def tag_batch(
    items: Sequence[ContentItem],
    taxonomy: Mapping[str, str] = TOPIC_TAXONOMY,
    category: Optional[Category] = None,
) -> List[ContentItem]:
    """Tag every item and assign a category (explicit override wins)."""
    tagged = []
    for item in items:
        copy = tag_item(item, taxonomy)
        tagged.append(copy.model_copy(update={"category": category or categorize(copy)}))
    return tagged
