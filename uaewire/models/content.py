"""News content models shared by adapters, processing and storage."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .base import DBModel


class NewsSource(str, Enum):
    """Feed family an item was fetched from."""

    GOOGLE = "google"
    NAVER = "naver"
    MANUAL = "manual"


class Lane(str, Enum):
    """Coarse editorial lane used for query selection and noise exemptions."""

    DEAL = "deal"
    MACRO = "macro"
    UAE_LOCAL = "uae_local"
    KOREA_UAE = "korea_uae"


class Priority(str, Enum):
    """Publisher priority used to break ties between duplicate stories."""

    REUTERS = "reuters"
    BLOOMBERG = "bloomberg"
    FINANCIAL_TIMES = "financial_times"
    WSJ = "wsj"
    THE_NATIONAL = "the_national"
    KHALEEJ_TIMES = "khaleej_times"
    ARAB_NEWS = "arab_news"
    GULF_NEWS = "gulf_news"
    WAM = "wam"
    OTHER = "other"


PRIORITY_RANK: Dict[Priority, int] = {
    Priority.REUTERS: 1,
    Priority.BLOOMBERG: 2,
    Priority.FINANCIAL_TIMES: 3,
    Priority.WSJ: 4,
    Priority.THE_NATIONAL: 5,
    Priority.KHALEEJ_TIMES: 6,
    Priority.ARAB_NEWS: 7,
    Priority.GULF_NEWS: 8,
    Priority.WAM: 9,
    Priority.OTHER: 10,
}

# Checked in order; first substring hit wins.
_PUBLISHER_PATTERNS = [
    (("reuters",), Priority.REUTERS),
    (("bloomberg",), Priority.BLOOMBERG),
    (("financial times", "ft.com"), Priority.FINANCIAL_TIMES),
    (("wall street journal", "wsj"), Priority.WSJ),
    (("the national",), Priority.THE_NATIONAL),
    (("khaleej times",), Priority.KHALEEJ_TIMES),
    (("arab news",), Priority.ARAB_NEWS),
    (("gulf news",), Priority.GULF_NEWS),
    (("wam", "emirates news agency"), Priority.WAM),
]


def classify_priority(publisher: str) -> Priority:
    """Map a publisher display name to its priority bucket."""
    lowered = (publisher or "").lower()
    for needles, priority in _PUBLISHER_PATTERNS:
        if any(needle in lowered for needle in needles):
            return priority
    return Priority.OTHER


class Impact(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class Category(str, Enum):
    """Coarse corpus category assigned before persistence."""

    UAE_KOREA = "uae-korea"
    UAE_LOCAL = "uae-local"
    INVESTMENT = "investment"
    INDUSTRY = "industry"
    POLITICS = "politics"
    ECONOMY = "economy"
    GENERAL = "general"


class ContentItem(BaseModel):
    """Normalized news item produced by a source adapter."""

    title: str = Field(..., description="Headline")
    url: str = Field(..., description="Article URL (identity after canonicalization)")
    publisher: str = Field("Unknown", description="Publisher display name")
    source: NewsSource = Field(..., description="Feed family")
    published_at: datetime = Field(..., description="Publication timestamp (UTC)")
    summary: Optional[str] = Field(None, description="Short description")
    tags: List[str] = Field(default_factory=list, description="Query and topical tags")
    priority: Priority = Field(Priority.OTHER, description="Publisher priority bucket")
    image_url: Optional[str] = Field(None, description="Preview image URL")
    impact: Optional[Impact] = Field(None, description="Editorial impact")
    category: Optional[Category] = Field(None, description="Corpus category")
    lane: Optional[Lane] = Field(None, description="Editorial lane")
    language: Optional[str] = Field(None, description="ISO language code")
    meta: Dict[str, Any] = Field(default_factory=dict, description="Provider-specific extras")

    @property
    def rank(self) -> int:
        """Publisher rank, lower is preferred."""
        return PRIORITY_RANK[self.priority]

    @property
    def text(self) -> str:
        """Title and summary joined for keyword matching."""
        return f"{self.title} {self.summary or ''}"


class CorpusDocument(DBModel):
    """Persisted corpus record derived from a ContentItem."""

    content_hash: str = Field(..., description="sha256 of the canonical URL")
    source: str = Field("news", description="Document family")
    title: str = Field(..., description="Headline")
    content: str = Field(..., description="Title and summary body")
    summary: Optional[str] = Field(None, description="Short description")
    url: str = Field(..., description="Canonical article URL")
    tags: List[str] = Field(default_factory=list, description="Topical tags")
    category: Optional[str] = Field(None, description="Corpus category")
    image_url: Optional[str] = Field(None, description="Preview image URL")
    published_at: Optional[datetime] = Field(None, description="Publication timestamp")
    metadata: Dict[str, Any] = Field(default_factory=dict, description="Publisher, provider, lane")
