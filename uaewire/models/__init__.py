"""Data models for uaewire."""

from .content import (
    PRIORITY_RANK,
    Category,
    ContentItem,
    CorpusDocument,
    Impact,
    Lane,
    NewsSource,
    Priority,
    classify_priority,
)
from .photo import ActiveImage, CandidatePhoto, PhotoProvider
from .run import IngestionRun, RunCounters, RunStatus

__all__ = [
    "ActiveImage",
    "CandidatePhoto",
    "Category",
    "ContentItem",
    "CorpusDocument",
    "Impact",
    "IngestionRun",
    "Lane",
    "NewsSource",
    "PRIORITY_RANK",
    "PhotoProvider",
    "Priority",
    "RunCounters",
    "RunStatus",
    "classify_priority",
]
