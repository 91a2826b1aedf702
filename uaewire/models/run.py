"""Ingestion run models."""

from datetime import datetime
from enum import Enum
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from .base import DBModel


class RunStatus(str, Enum):
    PENDING = "pending"
    SUCCESS = "success"
    PARTIAL = "partial"
    FAILED = "failed"


class RunCounters(BaseModel):
    """Counters reported when a run is finalized."""

    fetched: int = Field(0, ge=0)
    saved: int = Field(0, ge=0)
    skipped: int = Field(0, ge=0)
    errors: int = Field(0, ge=0)

    def status(self) -> RunStatus:
        """Terminal status implied by the counters."""
        if self.errors == 0:
            return RunStatus.SUCCESS
        if self.saved > 0:
            return RunStatus.PARTIAL
        return RunStatus.FAILED


class IngestionRun(DBModel):
    """One bounded execution of the fetch-and-save pipeline."""

    provider: str = Field(..., description="Source identity, e.g. naver or news-sync")
    queries: List[str] = Field(default_factory=list, description="Queries used")
    status: RunStatus = Field(RunStatus.PENDING, description="Lifecycle status")
    started_at: datetime = Field(..., description="When the run started")
    finished_at: Optional[datetime] = Field(None, description="When the run finished")
    fetched: int = Field(0, ge=0)
    saved: int = Field(0, ge=0)
    skipped: int = Field(0, ge=0)
    errors: int = Field(0, ge=0)
    duration_ms: Optional[int] = Field(None, description="Wall-clock duration")
    meta: Dict[str, Any] = Field(default_factory=dict, description="Per-query errors and notes")

    @property
    def is_finalized(self) -> bool:
        return self.status != RunStatus.PENDING
