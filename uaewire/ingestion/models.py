"""Data models for ingestion."""

from typing import List, Optional

from pydantic import BaseModel, Field

from ..models import ContentItem


class QueryError(BaseModel):
    """A single failed query inside an adapter batch."""

    provider: str = Field(..., description="Adapter name")
    query: str = Field(..., description="Query string, or * for adapter-level failures")
    error: str = Field(..., description="Error message")
    lane: Optional[str] = Field(None, description="Lane the query belonged to")


class AdapterResult(BaseModel):
    """Normalized output of one adapter invocation."""

    provider: str = Field(..., description="Adapter name")
    lane: Optional[str] = Field(None, description="Lane for the batch")
    items: List[ContentItem] = Field(default_factory=list, description="Normalized items")
    query_errors: List[QueryError] = Field(default_factory=list, description="Per-query failures")
    queries_attempted: int = Field(0, description="Number of queries tried")

    @property
    def success(self) -> bool:
        return not self.query_errors
