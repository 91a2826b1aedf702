"""Pipeline orchestration and trigger entry points."""

from .orchestrator import IngestionOptions, IngestionPipeline, IngestionSummary, PipelineStage
from .triggers import (
    CurateBatchRequest,
    CurateRequest,
    IngestRequest,
    TriggerResponse,
    Triggers,
    authorize,
    build_curator,
)

__all__ = [
    "CurateBatchRequest",
    "CurateRequest",
    "IngestRequest",
    "IngestionOptions",
    "IngestionPipeline",
    "IngestionSummary",
    "PipelineStage",
    "TriggerResponse",
    "Triggers",
    "authorize",
    "build_curator",
]
