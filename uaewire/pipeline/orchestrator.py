"""News ingestion pipeline: fan out, filter, dedup, tag, enrich, persist."""

import logging
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

import httpx
from pydantic import BaseModel, Field

from ..concurrency import gather_settled
from ..config import Config
from ..config.keyword_pack import GOOGLE_EN, NAVER_KO
from ..db import PersistenceGateway, RunTracker, track_run
from ..db.store import CorpusStore
from ..ingestion import (
    AdapterResult,
    GoogleNewsAdapter,
    NaverNewsAdapter,
    PreviewEnricher,
    QueryError,
    SourceAdapter,
    backfill_suffix,
)
from ..models import Category, ContentItem, IngestionRun, Lane, RunCounters
from ..processing import deduplicate, filter_noise, tag_batch

logger = logging.getLogger(__name__)

PROVIDERS = ("google", "naver")


class PipelineStage:
    """Represents a pipeline stage."""

    def __init__(self, name: str, description: str):
        self.name = name
        self.description = description
        self.start_time: Optional[float] = None
        self.end_time: Optional[float] = None
        self.success = False
        self.error: Optional[str] = None
        self.stats: Dict = {}

    def start(self):
        self.start_time = time.time()

    def complete(self, stats: Optional[Dict] = None):
        self.end_time = time.time()
        self.success = True
        if stats:
            self.stats.update(stats)

    def fail(self, error: str):
        self.end_time = time.time()
        self.success = False
        self.error = error

    @property
    def duration(self) -> float:
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    def as_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "success": self.success,
            "duration": round(self.duration, 3),
            "error": self.error,
            "stats": self.stats,
        }


class IngestionOptions(BaseModel):
    """Per-invocation overrides; validated upstream by the trigger layer."""

    queries: Optional[List[str]] = Field(None, description="Custom queries, no lane")
    providers: List[str] = Field(default_factory=lambda: list(PROVIDERS))
    result_cap: Optional[int] = Field(None, description="Items per query")
    category: Optional[Category] = Field(None, description="Forced corpus category")
    month: Optional[str] = Field(None, description="YYYY-MM backfill window for Google")
    enrich_limit: Optional[int] = Field(None, description="Items enriched with preview images")


class IngestionSummary(BaseModel):
    """Outcome of one pipeline invocation."""

    run_id: Optional[int] = None
    status: str = "pending"
    fetched: int = 0
    saved: int = 0
    skipped: int = 0
    errors: int = 0
    enriched: int = 0
    unenriched: int = 0
    query_errors: List[QueryError] = Field(default_factory=list)
    duration_ms: Optional[int] = None
    stages: List[Dict[str, Any]] = Field(default_factory=list)


@dataclass
class Branch:
    """One adapter invocation: a provider/locale over one lane's queries."""

    label: str
    adapter: SourceAdapter
    queries: List[str]
    lane: Optional[Lane]
    result_cap: int


class IngestionPipeline:
    """Orchestrates one bounded fetch-and-save run."""

    def __init__(
        self,
        config: Config,
        store: CorpusStore,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        enricher: Optional[PreviewEnricher] = None,
    ):
        self.config = config
        self.settings = config.config.pipeline
        self.store = store
        self.transport = transport
        self.tracker = RunTracker(store)
        self.gateway = PersistenceGateway(store)
        self.enricher = enricher or PreviewEnricher(
            resolve_timeout=self.settings.resolve_timeout,
            fetch_timeout=self.settings.enrich_timeout,
            batch_size=self.settings.enrich_batch_size,
            pacing=self.settings.batch_pacing,
            transport=transport,
        )
        self.stages: List[PipelineStage] = []

    def _adapter(self, provider: str, locale: str = "en") -> SourceAdapter:
        common = dict(
            timeout=self.settings.fetch_timeout,
            pacing=self.settings.query_pacing,
            transport=self.transport,
        )
        if provider == "google":
            return GoogleNewsAdapter(locale=locale, user_agent=self.config.config.providers.user_agent, **common)
        if provider == "naver":
            return NaverNewsAdapter(self.config.naver_credentials(), **common)
        raise ValueError(f"Unknown provider: {provider}")

    def plan(self, options: IngestionOptions) -> List[Branch]:
        """Branches for a run: custom queries per provider, or every lane of the keyword pack."""
        suffix = backfill_suffix(options.month) if options.month else ""
        branches: List[Branch] = []

        if options.queries:
            cap = options.result_cap or 5
            for provider in options.providers:
                queries = list(options.queries)
                if provider == "google":
                    queries = [q + suffix for q in queries]
                branches.append(Branch(provider, self._adapter(provider), queries, None, cap))
            return branches

        cap = options.result_cap or self.settings.default_result_cap
        if "google" in options.providers:
            for lane, queries in GOOGLE_EN.items():
                branches.append(
                    Branch(f"google-en:{lane}", self._adapter("google"), [q + suffix for q in queries], Lane(lane), cap)
                )
            for lane, queries in NAVER_KO.items():
                branches.append(
                    Branch(
                        f"google-ko:{lane}", self._adapter("google", "ko"), [q + suffix for q in queries], Lane(lane), cap
                    )
                )
        if "naver" in options.providers:
            for lane, queries in NAVER_KO.items():
                branches.append(Branch(f"naver:{lane}", self._adapter("naver"), list(queries), Lane(lane), cap))
        return branches

    async def fetch(self, branches: Sequence[Branch]) -> Tuple[List[ContentItem], List[QueryError]]:
        """
        Run all branches concurrently.

        Each branch stops issuing queries at ``branch_timeout`` and keeps what it
        already fetched. The outer timeout only catches a branch that hangs
        outside its queries; such a branch contributes no items.
        """
        deadline = self.settings.branch_timeout
        outcomes = await gather_settled(
            [
                b.adapter.search(b.queries, lane=b.lane, result_cap=b.result_cap, deadline=deadline)
                for b in branches
            ],
            labels=[b.label for b in branches],
            timeout=deadline + self.settings.fetch_timeout,
        )

        items: List[ContentItem] = []
        errors: List[QueryError] = []
        for branch, outcome in zip(branches, outcomes):
            if outcome.ok:
                result: AdapterResult = outcome.value
                items.extend(result.items)
                errors.extend(result.query_errors)
            else:
                logger.warning("Branch %s failed: %s", branch.label, outcome.describe_error())
                errors.append(
                    QueryError(
                        provider=branch.adapter.name,
                        query="*",
                        error=outcome.describe_error(),
                        lane=branch.lane.value if branch.lane else None,
                    )
                )
        return items, errors

    def process(self, items: Sequence[ContentItem], category: Optional[Category] = None) -> List[ContentItem]:
        """Noise filter, then near-duplicate collapse, then tagging."""
        kept = filter_noise(items, self.settings.noise_terms, self.settings.exempt_lanes)
        unique = deduplicate(kept, threshold=self.config.config.dedup.similarity_threshold)
        return tag_batch(unique, category=category)

    def _stage(self, name: str, description: str) -> PipelineStage:
        stage = PipelineStage(name, description)
        self.stages.append(stage)
        stage.start()
        return stage

    async def _execute(
        self, run: IngestionRun, options: IngestionOptions, branches: List[Branch]
    ) -> Tuple[IngestionSummary, RunCounters, Dict[str, Any]]:
        stage = self._stage("fetch", "Fetching from sources")
        items, query_errors = await self.fetch(branches)
        stage.complete({"items": len(items), "query_errors": len(query_errors), "branches": len(branches)})

        stage = self._stage("process", "Filtering, deduplicating and tagging")
        processed = self.process(items, options.category)
        stage.complete({"kept": len(processed)})

        stage = self._stage("enrich", "Fetching preview images")
        limit = self.settings.enrich_limit if options.enrich_limit is None else options.enrich_limit
        enrichment = await self.enricher.enrich(processed, limit=limit)
        stage.complete({"enriched": enrichment.enriched, "attempted": enrichment.attempted})

        stage = self._stage("persist", "Saving to corpus")
        category = options.category.value if options.category else None
        saved = await self.gateway.save_items(enrichment.items, category=category)
        stage.complete({"saved": saved.saved, "skipped": saved.skipped, "errors": saved.errors})

        counters = RunCounters(
            fetched=len(items),
            saved=saved.saved,
            skipped=saved.skipped,
            errors=len(query_errors) + saved.errors,
        )
        meta: Dict[str, Any] = {
            "query_errors": [e.model_dump() for e in query_errors],
            "save_errors": saved.error_messages,
            "enriched": enrichment.enriched,
        }
        summary = IngestionSummary(
            run_id=run.id,
            enriched=enrichment.enriched,
            unenriched=enrichment.unenriched,
            query_errors=query_errors,
        )
        return summary, counters, meta

    async def run(self, options: Optional[IngestionOptions] = None) -> IngestionSummary:
        """
        Execute one tracked run.

        Unhandled errors finalize the run as failed and propagate.
        """
        options = options or IngestionOptions()
        self.stages = []
        branches = self.plan(options)
        provider = options.providers[0] if len(options.providers) == 1 else "news-sync"
        queries = sorted({q for b in branches for q in b.queries})

        logger.info("Starting %s run: %d branches", provider, len(branches))
        summary, finalized = await track_run(
            self.tracker,
            provider,
            queries,
            lambda run: self._execute(run, options, branches),
        )
        return summary.model_copy(
            update={
                "status": finalized.status.value,
                "fetched": finalized.fetched,
                "saved": finalized.saved,
                "skipped": finalized.skipped,
                "errors": finalized.errors,
                "duration_ms": finalized.duration_ms,
                "stages": [s.as_dict() for s in self.stages],
            }
        )
