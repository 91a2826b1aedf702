"""Ingestion run lifecycle tracking."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional, Sequence, Tuple, TypeVar

import pendulum

from ..models import IngestionRun, RunCounters, RunStatus
from .store import CorpusStore

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RunTracker:
    """Create run records before work starts and finalize them exactly once."""

    def __init__(self, store: CorpusStore) -> None:
        self.store = store

    async def start(self, provider: str, queries: Sequence[str]) -> IngestionRun:
        """
        Persist a pending run.

        Called before any network call, so a crash mid-run leaves a
        visible pending record.
        """
        run = IngestionRun(
            provider=provider,
            queries=list(queries),
            status=RunStatus.PENDING,
            started_at=pendulum.now("UTC"),
        )
        return await asyncio.to_thread(self.store.create_run, run)

    async def finalize(
        self,
        run: IngestionRun,
        counters: RunCounters,
        meta: Optional[Dict[str, Any]] = None,
        status: Optional[RunStatus] = None,
    ) -> IngestionRun:
        """
        Record terminal counters and status.

        A failed write is logged and swallowed; the caller's outcome is
        never replaced by a bookkeeping error.
        """
        if run.is_finalized:
            logger.warning("Run %s already finalized as %s", run.id, run.status.value)
            return run

        finished_at = pendulum.now("UTC")
        started_at = pendulum.instance(run.started_at)
        fields: Dict[str, Any] = {
            "status": status or counters.status(),
            "finished_at": finished_at,
            "fetched": counters.fetched,
            "saved": counters.saved,
            "skipped": counters.skipped,
            "errors": counters.errors,
            "duration_ms": max(0, int((finished_at - started_at).total_seconds() * 1000)),
            "meta": {**run.meta, **(meta or {})},
        }
        finalized = run.model_copy(update=fields)

        try:
            await asyncio.to_thread(self.store.update_run, run.id, fields)
        except Exception as e:
            logger.error("Failed to finalize run %s: %s", run.id, e)
        return finalized


async def track_run(
    tracker: RunTracker,
    provider: str,
    queries: Sequence[str],
    work: Callable[[IngestionRun], Awaitable[Tuple[T, RunCounters, Dict[str, Any]]]],
) -> Tuple[T, IngestionRun]:
    """
    Run ``work`` inside a tracked run.

    ``work`` returns ``(result, counters, meta)``. Any exception it raises
    finalizes the run as failed with one error, then propagates unchanged.
    Cancellation is finalized the same way before it propagates.
    """
    run = await tracker.start(provider, queries)
    try:
        result, counters, meta = await work(run)
    except asyncio.CancelledError:
        await asyncio.shield(
            tracker.finalize(
                run,
                RunCounters(errors=1),
                meta={"error": "cancelled"},
                status=RunStatus.FAILED,
            )
        )
        raise
    except Exception as e:
        await tracker.finalize(
            run,
            RunCounters(errors=1),
            meta={"error": str(e) or type(e).__name__},
            status=RunStatus.FAILED,
        )
        raise

    finalized = await tracker.finalize(run, counters, meta)
    return result, finalized
