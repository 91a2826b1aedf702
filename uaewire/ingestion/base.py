"""Common source adapter behaviour."""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

import httpx

from ..concurrency import pause
from ..models import ContentItem, Lane
from .models import AdapterResult, QueryError

logger = logging.getLogger(__name__)


class SourceAdapter(ABC):
    """
    Base class for news feed adapters.

    Queries run sequentially with a pacing delay between them. A failing
    query is recorded in the result and never aborts the batch.
    """

    name: str = "base"

    def __init__(
        self,
        timeout: float = 10.0,
        pacing: float = 0.3,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout = timeout
        self.pacing = pacing
        self.transport = transport

    def _client(self, **kwargs) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self.transport, **kwargs)

    @abstractmethod
    async def fetch_query(
        self,
        client: httpx.AsyncClient,
        query: str,
        lane: Optional[Lane],
        result_cap: int,
    ) -> List[ContentItem]:
        """Fetch and normalize one query. May raise."""

    def precheck(self) -> Optional[str]:
        """Adapter-level error that prevents any query from running."""
        return None

    async def search(
        self,
        queries: Sequence[str],
        lane: Optional[Lane] = None,
        result_cap: int = 5,
        deadline: Optional[float] = None,
    ) -> AdapterResult:
        """
        Run every query and collect items plus per-query errors.

        ``deadline`` is a time budget in seconds for the whole batch. A query
        still running when it expires is cut off, queries not yet started are
        recorded as skipped, and items already fetched are kept.
        """
        lane_value = lane.value if lane else None
        result = AdapterResult(provider=self.name, lane=lane_value)

        problem = self.precheck()
        if problem:
            logger.warning("%s adapter skipped: %s", self.name, problem)
            result.query_errors.append(
                QueryError(provider=self.name, query="*", error=problem, lane=lane_value)
            )
            return result

        loop = asyncio.get_running_loop()
        expires_at = loop.time() + deadline if deadline is not None else None

        async with self._client() as client:
            for i, query in enumerate(queries):
                remaining = expires_at - loop.time() if expires_at is not None else None
                if remaining is not None and remaining <= 0:
                    for skipped in queries[i:]:
                        self._record(result, skipped, "Deadline reached before query ran", lane_value)
                    break

                result.queries_attempted += 1
                try:
                    items = await asyncio.wait_for(
                        self.fetch_query(client, query, lane, result_cap), timeout=remaining
                    )
                    result.items.extend(items)
                except (httpx.TimeoutException, asyncio.TimeoutError):
                    self._record(result, query, "Request timed out", lane_value)
                except httpx.HTTPStatusError as e:
                    self._record(result, query, f"HTTP {e.response.status_code}", lane_value)
                except Exception as e:
                    self._record(result, query, str(e) or type(e).__name__, lane_value)

                if i < len(queries) - 1:
                    await pause(self.pacing)

        logger.info(
            "%s lane=%s: %d items from %d queries (%d failed)",
            self.name,
            lane_value,
            len(result.items),
            result.queries_attempted,
            len(result.query_errors),
        )
        return result

    def _record(self, result: AdapterResult, query: str, error: str, lane: Optional[str]) -> None:
        logger.debug("%s query %r failed: %s", self.name, query, error)
        result.query_errors.append(QueryError(provider=self.name, query=query, error=error, lane=lane))


def lane_tags(query: str, lane: Optional[Lane]) -> List[str]:
    """Initial tags for an item: the query and its lane marker."""
    if lane is None:
        return [query]
    return [query, f"lane:{lane.value}"]
