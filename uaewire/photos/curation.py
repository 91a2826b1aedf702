"""Place photo curation: collect, score, gate, select, persist."""

import asyncio
import logging
from typing import Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import httpx
import pendulum
from pydantic import BaseModel, Field

from ..concurrency import gather_settled, pause
from ..config.models import CurationConfig
from ..config.places import NEGATIVE_KEYWORDS, PLACE_KEYWORDS, default_queries
from ..db.store import CorpusStore
from ..errors import ProviderExhaustedError
from ..models import ActiveImage, CandidatePhoto
from .base import PhotoSource
from .scoring import PhotoScorer, passes_relevance_gate

logger = logging.getLogger(__name__)


class CurationResult(BaseModel):
    """Outcome of curating one place."""

    slug: str
    success: bool = False
    candidates_found: int = 0
    eligible: int = 0
    selected: List[CandidatePhoto] = Field(default_factory=list)
    active_image: Optional[str] = None
    provider_counts: Dict[str, int] = Field(default_factory=dict)
    provider_errors: Dict[str, str] = Field(default_factory=dict)
    error: Optional[str] = None


class BatchResult(BaseModel):
    """Outcome of one capped batch invocation."""

    results: List[CurationResult] = Field(default_factory=list)
    remaining: List[str] = Field(default_factory=list, description="Slugs left for a later invocation")
    exhausted: Optional[str] = Field(None, description="Provider that hit its rate limit")

    @property
    def succeeded(self) -> int:
        return sum(1 for r in self.results if r.success)


def dedupe_candidates(candidates: Iterable[CandidatePhoto]) -> List[CandidatePhoto]:
    """First occurrence per (provider, provider_ref)."""
    seen = set()
    unique = []
    for photo in candidates:
        key = (photo.provider, photo.provider_ref)
        if key in seen:
            continue
        seen.add(key)
        unique.append(photo)
    return unique


def filter_min_dimensions(
    candidates: List[CandidatePhoto], min_width: int, min_height: int
) -> List[CandidatePhoto]:
    """Drop small photos, unless that would drop all of them."""
    large = [p for p in candidates if p.width >= min_width and p.height >= min_height]
    return large or list(candidates)


def rank_candidates(candidates: Sequence[CandidatePhoto]) -> List[CandidatePhoto]:
    """Score desc, then width desc, then likes desc, then input order."""
    indexed = list(enumerate(candidates))
    indexed.sort(key=lambda pair: (-pair[1].score, -pair[1].width, -pair[1].likes, pair[0]))
    return [photo for _, photo in indexed]


class PhotoCurator:
    """Pick hero images for places from several photo providers."""

    def __init__(
        self,
        sources: Sequence[PhotoSource],
        store: CorpusStore,
        scorer: Optional[PhotoScorer] = None,
        config: Optional[CurationConfig] = None,
        place_keywords: Optional[Mapping[str, List[str]]] = None,
        negative_keywords: Optional[Sequence[str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.sources = list(sources)
        self.store = store
        self.scorer = scorer or PhotoScorer()
        self.config = config or CurationConfig()
        self.place_keywords = place_keywords if place_keywords is not None else PLACE_KEYWORDS
        self.negative_keywords = negative_keywords if negative_keywords is not None else NEGATIVE_KEYWORDS
        self.transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            timeout=self.config.fetch_timeout,
            transport=self.transport,
            follow_redirects=True,
        )

    async def collect(
        self, client: httpx.AsyncClient, slug: str, queries: Sequence[str]
    ) -> Tuple[List[CandidatePhoto], Dict[str, int], Dict[str, str]]:
        """
        Query every configured provider concurrently.

        Raises:
            ProviderExhaustedError: if any provider reports a rate limit
        """
        counts: Dict[str, int] = {}
        errors: Dict[str, str] = {}
        active = []
        for source in self.sources:
            problem = source.precheck()
            if problem:
                errors[source.provider.value] = problem
            else:
                active.append(source)

        settled = await gather_settled(
            [source.candidates(client, slug, queries) for source in active],
            labels=[source.provider.value for source in active],
        )

        candidates: List[CandidatePhoto] = []
        for outcome in settled:
            if isinstance(outcome.error, ProviderExhaustedError):
                raise outcome.error
            if not outcome.ok:
                logger.warning("Provider %s failed for %s: %s", outcome.label, slug, outcome.describe_error())
                errors[outcome.label] = outcome.describe_error()
                continue
            counts[outcome.label] = len(outcome.value)
            candidates.extend(outcome.value)

        return dedupe_candidates(candidates), counts, errors

    def select(
        self, slug: str, candidates: Sequence[CandidatePhoto], top_n: int, set_active: bool = True
    ) -> Tuple[List[CandidatePhoto], int]:
        """
        Score, gate and rank candidates; returns the top N and the eligible count.

        The first pick is flagged active only when it will become the hero image.
        """
        must_include = self.place_keywords.get(slug, [])
        scored = []
        for photo in candidates:
            if not passes_relevance_gate(photo, must_include):
                continue
            score = self.scorer.score(photo) - self.scorer.negative_penalty(photo, self.negative_keywords)
            scored.append(photo.model_copy(update={"score": max(0.0, score)}))

        eligible = filter_min_dimensions(scored, self.config.min_width, self.config.min_height)
        ranked = rank_candidates(eligible)[:top_n]
        selected = [
            photo.model_copy(update={"is_active": set_active and index == 0})
            for index, photo in enumerate(ranked)
        ]
        return selected, len(eligible)

    async def curate(
        self,
        slug: str,
        queries: Optional[Sequence[str]] = None,
        top_n: Optional[int] = None,
        set_active: bool = True,
    ) -> CurationResult:
        """
        Curate one place and persist the outcome.

        Previous candidates for the slug are replaced; the active image is
        replaced only when ``set_active`` is true and something was selected.
        """
        queries = list(queries or default_queries(slug))[: self.config.max_queries]
        top_n = top_n or self.config.top_n
        result = CurationResult(slug=slug)

        async with self._client() as client:
            candidates, result.provider_counts, result.provider_errors = await self.collect(
                client, slug, queries
            )
            result.candidates_found = len(candidates)

            selected, result.eligible = self.select(slug, candidates, top_n, set_active)
            if not selected:
                result.error = "No suitable photos found"
                logger.info("No suitable photos for %s (%d candidates)", slug, len(candidates))
                return result

            await asyncio.to_thread(self.store.replace_candidates, slug, selected)
            hero = selected[0]
            if set_active:
                await asyncio.to_thread(self.store.replace_active_image, self._active_image(slug, hero))
                result.active_image = hero.image_url

            await self._track(client, selected)

        result.selected = selected
        result.success = True
        logger.info("Curated %s: %d selected, top score %.0f", slug, len(selected), hero.score)
        return result

    async def _track(self, client: httpx.AsyncClient, selected: Sequence[CandidatePhoto]) -> None:
        by_provider = {source.provider: source for source in self.sources}
        tracking = [
            asyncio.wait_for(by_provider[photo.provider].track_selection(client, photo), self.config.tracking_timeout)
            for photo in selected
            if photo.provider in by_provider
        ]
        for outcome in await gather_settled(tracking):
            if not outcome.ok:
                logger.debug("Selection tracking failed: %s", outcome.describe_error())

    def _active_image(self, slug: str, photo: CandidatePhoto) -> ActiveImage:
        return ActiveImage(
            place_slug=slug,
            image_url=photo.image_url,
            score=photo.score,
            source={
                "provider": photo.provider.value,
                "provider_ref": photo.provider_ref,
                "photographer": photo.photographer,
                "photographer_url": photo.photographer_url,
                "source_url": photo.source_url,
                "attribution_text": photo.attribution_text,
            },
            updated_at=pendulum.now("UTC"),
        )

    async def curate_batch(
        self,
        targets: Sequence[Tuple[str, Optional[Sequence[str]]]],
        top_n: Optional[int] = None,
        set_active: bool = True,
    ) -> BatchResult:
        """
        Curate up to ``batch_cap`` places sequentially with pacing.

        A rate-limited provider stops the batch; the current and all later
        slugs are reported as remaining.
        """
        cap = self.config.batch_cap
        batch = BatchResult(remaining=[slug for slug, _ in targets[cap:]])
        current = list(targets[:cap])

        for index, (slug, queries) in enumerate(current):
            if index > 0:
                await pause(self.config.pacing)
            try:
                result = await self.curate(slug, queries, top_n=top_n, set_active=set_active)
            except ProviderExhaustedError as e:
                logger.warning("Provider %s exhausted at %s, stopping batch", e.provider, slug)
                batch.exhausted = e.provider
                batch.remaining = [s for s, _ in current[index:]] + batch.remaining
                break
            except Exception as e:
                logger.error("Curation failed for %s: %s", slug, e)
                result = CurationResult(slug=slug, error=str(e) or type(e).__name__)
            batch.results.append(result)

        return batch
