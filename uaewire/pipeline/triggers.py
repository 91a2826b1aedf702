"""Authenticated entry points for scheduled and manual invocations.

Every trigger checks the shared secret first, validates its payload
second, and only then touches the network or the store.
"""

import hmac
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

import httpx
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from ..config import Config
from ..config.places import PLACE_QUERIES
from ..db.store import CorpusStore
from ..errors import AuthorizationFailure, ProviderExhaustedError, ValidationFailure
from ..models import Category, PhotoProvider
from ..photos import GooglePlacesSource, PhotoCurator, PhotoScorer, PhotoSource, UnsplashSource
from .orchestrator import PROVIDERS, IngestionOptions, IngestionPipeline

logger = logging.getLogger(__name__)

MONTH_PATTERN = r"^\d{4}-(0[1-9]|1[0-2])$"
SLUG_PATTERN = r"^[a-z0-9-]+$"


def _clean_queries(v: Optional[List[str]]) -> Optional[List[str]]:
    if v is None:
        return v
    cleaned = [q.strip() for q in v]
    if any(not q for q in cleaned):
        raise ValueError("queries must be non-empty strings")
    if any(len(q) > 200 for q in cleaned):
        raise ValueError("queries must be at most 200 characters")
    return cleaned


class IngestRequest(BaseModel):
    """Payload for a news ingestion run."""

    queries: Optional[List[str]] = Field(None, min_length=1, max_length=20)
    providers: List[str] = Field(default_factory=lambda: list(PROVIDERS), min_length=1)
    result_cap: Optional[int] = Field(None, ge=1, le=100)
    category: Optional[Category] = None
    month: Optional[str] = Field(None, pattern=MONTH_PATTERN)
    enrich_limit: int = Field(20, ge=0, le=50)

    @field_validator("queries")
    @classmethod
    def check_queries(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _clean_queries(v)

    @field_validator("providers")
    @classmethod
    def check_providers(cls, v: List[str]) -> List[str]:
        unknown = [p for p in v if p not in PROVIDERS]
        if unknown:
            raise ValueError(f"unknown providers: {', '.join(unknown)}")
        return list(dict.fromkeys(v))


class CurateTarget(BaseModel):
    slug: str = Field(..., max_length=80, pattern=SLUG_PATTERN)
    queries: Optional[List[str]] = Field(None, min_length=1, max_length=5)

    @field_validator("queries")
    @classmethod
    def check_queries(cls, v: Optional[List[str]]) -> Optional[List[str]]:
        return _clean_queries(v)


class CurateRequest(CurateTarget):
    """Payload for curating one place."""

    top_n: int = Field(3, ge=1, le=5)
    providers: List[PhotoProvider] = Field(
        default_factory=lambda: list(PhotoProvider), min_length=1
    )
    set_active: bool = True


class CurateBatchRequest(BaseModel):
    """Payload for curating several places; ``all`` expands to the registry."""

    items: Optional[List[CurateTarget]] = Field(None, min_length=1)
    all: bool = False
    top_n: int = Field(3, ge=1, le=5)
    providers: List[PhotoProvider] = Field(
        default_factory=lambda: list(PhotoProvider), min_length=1
    )
    set_active: bool = True

    @model_validator(mode="after")
    def check_targets(self) -> "CurateBatchRequest":
        if not self.items and not self.all:
            raise ValueError("either items or all=true is required")
        return self


class TriggerResponse(BaseModel):
    """HTTP-style result of a trigger invocation."""

    status_code: int
    body: Dict[str, Any] = Field(default_factory=dict)


def authorize(token: Optional[str], expected: Optional[str]) -> None:
    """Constant-time shared-secret check; no configured secret rejects everything."""
    if not expected or not token:
        raise AuthorizationFailure("Unauthorized")
    if not hmac.compare_digest(token.encode("utf-8"), expected.encode("utf-8")):
        raise AuthorizationFailure("Unauthorized")


def _validate(model: type, payload: Union[BaseModel, Mapping[str, Any], None]) -> Any:
    if isinstance(payload, model):
        return payload
    try:
        if isinstance(payload, BaseModel):
            return model.model_validate(payload.model_dump())
        return model.model_validate(payload or {})
    except ValidationError as e:
        raise ValidationFailure(_describe(e)) from e


def _describe(error: ValidationError) -> str:
    parts = []
    for detail in error.errors():
        location = ".".join(str(p) for p in detail["loc"]) or "payload"
        parts.append(f"{location}: {detail['msg']}")
    return "; ".join(parts)


def photo_sources(config: Config, providers: List[PhotoProvider]) -> List[PhotoSource]:
    """Configured photo sources, restricted to the requested providers."""
    curation = config.config.curation
    sources: List[PhotoSource] = []
    if PhotoProvider.GOOGLE_PLACES in providers:
        sources.append(GooglePlacesSource(config.google_places_key(), max_photos=curation.max_place_photos))
    if PhotoProvider.UNSPLASH in providers:
        sources.append(UnsplashSource(config.unsplash_key(), per_query=curation.per_query))
    return sources


def build_curator(
    config: Config,
    store: CorpusStore,
    providers: List[PhotoProvider],
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> PhotoCurator:
    return PhotoCurator(
        photo_sources(config, providers),
        store,
        scorer=PhotoScorer(config.config.scoring),
        config=config.config.curation,
        transport=transport,
    )


def _error(status_code: int, message: str, **extra: Any) -> TriggerResponse:
    return TriggerResponse(status_code=status_code, body={"success": False, "error": message, **extra})


class Triggers:
    """Entry points bound to one config and one store."""

    def __init__(
        self,
        config: Config,
        store: CorpusStore,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.config = config
        self.store = store
        self.transport = transport

    async def ingest_news(
        self, token: Optional[str], payload: Union[IngestRequest, Mapping[str, Any], None] = None
    ) -> TriggerResponse:
        try:
            authorize(token, self.config.admin_secret())
            request: IngestRequest = _validate(IngestRequest, payload)
        except (AuthorizationFailure, ValidationFailure) as e:
            return _error(e.status_code, str(e))

        pipeline = IngestionPipeline(self.config, self.store, transport=self.transport)
        try:
            summary = await pipeline.run(IngestionOptions(**request.model_dump()))
        except Exception as e:
            logger.exception("News ingestion failed")
            return _error(500, str(e) or type(e).__name__)

        body = {"success": summary.status != "failed", **summary.model_dump(mode="json")}
        return TriggerResponse(status_code=200, body=body)

    async def curate_place(
        self, token: Optional[str], payload: Union[CurateRequest, Mapping[str, Any], None] = None
    ) -> TriggerResponse:
        try:
            authorize(token, self.config.admin_secret())
            request: CurateRequest = _validate(CurateRequest, payload)
        except (AuthorizationFailure, ValidationFailure) as e:
            return _error(e.status_code, str(e))

        curator = build_curator(self.config, self.store, request.providers, self.transport)
        try:
            result = await curator.curate(
                request.slug, request.queries, top_n=request.top_n, set_active=request.set_active
            )
        except ProviderExhaustedError as e:
            return _error(e.status_code, str(e), provider=e.provider, slug=request.slug)
        except Exception as e:
            logger.exception("Curation failed for %s", request.slug)
            return _error(500, str(e) or type(e).__name__, slug=request.slug)

        body = result.model_dump(mode="json")
        return TriggerResponse(status_code=200 if result.success else 404, body=body)

    async def curate_batch(
        self, token: Optional[str], payload: Union[CurateBatchRequest, Mapping[str, Any], None] = None
    ) -> TriggerResponse:
        try:
            authorize(token, self.config.admin_secret())
            request: CurateBatchRequest = _validate(CurateBatchRequest, payload)
        except (AuthorizationFailure, ValidationFailure) as e:
            return _error(e.status_code, str(e))

        if request.all:
            targets = [(slug, None) for slug in PLACE_QUERIES]
        else:
            targets = [(item.slug, item.queries) for item in request.items]

        curator = build_curator(self.config, self.store, request.providers, self.transport)
        try:
            batch = await curator.curate_batch(targets, top_n=request.top_n, set_active=request.set_active)
        except Exception as e:
            logger.exception("Batch curation failed")
            return _error(500, str(e) or type(e).__name__)

        body = {
            "success": batch.exhausted is None and batch.succeeded == len(batch.results),
            "processed": len(batch.results),
            "succeeded": batch.succeeded,
            "results": [r.model_dump(mode="json") for r in batch.results],
            "remaining": batch.remaining,
        }
        if batch.exhausted:
            body["error"] = f"{batch.exhausted} rate limit reached"
            return TriggerResponse(status_code=429, body=body)
        return TriggerResponse(status_code=200, body=body)
