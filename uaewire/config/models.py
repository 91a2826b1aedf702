"""Configuration models."""

from typing import List, Optional

from pydantic import BaseModel, Field

from .keyword_pack import NOISE_TERMS


class PostgresConfig(BaseModel):
    """Postgres configuration."""

    enabled: bool = Field(False, description="Use Postgres instead of the in-memory store")
    host: str = Field("localhost", description="Database host")
    port: int = Field(5432, description="Database port")
    database: str = Field("uaewire", description="Database name")
    user: str = Field("uaewire", description="Database user")
    password: Optional[str] = Field(None, description="Database password")
    password_env: Optional[str] = Field("UAEWIRE_DB_PASSWORD", description="Environment variable for password")


class AuthConfig(BaseModel):
    """Shared-secret configuration for triggers."""

    secret_env: str = Field("UAEWIRE_ADMIN_SECRET", description="Environment variable holding the shared secret")
    fallback_env: Optional[str] = Field("CRON_SECRET", description="Secondary environment variable")


class ProvidersConfig(BaseModel):
    """Environment variable names for provider credentials."""

    naver_client_id_env: str = Field("NAVER_CLIENT_ID")
    naver_client_secret_env: str = Field("NAVER_CLIENT_SECRET")
    google_places_key_env: str = Field("GOOGLE_PLACES_API_KEY")
    unsplash_key_env: str = Field("UNSPLASH_ACCESS_KEY")
    user_agent: str = Field("Mozilla/5.0 (compatible; uaewire/0.1)", description="User agent for feeds")


class PipelineConfig(BaseModel):
    """News ingestion tunables."""

    fetch_timeout: float = Field(10.0, description="Primary fetch timeout (seconds)", gt=0)
    resolve_timeout: float = Field(5.0, description="Redirect resolution timeout", gt=0)
    enrich_timeout: float = Field(8.0, description="Preview image scrape timeout", gt=0)
    branch_timeout: float = Field(45.0, description="Ceiling for one source x lane branch", gt=0)
    query_pacing: float = Field(0.3, description="Delay between sequential queries", ge=0)
    batch_pacing: float = Field(0.5, description="Delay between enrichment batches", ge=0)
    enrich_limit: int = Field(20, description="Items enriched with preview images", ge=0, le=50)
    enrich_batch_size: int = Field(5, ge=1, le=20)
    default_result_cap: int = Field(3, description="Items per query for lane crawls", ge=1, le=100)
    noise_terms: List[str] = Field(default_factory=lambda: list(NOISE_TERMS))
    exempt_lanes: List[str] = Field(
        default_factory=lambda: ["deal", "korea_uae", "uae_local"],
        description="Lanes never dropped by the noise filter",
    )


class DedupConfig(BaseModel):
    """Near-duplicate clustering policy."""

    similarity_threshold: float = Field(0.45, ge=0.0, le=1.0)


class Tier(BaseModel):
    """Bonus granted once a measured value reaches a threshold."""

    threshold: int = Field(..., ge=0)
    bonus: float = Field(..., ge=0)


class ProviderScoring(BaseModel):
    """Additive scoring rules for one photo provider."""

    base: float = Field(..., ge=0, le=100)
    resolution_tiers: List[Tier] = Field(default_factory=list)
    popularity_tiers: List[Tier] = Field(default_factory=list)
    landscape_ratio: float = Field(1.3, gt=0)
    landscape_bonus: float = Field(5.0, ge=0)


def _google_scoring() -> ProviderScoring:
    return ProviderScoring(
        base=70,
        resolution_tiers=[Tier(threshold=2400, bonus=15), Tier(threshold=1600, bonus=8)],
    )


def _unsplash_scoring() -> ProviderScoring:
    return ProviderScoring(
        base=50,
        resolution_tiers=[Tier(threshold=2400, bonus=20), Tier(threshold=1600, bonus=10)],
        popularity_tiers=[Tier(threshold=500, bonus=10), Tier(threshold=100, bonus=5)],
    )


class ScoringConfig(BaseModel):
    """Photo scoring policy."""

    google_places: ProviderScoring = Field(default_factory=_google_scoring)
    unsplash: ProviderScoring = Field(default_factory=_unsplash_scoring)
    negative_penalty: float = Field(15.0, description="Penalty per negative keyword hit", ge=0)
    max_negative_penalty: float = Field(45.0, ge=0)


class CurationConfig(BaseModel):
    """Photo curation tunables."""

    top_n: int = Field(3, ge=1, le=5)
    max_queries: int = Field(5, ge=1, le=5)
    per_query: int = Field(8, description="Stock photos requested per query", ge=1, le=30)
    max_place_photos: int = Field(10, ge=1, le=10)
    batch_cap: int = Field(5, description="Places processed per batch invocation", ge=1)
    pacing: float = Field(0.5, description="Delay between places in a batch", ge=0)
    min_width: int = Field(1600, ge=0)
    min_height: int = Field(900, ge=0)
    fetch_timeout: float = Field(10.0, gt=0)
    tracking_timeout: float = Field(5.0, gt=0)


class ConfigModel(BaseModel):
    """Main configuration model."""

    postgres: PostgresConfig = Field(default_factory=PostgresConfig)
    auth: AuthConfig = Field(default_factory=AuthConfig)
    providers: ProvidersConfig = Field(default_factory=ProvidersConfig)
    pipeline: PipelineConfig = Field(default_factory=PipelineConfig)
    dedup: DedupConfig = Field(default_factory=DedupConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    curation: CurationConfig = Field(default_factory=CurationConfig)
