"""Postgres-backed corpus store."""

from typing import Any, Dict, List, Optional

import psycopg
from psycopg.types.json import Jsonb

from ..errors import PersistenceError
from ..models import ActiveImage, CandidatePhoto, CorpusDocument, IngestionRun, PhotoProvider
from .connection import close_pool, get_connection
from .store import CorpusStore, UpsertOutcome

RUN_COLUMNS = {
    "status", "finished_at", "fetched", "saved", "skipped", "errors", "duration_ms", "meta", "queries",
}
JSON_COLUMNS = {"meta", "queries"}


class PostgresStore(CorpusStore):
    """Store documents, runs and place images in Postgres."""

    def __init__(self, db_config: Dict[str, Any]) -> None:
        self.db_config = db_config

    def close(self) -> None:
        close_pool()

    def upsert_document(self, document: CorpusDocument) -> UpsertOutcome:
        try:
            with get_connection(self.db_config) as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        INSERT INTO documents (
                            content_hash, source, title, content, summary, url,
                            tags, category, image_url, published_at, metadata
                        )
                        VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                        ON CONFLICT (content_hash) DO UPDATE SET
                            title = EXCLUDED.title,
                            content = EXCLUDED.content,
                            summary = EXCLUDED.summary,
                            url = EXCLUDED.url,
                            tags = EXCLUDED.tags,
                            category = EXCLUDED.category,
                            image_url = COALESCE(EXCLUDED.image_url, documents.image_url),
                            published_at = EXCLUDED.published_at,
                            metadata = EXCLUDED.metadata
                        RETURNING id, (xmax = 0) AS inserted
                        """,
                        (
                            document.content_hash,
                            document.source,
                            document.title,
                            document.content,
                            document.summary,
                            document.url,
                            Jsonb(document.tags),
                            document.category,
                            document.image_url,
                            document.published_at,
                            Jsonb(document.metadata),
                        ),
                    )
                    row = cur.fetchone()
                conn.commit()
        except psycopg.Error as e:
            raise PersistenceError(f"Failed to upsert document {document.content_hash[:12]}: {e}") from e
        return UpsertOutcome(row["id"], bool(row["inserted"]))

    def create_run(self, run: IngestionRun) -> IngestionRun:
        try:
            with get_connection(self.db_config) as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        INSERT INTO ingestion_runs (provider, queries, status, started_at, meta)
                        VALUES (%s, %s, %s, %s, %s)
                        RETURNING id, created_at
                        """,
                        (run.provider, Jsonb(run.queries), run.status.value, run.started_at, Jsonb(run.meta)),
                    )
                    row = cur.fetchone()
                conn.commit()
        except psycopg.Error as e:
            raise PersistenceError(f"Failed to create run: {e}") from e
        return run.model_copy(update={"id": row["id"], "created_at": row["created_at"]})

    def get_run(self, run_id: int) -> Optional[IngestionRun]:
        try:
            with get_connection(self.db_config) as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT * FROM ingestion_runs WHERE id = %s", (run_id,))
                    row = cur.fetchone()
        except psycopg.Error as e:
            raise PersistenceError(f"Failed to load run {run_id}: {e}") from e
        return IngestionRun(**row) if row else None

    def update_run(self, run_id: int, fields: Dict[str, Any]) -> None:
        unknown = set(fields) - RUN_COLUMNS
        if unknown:
            raise ValueError(f"Unknown run columns: {sorted(unknown)}")

        assignments = []
        values = []
        for column, value in fields.items():
            if column in JSON_COLUMNS:
                value = Jsonb(value)
            elif hasattr(value, "value"):
                value = value.value
            assignments.append(f"{column} = %s")
            values.append(value)

        try:
            with get_connection(self.db_config) as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        f"UPDATE ingestion_runs SET {', '.join(assignments)} WHERE id = %s",
                        (*values, run_id),
                    )
                conn.commit()
        except psycopg.Error as e:
            raise PersistenceError(f"Failed to update run {run_id}: {e}") from e

    def recent_runs(self, limit: int = 10) -> List[IngestionRun]:
        try:
            with get_connection(self.db_config) as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        "SELECT * FROM ingestion_runs ORDER BY started_at DESC, id DESC LIMIT %s",
                        (limit,),
                    )
                    rows = cur.fetchall()
        except psycopg.Error as e:
            raise PersistenceError(f"Failed to list runs: {e}") from e
        return [IngestionRun(**row) for row in rows]

    def get_active_image(self, slug: str) -> Optional[ActiveImage]:
        try:
            with get_connection(self.db_config) as conn:
                with conn.cursor() as cur:
                    cur.execute("SELECT * FROM place_image_selected WHERE place_slug = %s", (slug,))
                    row = cur.fetchone()
        except psycopg.Error as e:
            raise PersistenceError(f"Failed to load active image for {slug}: {e}") from e
        return ActiveImage(**row) if row else None

    def replace_active_image(self, image: ActiveImage) -> None:
        try:
            with get_connection(self.db_config) as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        """
                        INSERT INTO place_image_selected (place_slug, image_url, score, source, updated_at)
                        VALUES (%s, %s, %s, %s, COALESCE(%s, CURRENT_TIMESTAMP))
                        ON CONFLICT (place_slug) DO UPDATE SET
                            image_url = EXCLUDED.image_url,
                            score = EXCLUDED.score,
                            source = EXCLUDED.source,
                            updated_at = EXCLUDED.updated_at
                        """,
                        (image.place_slug, image.image_url, image.score, Jsonb(image.source), image.updated_at),
                    )
                conn.commit()
        except psycopg.Error as e:
            raise PersistenceError(f"Failed to store active image for {image.place_slug}: {e}") from e

    def replace_candidates(self, slug: str, candidates: List[CandidatePhoto]) -> None:
        try:
            with get_connection(self.db_config) as conn:
                with conn.transaction():
                    with conn.cursor() as cur:
                        cur.execute("DELETE FROM place_image_candidates WHERE place_slug = %s", (slug,))
                        for photo in candidates:
                            cur.execute(
                                """
                                INSERT INTO place_image_candidates (
                                    place_slug, provider, provider_ref, image_url,
                                    width, height, score, attribution, is_active
                                )
                                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
                                """,
                                (
                                    slug,
                                    photo.provider.value,
                                    photo.provider_ref,
                                    photo.image_url,
                                    photo.width,
                                    photo.height,
                                    photo.score,
                                    Jsonb(_attribution(photo)),
                                    photo.is_active,
                                ),
                            )
        except psycopg.Error as e:
            raise PersistenceError(f"Failed to store candidates for {slug}: {e}") from e

    def get_candidates(self, slug: str) -> List[CandidatePhoto]:
        try:
            with get_connection(self.db_config) as conn:
                with conn.cursor() as cur:
                    cur.execute(
                        "SELECT * FROM place_image_candidates WHERE place_slug = %s ORDER BY score DESC, id",
                        (slug,),
                    )
                    rows = cur.fetchall()
        except psycopg.Error as e:
            raise PersistenceError(f"Failed to load candidates for {slug}: {e}") from e
        return [_candidate_from_row(row) for row in rows]


def _attribution(photo: CandidatePhoto) -> Dict[str, Any]:
    return {
        "photographer": photo.photographer,
        "photographer_url": photo.photographer_url,
        "source_url": photo.source_url,
        "attribution_text": photo.attribution_text,
        "likes": photo.likes,
        "verified": photo.verified,
    }


def _candidate_from_row(row: Dict[str, Any]) -> CandidatePhoto:
    attribution = row.get("attribution") or {}
    return CandidatePhoto(
        provider=PhotoProvider(row["provider"]),
        provider_ref=row["provider_ref"],
        image_url=row["image_url"],
        width=row["width"],
        height=row["height"],
        score=row["score"],
        is_active=row["is_active"],
        likes=attribution.get("likes", 0),
        verified=attribution.get("verified", False),
        photographer=attribution.get("photographer"),
        photographer_url=attribution.get("photographer_url"),
        source_url=attribution.get("source_url"),
        attribution_text=attribution.get("attribution_text"),
    )
