"""In-memory corpus store for local runs and tests."""

import threading
from typing import Any, Dict, List, Optional

import pendulum

from ..models import ActiveImage, CandidatePhoto, CorpusDocument, IngestionRun
from .store import CorpusStore, UpsertOutcome


class InMemoryStore(CorpusStore):
    """Dict-backed store. Safe to call from worker threads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.documents: Dict[str, CorpusDocument] = {}
        self.runs: Dict[int, IngestionRun] = {}
        self.candidates: Dict[str, List[CandidatePhoto]] = {}
        self.active_images: Dict[str, ActiveImage] = {}
        self._next_document_id = 1
        self._next_run_id = 1

    def upsert_document(self, document: CorpusDocument) -> UpsertOutcome:
        now = pendulum.now("UTC")
        with self._lock:
            existing = self.documents.get(document.content_hash)
            if existing is None:
                stored = document.model_copy(
                    update={"id": self._next_document_id, "created_at": now, "updated_at": now}
                )
                self._next_document_id += 1
                self.documents[document.content_hash] = stored
                return UpsertOutcome(stored.id, True)

            stored = document.model_copy(
                update={
                    "id": existing.id,
                    "created_at": existing.created_at,
                    "updated_at": now,
                    "image_url": document.image_url or existing.image_url,
                }
            )
            self.documents[document.content_hash] = stored
            return UpsertOutcome(stored.id, False)

    def create_run(self, run: IngestionRun) -> IngestionRun:
        with self._lock:
            stored = run.model_copy(update={"id": self._next_run_id, "created_at": pendulum.now("UTC")})
            self._next_run_id += 1
            self.runs[stored.id] = stored
            return stored

    def get_run(self, run_id: int) -> Optional[IngestionRun]:
        with self._lock:
            return self.runs.get(run_id)

    def update_run(self, run_id: int, fields: Dict[str, Any]) -> None:
        with self._lock:
            run = self.runs.get(run_id)
            if run is None:
                raise KeyError(f"Unknown run {run_id}")
            self.runs[run_id] = run.model_copy(update={**fields, "updated_at": pendulum.now("UTC")})

    def recent_runs(self, limit: int = 10) -> List[IngestionRun]:
        with self._lock:
            runs = sorted(self.runs.values(), key=lambda r: (r.started_at, r.id), reverse=True)
        return runs[:limit]

    def get_active_image(self, slug: str) -> Optional[ActiveImage]:
        with self._lock:
            return self.active_images.get(slug)

    def replace_active_image(self, image: ActiveImage) -> None:
        with self._lock:
            self.active_images[image.place_slug] = image

    def replace_candidates(self, slug: str, candidates: List[CandidatePhoto]) -> None:
        with self._lock:
            self.candidates[slug] = list(candidates)

    def get_candidates(self, slug: str) -> List[CandidatePhoto]:
        with self._lock:
            return list(self.candidates.get(slug, []))
