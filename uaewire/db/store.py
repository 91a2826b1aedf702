"""Corpus store contract and backend selection."""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, NamedTuple, Optional

from ..config import Config
from ..models import ActiveImage, CandidatePhoto, CorpusDocument, IngestionRun

logger = logging.getLogger(__name__)


class UpsertOutcome(NamedTuple):
    document_id: int
    inserted: bool


class CorpusStore(ABC):
    """
    Persistence for corpus documents, run records and place images.

    Implementations are synchronous; async callers go through
    ``asyncio.to_thread``. Failures raise ``PersistenceError``.
    """

    @abstractmethod
    def upsert_document(self, document: CorpusDocument) -> UpsertOutcome:
        """Insert by content hash, or overwrite the existing row (last write wins)."""

    @abstractmethod
    def create_run(self, run: IngestionRun) -> IngestionRun:
        """Persist a new run and return it with its id."""

    @abstractmethod
    def get_run(self, run_id: int) -> Optional[IngestionRun]:
        pass

    @abstractmethod
    def update_run(self, run_id: int, fields: Dict[str, Any]) -> None:
        pass

    @abstractmethod
    def recent_runs(self, limit: int = 10) -> List[IngestionRun]:
        """Most recently started runs first."""

    @abstractmethod
    def get_active_image(self, slug: str) -> Optional[ActiveImage]:
        pass

    @abstractmethod
    def replace_active_image(self, image: ActiveImage) -> None:
        pass

    @abstractmethod
    def replace_candidates(self, slug: str, candidates: List[CandidatePhoto]) -> None:
        """Drop all stored candidates for the slug and store these instead."""

    @abstractmethod
    def get_candidates(self, slug: str) -> List[CandidatePhoto]:
        pass

    def close(self) -> None:
        return None


def open_store(config: Config) -> CorpusStore:
    """Postgres when configured with credentials, otherwise in-memory."""
    if config.use_postgres():
        from .postgres import PostgresStore

        logger.info("Using Postgres store at %s", config.config.postgres.host)
        return PostgresStore(config.get_db_config())

    from .memory import InMemoryStore

    logger.info("Postgres not configured, using in-memory store")
    return InMemoryStore()
