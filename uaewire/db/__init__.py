"""Persistence layer."""

from .gateway import PersistenceGateway, SaveResult, to_document
from .memory import InMemoryStore
from .runs import RunTracker, track_run
from .store import CorpusStore, UpsertOutcome, open_store

__all__ = [
    "CorpusStore",
    "InMemoryStore",
    "PersistenceGateway",
    "RunTracker",
    "SaveResult",
    "UpsertOutcome",
    "open_store",
    "to_document",
    "track_run",
]
