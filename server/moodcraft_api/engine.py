"""Per-process wiring of the mood engine: backend, store, service and change feed."""
import logging
import os
from dataclasses import dataclass
from functools import partial

from fastapi import Request

from mood_engine.classifier import classify
from mood_engine.service import EntryService
from mood_engine.storage import JsonFileBackend, MemoryBackend, SqliteBackend, StorageBackend
from mood_engine.store import EntryStore

from .config import Settings
from .services.change_feed import ChangeFeed

log = logging.getLogger(__name__)


@dataclass
class MoodEngine:
    """
    One store, one service and one change feed per process.

    Routes receive this through the `get_engine` dependency instead of
    importing module-level singletons, so tests can build their own.
    """

    settings: Settings
    store: EntryStore
    service: EntryService
    feed: ChangeFeed

    def close(self) -> None:
        self.feed.detach()


def build_backend(settings: Settings) -> StorageBackend:
    """Create the storage backend selected by settings."""
    if settings.storage_backend == "memory":
        return MemoryBackend()
    os.makedirs(settings.data_path, exist_ok=True)
    if settings.storage_backend == "sqlite":
        return SqliteBackend(settings.sqlite_db_path)
    return JsonFileBackend(settings.data_path)


def build_engine(settings: Settings, backend: StorageBackend | None = None) -> MoodEngine:
    """
    Wire the engine for one process.

    Args:
        settings: Application settings
        backend: Optional backend override (tests pass a MemoryBackend)
    """
    backend = backend or build_backend(settings)
    store = EntryStore(backend, key=settings.history_key)
    service = EntryService(
        store,
        classifier=partial(classify, match_mode=settings.keyword_match_mode),
    )
    feed = ChangeFeed()
    feed.attach(store)

    log.info(
        f"[ENGINE] Using {settings.storage_backend} storage for '{settings.history_key}' "
        f"(keyword matching: {settings.keyword_match_mode})"
    )
    return MoodEngine(settings=settings, store=store, service=service, feed=feed)


def get_engine(request: Request) -> MoodEngine:
    """FastAPI dependency returning the engine attached to the running app."""
    return request.app.state.engine
