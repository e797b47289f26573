"""
Entry Store for the mood history.

The whole history lives in one named record as a JSON array, newest entry
first. The store never mutates or removes a single entry: it only prepends,
or drops the whole record on an explicit purge.

Change notification:
    Every successful write fires a payload-free signal on the store's
    ChangeNotifier. Listeners are called synchronously, right after the
    write, and are expected to re-load() on receipt. Stores opened on the
    same backend and key can share a notifier so their readers converge too.
"""

import json
import logging
import threading
from typing import Callable, List, Optional

from .models import MoodEntry
from .storage import StorageBackend, StorageError

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_KEY = "moodcraft.entries"
ENTRIES_CHANGED = "moodcraft:entries-changed"

Listener = Callable[[], None]


class ChangeNotifier:
    """Named, payload-free broadcast signal with any number of listeners."""

    def __init__(self, name: str = ENTRIES_CHANGED):
        self.name = name
        self._listeners: List[Listener] = []
        self._lock = threading.Lock()

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener.

        Returns:
            A callable that removes the listener again
        """
        with self._lock:
            self._listeners.append(listener)

        def unsubscribe() -> None:
            with self._lock:
                if listener in self._listeners:
                    self._listeners.remove(listener)

        return unsubscribe

    @property
    def listener_count(self) -> int:
        with self._lock:
            return len(self._listeners)

    def notify(self) -> None:
        """Call every listener; one failing listener does not stop the others."""
        with self._lock:
            listeners = list(self._listeners)
        for listener in listeners:
            try:
                listener()
            except Exception as e:
                logger.error(f"[STORE] Listener for {self.name} failed: {e}")


class EntryStore:
    """Durable, append-only mood history on top of a storage backend."""

    def __init__(
        self,
        backend: StorageBackend,
        key: str = DEFAULT_HISTORY_KEY,
        notifier: Optional[ChangeNotifier] = None,
    ):
        self.backend = backend
        self.key = key
        self.notifier = notifier or ChangeNotifier()

    def _read_items(self) -> list:
        """
        Raw array items of the stored record, newest first.

        Missing, unparseable or non-array data yields an empty list.

        Raises:
            StorageError: if the backend could not be read
        """
        raw = self.backend.read(self.key)
        if raw is None:
            return []

        try:
            data = json.loads(raw)
        except (ValueError, RecursionError) as e:
            logger.warning(f"[STORE] Stored history under {self.key} is not valid JSON, ignoring it: {e}")
            return []

        if not isinstance(data, list):
            logger.warning(
                f"[STORE] Stored history under {self.key} is a {type(data).__name__}, "
                "expected an array; ignoring it"
            )
            return []
        return data

    def load(self) -> List[MoodEntry]:
        """
        Read the persisted history, newest first.

        Missing or structurally invalid data yields an empty list. Array
        items that are not valid entries are skipped.
        """
        try:
            data = self._read_items()
        except StorageError as e:
            logger.error(f"[STORE] Could not read {self.key}: {e}")
            return []

        entries = []
        for index, item in enumerate(data):
            try:
                entries.append(MoodEntry.from_dict(item))
            except ValueError as e:
                logger.warning(f"[STORE] Skipping malformed entry at index {index}: {e}")
        return entries

    def latest(self) -> Optional[MoodEntry]:
        entries = self.load()
        return entries[0] if entries else None

    def append(self, entry: MoodEntry) -> bool:
        """
        Prepend an entry and persist the full history in one write.

        Args:
            entry: The new entry

        Returns:
            True if the write succeeded, False if the backend refused the
            read or the write. On failure the stored history is left as it
            was. Stored items that load() skips are written back unchanged.
        """
        try:
            items = self._read_items()
        except StorageError as e:
            logger.error(f"[STORE] Could not read {self.key}, not saving entry {entry.id}: {e}")
            return False

        history = [entry.to_dict()] + items
        payload = json.dumps(history, ensure_ascii=False)

        try:
            self.backend.write(self.key, payload)
        except StorageError as e:
            logger.error(f"[STORE] Failed to save entry {entry.id}: {e}")
            return False

        logger.info(f"[STORE] Saved entry {entry.id} ({entry.mood}), history size {len(history)}")
        self.notifier.notify()
        return True

    def purge(self) -> bool:
        """Remove the whole history. Returns False if the backend refused."""
        try:
            self.backend.delete(self.key)
        except StorageError as e:
            logger.error(f"[STORE] Failed to purge {self.key}: {e}")
            return False

        logger.info(f"[STORE] Purged history under {self.key}")
        self.notifier.notify()
        return True

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        return self.notifier.subscribe(listener)


class HistoryReader:
    """
    A view-side reader that keeps its own snapshot of the history.

    Subscribes to the store's change signal on creation and re-loads on
    every signal, so several readers stay in sync without polling.
    """

    def __init__(self, store: EntryStore):
        self.store = store
        self.entries: List[MoodEntry] = store.load()
        self.refresh_count = 0
        self._unsubscribe: Optional[Callable[[], None]] = store.subscribe(self.refresh)

    def refresh(self) -> None:
        self.entries = self.store.load()
        self.refresh_count += 1

    def close(self) -> None:
        if self._unsubscribe:
            self._unsubscribe()
            self._unsubscribe = None
