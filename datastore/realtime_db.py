"""In-process stand-in for a managed realtime database.

Data lives in a JSON tree addressed by top-level paths. Writers either ``set``
a node or ``push`` a child under a generated, chronologically sortable key.
Value listeners registered with ``subscribe`` receive the full node snapshot
immediately and again after every write to that node.
"""

from __future__ import annotations

import copy
import json
import logging
import time
from dataclasses import dataclass, field
from functools import lru_cache
from itertools import count
from pathlib import Path
from threading import RLock
from typing import Any, Callable, Dict, Optional, Tuple

from settings import get_settings

logger = logging.getLogger(__name__)

SnapshotCallback = Callable[[Any], None]


@dataclass
class Subscription:
    """Handle returned by :meth:`MockRealtimeDatabase.subscribe`."""

    subscription_id: int
    path: str
    _database: "MockRealtimeDatabase" = field(repr=False)
    active: bool = True

    def unsubscribe(self) -> None:
        if not self.active:
            return
        self._database._remove_listener(self.subscription_id)
        self.active = False


class MockRealtimeDatabase:

    def __init__(self, name: str, persistence_path: Optional[Path] = None) -> None:
        self.name = name
        self._tree: Dict[str, Any] = {}
        self._listeners: Dict[int, Tuple[str, SnapshotCallback]] = {}
        self._listener_ids = count(1)
        self._last_push_ms = 0
        self._push_sequence = 0
        self.persistence_path = persistence_path
        # Re-entrant so a listener may write back into the database while a
        # notification is being delivered.
        self._lock = RLock()
        if persistence_path:
            persistence_path.parent.mkdir(parents=True, exist_ok=True)
            self._load_from_disk()

    def get(self, path: str) -> Any:
        key = self._normalize_path(path)
        with self._lock:
            return copy.deepcopy(self._tree.get(key))

    def set(self, path: str, value: Any) -> None:
        key = self._normalize_path(path)
        with self._lock:
            tree = dict(self._tree)
            if value is None:
                tree.pop(key, None)
            else:
                tree[key] = copy.deepcopy(value)
            self._commit(key, tree)

    def push(self, path: str, value: Any) -> str:
        """Append ``value`` under a new child key of ``path`` and return the key."""

        key = self._normalize_path(path)
        with self._lock:
            node = self._tree.get(key)
            if node is None:
                node = {}
            elif not isinstance(node, dict):
                raise ValueError(f"Cannot push onto non-mapping node {key!r}.")
            child_key = self._next_push_key()
            tree = dict(self._tree)
            tree[key] = {**node, child_key: copy.deepcopy(value)}
            self._commit(key, tree)
            logger.debug("Pushed child", extra={"path": key, "record_key": child_key})
            return child_key

    def subscribe(self, path: str, callback: SnapshotCallback) -> Subscription:
        key = self._normalize_path(path)
        with self._lock:
            subscription_id = next(self._listener_ids)
            self._listeners[subscription_id] = (key, callback)
            logger.debug(
                "Listener attached",
                extra={"path": key, "subscription_id": subscription_id},
            )
            callback(copy.deepcopy(self._tree.get(key)))
        return Subscription(subscription_id=subscription_id, path=key, _database=self)

    def listener_count(self, path: Optional[str] = None) -> int:
        with self._lock:
            if path is None:
                return len(self._listeners)
            key = self._normalize_path(path)
            return sum(1 for listener_path, _ in self._listeners.values() if listener_path == key)

    def _remove_listener(self, subscription_id: int) -> None:
        with self._lock:
            removed = self._listeners.pop(subscription_id, None)
        if removed is not None:
            logger.debug(
                "Listener detached",
                extra={"path": removed[0], "subscription_id": subscription_id},
            )

    def _notify(self, key: str) -> None:
        callbacks = [
            callback for listener_path, callback in self._listeners.values() if listener_path == key
        ]
        for callback in callbacks:
            callback(copy.deepcopy(self._tree.get(key)))

    def _next_push_key(self) -> str:
        now_ms = max(int(time.time() * 1000), self._last_push_ms)
        if now_ms == self._last_push_ms:
            self._push_sequence += 1
        else:
            self._push_sequence = 0
        self._last_push_ms = now_ms
        return f"{now_ms:013d}-{self._push_sequence:06d}"

    def _commit(self, key: str, tree: Dict[str, Any]) -> None:
        # A failed write leaves the in-memory tree and listeners untouched.
        self._persist(tree)
        self._tree = tree
        self._notify(key)

    def _persist(self, tree: Dict[str, Any]) -> None:
        if not self.persistence_path:
            return
        self.persistence_path.write_text(json.dumps(tree, indent=2))

    def _load_from_disk(self) -> None:
        if not self.persistence_path or not self.persistence_path.exists():
            return

        try:
            raw = self.persistence_path.read_text() or "{}"
            data = json.loads(raw)
        except (OSError, json.JSONDecodeError):
            data = {}

        if isinstance(data, dict):
            self._tree.update(data)

    @staticmethod
    def _normalize_path(path: str) -> str:
        candidate = path.strip().strip("/")
        if not candidate:
            raise ValueError("Database path must not be empty.")
        return candidate


@lru_cache
def build_default_database(
    name: Optional[str] = None,
    path: Optional[str] = None,
) -> MockRealtimeDatabase:
    settings = get_settings()
    db_name = settings.db_name if name is None else name
    db_path = settings.db_persistence_path if path is None else path
    persistence = Path(db_path) if db_path else None
    return MockRealtimeDatabase(name=db_name, persistence_path=persistence)
