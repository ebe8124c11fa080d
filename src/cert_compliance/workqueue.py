"""Reconciliation keys and a deduplicating in-memory work queue."""
import threading
from typing import Dict, List, Optional, Protocol, Set, Tuple

from cert_compliance.listers import Resource
from cert_compliance.models import CertComplianceError, KeyFuncError


class WorkQueue(Protocol):
    """Anything that accepts reconciliation keys."""

    def add(self, key: str) -> None:
        ...


class ShutDownError(CertComplianceError):
    """Raised when adding to a queue that has been shut down."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"queue is shutting down; dropped key {key!r}")


def key_func(obj: Resource) -> str:
    """Return the ``namespace/name`` key of a resource.

    Cluster-scoped resources (empty namespace) are keyed by name alone.

    Raises:
        KeyFuncError: If the resource has no name.
    """
    meta = getattr(obj, "metadata", None)
    if meta is None:
        raise KeyFuncError(obj, "object has no metadata")
    if not meta.name:
        raise KeyFuncError(obj, "object has no name")
    if meta.namespace:
        return f"{meta.namespace}/{meta.name}"
    return meta.name


def split_meta_namespace_key(key: str) -> Tuple[str, str]:
    """Split a key produced by key_func into ``(namespace, name)``.

    Raises:
        ValueError: If the key has more than one ``/``.
    """
    parts = key.split("/")
    if len(parts) == 1:
        return "", parts[0]
    if len(parts) == 2:
        return parts[0], parts[1]
    raise ValueError(f"unexpected key format: {key!r}")


class InMemoryWorkQueue:
    """FIFO queue of keys that collapses duplicate pending entries.

    A key re-added while it is being processed is queued again once
    ``done`` is called for it, so no change is lost.
    """

    def __init__(self) -> None:
        self._pending: Dict[str, None] = {}
        self._processing: Set[str] = set()
        self._dirty: Set[str] = set()
        self._shutting_down = False
        self._lock = threading.Lock()

    def add(self, key: str) -> None:
        with self._lock:
            if self._shutting_down:
                raise ShutDownError(key)
            if key in self._processing:
                self._dirty.add(key)
                return
            self._pending[key] = None

    def get(self) -> Optional[str]:
        """Pop the oldest pending key, or None if the queue is empty."""
        with self._lock:
            if not self._pending:
                return None
            key = next(iter(self._pending))
            del self._pending[key]
            self._processing.add(key)
            return key

    def done(self, key: str) -> None:
        with self._lock:
            self._processing.discard(key)
            if key in self._dirty:
                self._dirty.discard(key)
                self._pending[key] = None

    def shut_down(self) -> None:
        with self._lock:
            self._shutting_down = True

    def pending(self) -> List[str]:
        with self._lock:
            return list(self._pending)

    def __len__(self) -> int:
        with self._lock:
            return len(self._pending)
