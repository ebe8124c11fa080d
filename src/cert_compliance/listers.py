"""Read-only store abstractions (listers) and an in-memory implementation."""
import threading
from abc import ABC, abstractmethod
from typing import Callable, Dict, Generic, List, Protocol, Tuple, TypeVar

from cert_compliance.api import Certificate
from cert_compliance.models import LabelSelector, NotFoundError, ObjectMeta


class Resource(Protocol):
    @property
    def metadata(self) -> ObjectMeta:
        ...


T = TypeVar("T", bound=Resource)

GetFunc = Callable[[str, str], Certificate]


class NamespaceLister(ABC, Generic[T]):
    """Lists and gets resources within one namespace."""

    @abstractmethod
    def list(self, selector: LabelSelector) -> List[T]:
        """Return all resources matching ``selector``, in store order.

        Raises:
            StoreError: If the store cannot be read.
        """

    @abstractmethod
    def get(self, name: str) -> T:
        """Return the named resource.

        Raises:
            NotFoundError: If no such resource exists.
            StoreError: If the store cannot be read.
        """


class Lister(ABC, Generic[T]):
    """Entry point to namespace-scoped listers of one resource type."""

    @abstractmethod
    def namespaced(self, namespace: str) -> NamespaceLister[T]:
        pass


class InMemoryLister(Lister[T]):
    """Lister backed by a dictionary; preserves insertion order.

    Suitable for tests and for embedding in controllers that maintain their
    own cache.
    """

    def __init__(self) -> None:
        self._items: Dict[Tuple[str, str], T] = {}
        self._lock = threading.Lock()

    def add(self, obj: T) -> None:
        """Insert or replace a resource, keyed by namespace and name."""
        key = (obj.metadata.namespace, obj.metadata.name)
        with self._lock:
            self._items[key] = obj

    def delete(self, namespace: str, name: str) -> None:
        with self._lock:
            self._items.pop((namespace, name), None)

    def namespaced(self, namespace: str) -> "InMemoryNamespaceLister[T]":
        return InMemoryNamespaceLister(self, namespace)

    def _snapshot(self) -> List[T]:
        with self._lock:
            return list(self._items.values())


class InMemoryNamespaceLister(NamespaceLister[T]):
    def __init__(self, parent: InMemoryLister[T], namespace: str) -> None:
        self._parent = parent
        self._namespace = namespace

    def list(self, selector: LabelSelector) -> List[T]:
        return [
            obj
            for obj in self._parent._snapshot()
            if obj.metadata.namespace == self._namespace
            and selector.matches(obj.metadata.labels)
        ]

    def get(self, name: str) -> T:
        for obj in self._parent._snapshot():
            if obj.metadata.namespace == self._namespace and obj.metadata.name == name:
                return obj
        raise NotFoundError(self._namespace, name)


def certificate_get_func(lister: Lister[Certificate]) -> GetFunc:
    """Adapt a Certificate lister into a ``(namespace, name) -> Certificate`` getter."""

    def get(namespace: str, name: str) -> Certificate:
        return lister.namespaced(namespace).get(name)

    return get
