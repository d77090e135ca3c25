"""Per-graph memoization of computed invariants.

Entries are keyed by graph identity, a :class:`~optgraph.types.base.CacheTag`
and a tuple of query parameters (empty for plain invariants).
Graphs are held weakly, so caching never extends a graph's lifetime.

Each graph's entries are stamped with a structural fingerprint (its vertex and
edge sets). A graph mutated after caching has its entries dropped on the next
access instead of returning stale values.

:meth:`ResultCache.compute` serializes work per ``(graph, tag, params)`` so that
concurrent callers asking for the same invariant trigger at most one
computation; the others wait and read the saved value.
"""

from __future__ import annotations

import threading
import weakref
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, FrozenSet, Optional, Tuple, TypeVar

import networkx as nx

from optgraph.logging import get_logger
from optgraph.types.base import CacheTag

logger = get_logger(__name__)

T = TypeVar("T")

Fingerprint = Tuple[FrozenSet[Any], FrozenSet[FrozenSet[Any]]]

#: A tag plus the query parameters that distinguish entries sharing it.
CacheKey = Tuple[CacheTag, Tuple]


def fingerprint(G: nx.Graph) -> Fingerprint:
    """Structural identity of ``G``: its vertex set and undirected edge set."""
    return (
        frozenset(G.nodes),
        frozenset(frozenset(e) for e in G.edges()),
    )


@dataclass
class _GraphEntry:
    fingerprint: Fingerprint
    values: Dict[CacheKey, Any] = field(default_factory=dict)
    locks: Dict[CacheKey, threading.RLock] = field(default_factory=dict)


def _describe(key: CacheKey) -> str:
    tag, params = key
    if not params:
        return tag.name
    return f"{tag.name}{params!r}"


class ResultCache:
    """Memo table of graph invariants with no eviction policy.

    Every method takes an optional ``params`` tuple that distinguishes
    queries sharing a tag, such as colorings with different numbers of colors.
    """

    def __init__(self) -> None:
        self._entries: "weakref.WeakKeyDictionary[nx.Graph, _GraphEntry]" = (
            weakref.WeakKeyDictionary()
        )
        self._lock = threading.Lock()

    def _entry(self, G: nx.Graph) -> _GraphEntry:
        """Return the current entry for ``G``, resetting it if ``G`` changed.

        Must be called with ``self._lock`` held.
        """
        fp = fingerprint(G)
        entry = self._entries.get(G)
        if entry is None:
            entry = _GraphEntry(fingerprint=fp)
            self._entries[G] = entry
        elif entry.fingerprint != fp:
            logger.debug(
                "Graph %s changed since its invariants were cached; dropping %d entries",
                id(G),
                len(entry.values),
            )
            entry.fingerprint = fp
            entry.values.clear()
        return entry

    def check(self, G: nx.Graph, tag: CacheTag, params: Tuple = ()) -> bool:
        """Whether a value for ``(tag, params)`` is cached for ``G``."""
        with self._lock:
            return (tag, params) in self._entry(G).values

    def recall(self, G: nx.Graph, tag: CacheTag, params: Tuple = ()) -> Any:
        """Return the cached value.

        Raises:
            KeyError: If nothing is cached for ``(G, tag, params)``.
        """
        key = (tag, params)
        with self._lock:
            values = self._entry(G).values
            if key not in values:
                raise KeyError(f"No cached {_describe(key)} for this graph")
            return values[key]

    def get(
        self,
        G: nx.Graph,
        tag: CacheTag,
        default: Optional[T] = None,
        params: Tuple = (),
    ) -> Any:
        """Return the cached value or ``default``."""
        with self._lock:
            return self._entry(G).values.get((tag, params), default)

    def save(self, G: nx.Graph, tag: CacheTag, value: Any, params: Tuple = ()) -> None:
        """Store ``value`` for ``(G, tag, params)``, replacing any previous value."""
        with self._lock:
            self._entry(G).values[tag, params] = value

    def clear(self, G: Optional[nx.Graph] = None) -> None:
        """Forget entries for ``G``, or for every graph when ``G`` is None."""
        with self._lock:
            if G is None:
                self._entries.clear()
            else:
                self._entries.pop(G, None)

    def _key_lock(self, G: nx.Graph, key: CacheKey) -> threading.RLock:
        with self._lock:
            locks = self._entry(G).locks
            lock = locks.get(key)
            if lock is None:
                lock = locks[key] = threading.RLock()
            return lock

    def compute(
        self,
        G: nx.Graph,
        tag: CacheTag,
        fn: Callable[[], T],
        params: Tuple = (),
    ) -> T:
        """Return the cached value for ``(G, tag, params)``, computing it with ``fn`` on a miss.

        ``fn`` runs at most once per key even under concurrent calls. If it
        raises, nothing is saved and the exception propagates.
        """
        key = (tag, params)
        with self._key_lock(G, key):
            with self._lock:
                values = self._entry(G).values
                if key in values:
                    logger.debug("Cache hit for %s", _describe(key))
                    return values[key]
            value = fn()
            self.save(G, tag, value, params=params)
            return value

    def __len__(self) -> int:
        """Number of graphs with an entry."""
        with self._lock:
            return len(self._entries)


_DEFAULT_CACHE = ResultCache()


def default_cache() -> ResultCache:
    """The process-wide cache used when no cache is passed explicitly."""
    return _DEFAULT_CACHE
