"""Stable integer indexing of graph elements.

Solver variable names must be unique strings, but networkx nodes can be any
hashable (tuples, strings with spaces, mixed types). Formulations therefore
name variables after contiguous integer indices and translate back through an
:class:`ElementIndex`.

Example:
    >>> idx = ElementIndex.from_items(["A", (0, 1), 7])
    >>> idx.to_index[(0, 1)]
    1
    >>> idx.to_item[2]
    7
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Generic, Hashable, Iterable, Iterator, List, TypeVar

T = TypeVar("T", bound=Hashable)


@dataclass
class ElementIndex(Generic[T]):
    """Bidirectional mapping between graph elements and integer indices.

    Attributes:
        to_index: Maps elements to indices ``0..n-1``.
        to_item: Maps indices back to elements.
    """

    to_index: Dict[T, int] = field(default_factory=dict)
    to_item: Dict[int, T] = field(default_factory=dict)

    @classmethod
    def from_items(cls, items: Iterable[T]) -> "ElementIndex[T]":
        """Index ``items`` in iteration order.

        Raises:
            ValueError: If an element appears twice.
        """
        to_index: Dict[T, int] = {}
        to_item: Dict[int, T] = {}
        for item in items:
            if item in to_index:
                raise ValueError(f"Duplicate element {item!r} in index.")
            i = len(to_index)
            to_index[item] = i
            to_item[i] = item
        return cls(to_index=to_index, to_item=to_item)

    def items(self) -> List[T]:
        """Elements in index order."""
        return [self.to_item[i] for i in range(len(self.to_item))]

    def __iter__(self) -> Iterator[int]:
        return iter(range(len(self.to_item)))

    def __len__(self) -> int:
        return len(self.to_index)
