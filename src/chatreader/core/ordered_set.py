# chatreader/core/ordered_set.py
"""
Insertion-ordered set used for detected labels and synthesized tags.
"""

from typing import Any, Iterable, Iterator, List, Optional


class OrderedSet:
    """A sequence that ignores repeated items and remembers first insertion order."""

    def __init__(self, items: Optional[Iterable[Any]] = None):
        self._items: List[Any] = []
        self._seen = set()
        if items:
            for item in items:
                self.add(item)

    def add(self, item: Any) -> bool:
        """Add an item; returns False when it was already present."""
        if item in self._seen:
            return False
        self._seen.add(item)
        self._items.append(item)
        return True

    def __contains__(self, item: Any) -> bool:
        return item in self._seen

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, OrderedSet):
            return self._items == other._items
        if isinstance(other, (set, frozenset)):
            return self._seen == other
        return NotImplemented

    def __repr__(self) -> str:
        return f"OrderedSet({self._items!r})"

    def to_list(self) -> List[Any]:
        return list(self._items)
