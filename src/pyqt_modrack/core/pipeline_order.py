"""Active pipeline order: the render sequence of active display names."""

import logging
from typing import Iterable, Iterator, List

logger = logging.getLogger(__name__)


class PipelineOrder:
    """
    Ordered, duplicate-free sequence of active display names.

    Indices follow "drag to position N" semantics: after move_to(name, n)
    the name sits at index n (clamped), counted after it was removed from
    its old position.

    Usage:
        order = PipelineOrder()
        order.insert_at("A", 0)
        order.insert_at("X", 1)
        order.insert_at("B", 2)
        order.move_to("X", 0)       # ["X", "A", "B"]
    """

    def __init__(self, names: Iterable[str] = ()):
        self._names: List[str] = []
        for name in names:
            self.insert_at(name, len(self._names))

    def insert_at(self, name: str, index: int) -> int:
        """Insert name at index clamped to [0, len]; existing names are moved.

        Returns:
            The index the name ended up at.
        """
        if name in self._names:
            return self.move_to(name, index)
        index = self._clamp(index, len(self._names))
        self._names.insert(index, name)
        logger.debug(f"[ORDER] Inserted '{name}' at {index}: {self._names}")
        return index

    def move_to(self, name: str, index: int) -> int:
        """Remove name (if present) and reinsert it at its final resting index."""
        if name in self._names:
            self._names.remove(name)
        index = self._clamp(index, len(self._names))
        self._names.insert(index, name)
        logger.debug(f"[ORDER] Moved '{name}' to {index}: {self._names}")
        return index

    def remove_from(self, name: str) -> bool:
        """Delete name; absent names are a no-op. Returns True if removed."""
        if name not in self._names:
            return False
        self._names.remove(name)
        logger.debug(f"[ORDER] Removed '{name}': {self._names}")
        return True

    def rename(self, old_name: str, new_name: str) -> None:
        """Replace old_name in place, keeping its position."""
        index = self._names.index(old_name)
        self._names[index] = new_name

    def clear(self) -> None:
        self._names.clear()

    def names(self) -> List[str]:
        """Copy of the current order."""
        return list(self._names)

    def index_of(self, name: str) -> int:
        """Index of name, or -1 when absent."""
        try:
            return self._names.index(name)
        except ValueError:
            return -1

    def is_permutation_of(self, keys: Iterable[str]) -> bool:
        """True when the order holds exactly keys, each once."""
        keys = list(keys)
        return (
            len(self._names) == len(set(self._names))
            and len(keys) == len(self._names)
            and set(keys) == set(self._names)
        )

    @staticmethod
    def _clamp(index: int, upper: int) -> int:
        return max(0, min(index, upper))

    def __iter__(self) -> Iterator[str]:
        return iter(list(self._names))

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: str) -> bool:
        return name in self._names

    def __repr__(self) -> str:
        return f"PipelineOrder({self._names!r})"
