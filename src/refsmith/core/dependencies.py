"""Tagged dependency edges and the ordered set a document keeps of them."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class ResolvedDependency:
    """Edge towards a known document, keyed by its canonical path."""

    path: str


@dataclass(frozen=True, slots=True)
class PendingDependency:
    """Edge declared before its target document is known.

    ``path`` is the canonical form of the raw target; it is replaced by a
    :class:`ResolvedDependency` on the real file once the reference resolves.
    """

    path: str


Dependency = ResolvedDependency | PendingDependency


@dataclass(slots=True)
class DependencySet:
    """Insertion-ordered set of dependencies, doubling as a build/watch list."""

    _items: list[Dependency] = field(default_factory=list)

    @classmethod
    def of(cls, items: Iterable[Dependency]) -> DependencySet:
        result = cls()
        for item in items:
            result.add(item)
        return result

    def add(self, dependency: Dependency) -> bool:
        """Append ``dependency`` unless present; return True when added."""
        if dependency in self._items:
            return False
        self._items.append(dependency)
        return True

    def discard_path(self, path: str) -> list[Dependency]:
        """Remove every variant recorded for ``path`` and return them."""
        removed = [item for item in self._items if item.path == path]
        if removed:
            self._items = [item for item in self._items if item.path != path]
        return removed

    def promote(self, pending: PendingDependency, path: str) -> bool:
        """Replace ``pending`` in place with a resolved edge towards ``path``."""
        try:
            index = self._items.index(pending)
        except ValueError:
            return False
        resolved = ResolvedDependency(path)
        if resolved in self._items:
            del self._items[index]
        else:
            self._items[index] = resolved
        return True

    def pending(self) -> list[PendingDependency]:
        return [item for item in self._items if isinstance(item, PendingDependency)]

    def paths(self) -> list[str]:
        """Return the plain paths, pending ones included, in insertion order."""
        return [item.path for item in self._items]

    def __contains__(self, item: object) -> bool:
        return item in self._items

    def __iter__(self) -> Iterator[Dependency]:
        return iter(list(self._items))

    def __len__(self) -> int:
        return len(self._items)


__all__ = [
    "Dependency",
    "DependencySet",
    "PendingDependency",
    "ResolvedDependency",
]
