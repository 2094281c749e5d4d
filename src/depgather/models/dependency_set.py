"""Keyed collection enforcing first-seen-wins deduplication."""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from .dependency import Dependency


def sort_key(dep: Dependency) -> tuple[str, str, str]:
    """Order by name (case-insensitive first), then version."""
    return (dep.name.casefold(), dep.name, dep.version)


class DependencySet:
    """Insertion-ordered set of dependencies keyed by ``(name, version)``.

    Adding a dependency whose key is already present is a no-op: the first
    record seen is kept and never overwritten.
    """

    def __init__(self, dependencies: Iterable[Dependency] = ()) -> None:
        self._items: dict[tuple[str, str], Dependency] = {}
        self.update(dependencies)

    def add(self, dep: Dependency) -> bool:
        """Insert ``dep`` unless its key is taken; return True if inserted."""
        if dep.key in self._items:
            return False
        self._items[dep.key] = dep
        return True

    def update(self, dependencies: Iterable[Dependency]) -> int:
        """Insert every dependency; return how many were new."""
        return sum(1 for dep in dependencies if self.add(dep))

    def names(self) -> set[str]:
        return {name for name, _ in self._items}

    def sorted(self) -> list[Dependency]:
        return sorted(self._items.values(), key=sort_key)

    def __contains__(self, item: object) -> bool:
        if isinstance(item, Dependency):
            return item.key in self._items
        return item in self._items

    def __iter__(self) -> Iterator[Dependency]:
        return iter(self._items.values())

    def __len__(self) -> int:
        return len(self._items)
