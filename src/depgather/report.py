"""Dependency statistics and plain-text listing."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from .models import Dependency, Ecosystem

SECTION_TITLES = (
    (Ecosystem.NPM, "# NPM Packages"),
    (Ecosystem.PYPI, "# PyPI Packages"),
    (Ecosystem.UNKNOWN, "# Other Packages"),
)


def dependency_stats(dependencies: Iterable[Dependency]) -> dict[str, Any]:
    """Count records, distinct names, and names present in several versions."""
    versions: dict[str, set[str]] = defaultdict(set)
    total = 0
    for dep in dependencies:
        total += 1
        versions[dep.name].add(dep.version)

    return {
        "total": total,
        "unique": len(versions),
        "multipleVersions": sorted(name for name, seen in versions.items() if len(seen) > 1),
    }


def render_dependency_list(dependencies: Iterable[Dependency]) -> str:
    """Return ``name@version`` lines grouped under one heading per ecosystem."""
    grouped: dict[Ecosystem, list[Dependency]] = defaultdict(list)
    for dep in dependencies:
        grouped[dep.ecosystem].append(dep)

    sections: list[str] = []
    for ecosystem, title in SECTION_TITLES:
        deps = grouped.get(ecosystem)
        if not deps:
            continue
        sections.append("\n".join([title, *(str(dep) for dep in deps)]))

    return "\n\n".join(sections)


def write_dependency_list(dependencies: Iterable[Dependency], path: Path) -> None:
    path.write_text(render_dependency_list(dependencies), encoding="utf-8")
