"""Core scanning entrypoints.

This module holds no CLI or reporting concerns so it can be used by any
front end that needs the flat dependency list.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import replace
from pathlib import Path

from .config import Settings
from .discovery import MANIFEST_NAMES, discover_manifests
from .errors import DepgatherError, ScanPathError, UnsupportedFileError
from .models import Dependency, DependencySet, Ecosystem, FileFailure, ScanSession
from .parsers import package_json, package_lock, requirements_txt, yarn_lock
from .registry.pypi import PyPIRegistry, RegistryLookup

logger = logging.getLogger(__name__)

FileParser = Callable[[Path, RegistryLookup | None, Settings], list[Dependency]]


def _parse_requirements(path: Path, lookup: RegistryLookup | None, settings: Settings) -> list[Dependency]:
    if lookup is None:
        lookup = PyPIRegistry(settings)
    return requirements_txt.parse(path, lookup, delay=settings.lookup_delay)


# Keyed by base name; must cover every entry in MANIFEST_NAMES.
PARSERS: dict[str, tuple[Ecosystem, FileParser]] = {
    "package.json": (Ecosystem.NPM, lambda path, lookup, settings: package_json.parse(path)),
    "package-lock.json": (Ecosystem.NPM, lambda path, lookup, settings: package_lock.parse(path)),
    "yarn.lock": (Ecosystem.NPM, lambda path, lookup, settings: yarn_lock.parse(path)),
    "requirements.txt": (Ecosystem.PYPI, _parse_requirements),
}


def parse_file(
    path: Path,
    lookup: RegistryLookup | None = None,
    settings: Settings | None = None,
) -> list[Dependency]:
    """Parse a single manifest or lockfile.

    Every returned record carries the ecosystem registered for the file name.

    Raises:
        UnsupportedFileError: the base name is not a recognized manifest.
        LockfileFormatError: the content cannot be parsed.
    """
    entry = PARSERS.get(path.name)
    if entry is None:
        supported = ", ".join(MANIFEST_NAMES)
        raise UnsupportedFileError(f"Unsupported file type: {path.name}. Please provide one of: {supported}")
    ecosystem, parser = entry
    logger.debug("Parsing %s as %s", path, ecosystem.value)
    return [
        dep if dep.ecosystem is ecosystem else replace(dep, ecosystem=ecosystem)
        for dep in parser(path, lookup, settings or Settings())
    ]


def scan(
    path: Path,
    lookup: RegistryLookup | None = None,
    settings: Settings | None = None,
) -> ScanSession:
    """Collect dependencies from a file or a directory tree.

    Params:
        path: a manifest/lockfile, or a directory to search recursively
        lookup: registry collaborator for requirements.txt expansion; a
            PyPIRegistry built from ``settings`` is used when omitted
        settings: registry and delay tunables; defaults when omitted

    Returns: ScanSession with the merged, deduplicated, sorted dependencies.
        When the same (name, version) appears in several files the first
        one found is kept.
    """
    settings = settings or Settings()
    path = Path(path)

    if not path.exists():
        raise ScanPathError(f"Path not found: {path}")

    if path.is_file():
        dependencies = DependencySet(parse_file(path, lookup, settings))
        return ScanSession(root=path, dependencies=tuple(dependencies.sorted()), files=(path,))

    if not path.is_dir():
        raise ScanPathError(f"Not a file or directory: {path}")

    if lookup is None:
        lookup = PyPIRegistry(settings)

    merged = DependencySet()
    parsed: list[Path] = []
    failures: list[FileFailure] = []

    for manifest in discover_manifests(path):
        try:
            found = parse_file(manifest, lookup, settings)
        except (DepgatherError, OSError, ValueError) as exc:
            logger.warning("Failed to parse %s: %s", manifest, exc)
            failures.append(FileFailure(path=manifest, reason=str(exc)))
            continue
        added = merged.update(found)
        parsed.append(manifest)
        logger.info("Parsed %s: %d dependencies (%d new)", manifest, len(found), added)

    return ScanSession(
        root=path,
        dependencies=tuple(merged.sorted()),
        files=tuple(parsed),
        failures=tuple(failures),
    )


def get_dependencies(
    path: Path,
    lookup: RegistryLookup | None = None,
    settings: Settings | None = None,
) -> list[Dependency]:
    """Return the sorted dependency list for ``path``; see :func:`scan`."""
    return list(scan(path, lookup, settings).dependencies)
