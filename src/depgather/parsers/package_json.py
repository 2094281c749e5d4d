"""Parse package.json, preferring the resolved versions of a sibling lockfile."""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from ..errors import LockfileFormatError
from ..models import Dependency, DependencySet, Ecosystem
from . import package_lock

logger = logging.getLogger(__name__)

LOCKFILE_NAME = "package-lock.json"

SECTIONS = (
    "dependencies",
    "devDependencies",
    "peerDependencies",
    "optionalDependencies",
)


def declared_dependencies(data: Mapping[str, Any]) -> dict[str, str]:
    """Return name → version range across all dependency sections.

    Later sections override earlier ones when a name appears twice.
    """
    merged: dict[str, str] = {}
    for section in SECTIONS:
        deps = data.get(section) or {}
        if not isinstance(deps, Mapping):
            raise LockfileFormatError(f"'{section}' must be an object")
        for name, version in deps.items():
            merged[str(name)] = str(version)
    return merged


def _load(path: Path) -> Mapping[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise LockfileFormatError(f"{path}: invalid JSON ({exc.msg})") from exc
    except UnicodeDecodeError as exc:
        raise LockfileFormatError(f"{path}: not valid UTF-8 ({exc.reason})") from exc
    if not isinstance(data, Mapping):
        raise LockfileFormatError(f"{path}: package.json must be a JSON object")
    return data


def parse(path: Path) -> list[Dependency]:
    """Return dependencies for the project described by ``path``.

    The sibling package-lock.json wins when it exists and parses. Otherwise
    each declared dependency is emitted with its unresolved range as version.
    """
    data = _load(path)

    lock_path = path.with_name(LOCKFILE_NAME)
    if lock_path.is_file():
        try:
            return package_lock.parse(lock_path)
        except (OSError, LockfileFormatError) as exc:
            logger.warning("Ignoring unreadable %s: %s", lock_path, exc)

    try:
        declared = declared_dependencies(data)
    except LockfileFormatError as exc:
        raise LockfileFormatError(f"{path}: {exc}") from exc

    found = DependencySet()
    for name, version in declared.items():
        if not name or not version:
            continue
        found.add(Dependency(name=name, version=version, ecosystem=Ecosystem.NPM))
    return found.sorted()
