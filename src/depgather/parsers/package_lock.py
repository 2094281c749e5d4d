"""Parse npm package-lock.json to capture resolved transitive dependencies."""

from __future__ import annotations

import json
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

from ..errors import LockfileFormatError
from ..models import Dependency, DependencySet, Ecosystem
from .npm_source import classify_source, is_strong_integrity

NODE_MODULES_MARKER = "node_modules/"

LOCKFILE_SCHEMA: dict[str, Any] = {
    "type": "object",
    "properties": {
        "lockfileVersion": {"type": "integer", "minimum": 1},
        "packages": {
            "type": "object",
            "additionalProperties": {"type": "object"},
        },
        "dependencies": {
            "type": "object",
            "additionalProperties": {"type": "object"},
        },
    },
}

_validator = Draft202012Validator(LOCKFILE_SCHEMA)


def _load(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise LockfileFormatError(f"{path}: invalid JSON ({exc.msg})") from exc
    except UnicodeDecodeError as exc:
        raise LockfileFormatError(f"{path}: not valid UTF-8 ({exc.reason})") from exc

    error = best_match(_validator.iter_errors(data))
    if error is not None:
        pointer = "/".join(str(p) for p in error.path) or "<root>"
        raise LockfileFormatError(f"{path}: {pointer}: {error.message}")
    return data


def _text(meta: Mapping[str, Any], key: str) -> str | None:
    value = meta.get(key)
    return value if isinstance(value, str) and value else None


def _make(name: str, version: str, meta: Mapping[str, Any]) -> Dependency:
    resolved = _text(meta, "resolved")
    return Dependency(
        name=name,
        version=version,
        ecosystem=Ecosystem.NPM,
        source_type=classify_source(resolved),
        integrity_is_strong=is_strong_integrity(_text(meta, "integrity")),
        resolved_url=resolved,
    )


def package_name_from_path(install_path: str) -> str | None:
    """Return the package name installed at ``install_path``.

    "node_modules/a/node_modules/@scope/b" → "@scope/b"
    """
    if NODE_MODULES_MARKER not in install_path:
        return None
    name = install_path.rsplit(NODE_MODULES_MARKER, 1)[1]
    return name or None


def parse_packages(packages: Mapping[str, Any]) -> list[Dependency]:
    """Collect dependencies from the flat ``packages`` map (lockfile v2/v3)."""
    found = DependencySet()
    for install_path, meta in packages.items():
        # "" is the root project itself
        if install_path == "" or not isinstance(meta, Mapping):
            continue
        name = _text(meta, "name") or package_name_from_path(install_path)
        version = _text(meta, "version")
        if not name or not version:
            continue
        found.add(_make(name, version, meta))

    return found.sorted()


def parse_dependency_tree(dependencies: Mapping[str, Any]) -> list[Dependency]:
    """Collect dependencies from the nested ``dependencies`` tree (lockfile v1).

    Walks depth-first with an explicit stack so arbitrarily deep trees do not
    grow the call stack.
    """
    found = DependencySet()
    stack: list[tuple[str, Any]] = list(reversed(list(dependencies.items())))

    while stack:
        name, meta = stack.pop()
        if not isinstance(meta, Mapping):
            continue
        version = _text(meta, "version")
        if version:
            found.add(_make(name, version, meta))

        nested = meta.get("dependencies")
        if isinstance(nested, Mapping):
            stack.extend(reversed(list(nested.items())))

    return found.sorted()


def parse(path: Path) -> list[Dependency]:
    """Return dependencies recorded in a package-lock.json.

    lockfileVersion 2 and 3 use the flat "packages" map; version 1 (or a
    missing version) uses the nested "dependencies" tree.

    Raises:
        LockfileFormatError: content is not JSON or not lockfile-shaped.
    """
    data = _load(path)

    if data.get("lockfileVersion", 1) >= 2:
        return parse_packages(data.get("packages") or {})
    return parse_dependency_tree(data.get("dependencies") or {})
