"""Repository and manifest discovery utilities."""

from __future__ import annotations

import logging
import os
from pathlib import Path

logger = logging.getLogger(__name__)

MANIFEST_NAMES = (
    "package.json",
    "package-lock.json",
    "yarn.lock",
    "requirements.txt",
)

PRUNED_DIRS = {"node_modules"}
HIDDEN_PREFIX = "."


def is_pruned(name: str) -> bool:
    """True for directories that are never descended into."""
    return name in PRUNED_DIRS or name.startswith(HIDDEN_PREFIX)


def discover_manifests(root: Path) -> list[Path]:
    """Find dependency manifests recursively under root.

    Dependency caches and hidden directories are pruned before descent, so a
    manifest anywhere below them is never returned. Directories that cannot
    be listed are skipped with a warning. Symlinked directories are not
    followed.
    """
    found: list[Path] = []

    def on_error(exc: OSError) -> None:
        logger.warning("Skipping unreadable directory %s: %s", exc.filename, exc.strerror or exc)

    for dirpath, dirnames, filenames in os.walk(root, onerror=on_error):
        dirnames[:] = sorted(d for d in dirnames if not is_pruned(d))
        for filename in sorted(filenames):
            if filename in MANIFEST_NAMES:
                found.append(Path(dirpath) / filename)

    return found
