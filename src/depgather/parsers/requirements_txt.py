"""Parse requirements.txt and expand direct requirements by one level.

Direct requirements come from the file itself. Each one whose specifier can
be normalized to an exact version is looked up on the registry, and the
requirements that release declares are added once; their own requirements
are never fetched.
"""

from __future__ import annotations

import logging
import re
import time
from pathlib import Path

from packaging.utils import canonicalize_name

from ..config import DEFAULT_LOOKUP_DELAY
from ..errors import RegistryLookupError
from ..models import UNVERSIONED, Dependency, DependencySet, Ecosystem
from ..registry.pypi import RegistryLookup
from .constraints import normalize_version

logger = logging.getLogger(__name__)

_REFERENCE_PREFIXES = ("git+", "hg+", "svn+", "bzr+", "file:", "http://", "https://")
_DIRECT_REFERENCE = " @ "

_EXTRAS = re.compile(r"\[.*?\]")
_INLINE_COMMENT = re.compile(r"\s+#.*$")
_SPECIFIER = re.compile(r"^([a-zA-Z0-9\-_.]+)\s*([=<>!~]+)\s*(.+?)(\s*;.*)?$")
_PARENTHESISED = re.compile(r"^([a-zA-Z0-9\-_.]+)\s*\(\s*([=<>!~].*?)\s*\)\s*$")
_NAME_ONLY = re.compile(r"^([a-zA-Z0-9\-_.]+)\s*$")


def strip_marker(requirement: str) -> str:
    """Drop an environment marker (``; python_version < "3.8"``)."""
    return requirement.split(";", 1)[0].strip()


def parse_requirement_line(line: str) -> tuple[str, str] | None:
    """Return ``(name, specifier)`` for one requirement, or None to drop it.

    VCS, URL and direct references are not package identities and yield None,
    as does anything else that does not look like a requirement. A bare name
    yields the ``*`` specifier.
    """
    line = _INLINE_COMMENT.sub("", line.strip())
    if not line:
        return None
    if line.startswith(_REFERENCE_PREFIXES) or _DIRECT_REFERENCE in line:
        return None

    line = _EXTRAS.sub("", line)

    match = _PARENTHESISED.match(line)
    if match:
        return match.group(1), match.group(2).replace(" ", "")

    match = _SPECIFIER.match(line)
    if match:
        name = match.group(1).strip()
        return name, match.group(2) + match.group(3).strip()

    match = _NAME_ONLY.match(line)
    if match:
        return match.group(1).strip(), UNVERSIONED

    return None


def parse_direct(path: Path) -> list[tuple[str, str]]:
    """Return ``(name, specifier)`` pairs declared directly in ``path``."""
    pairs: list[tuple[str, str]] = []
    for raw in path.read_text(encoding="utf-8").splitlines():
        line = raw.strip()
        # comments and pip options (-r, -e, --index-url, ...)
        if not line or line.startswith("#") or line.startswith("-"):
            continue
        parsed = parse_requirement_line(line)
        if parsed is not None:
            pairs.append(parsed)

    return sorted(pairs, key=lambda pair: (pair[0].casefold(), pair[0], pair[1]))


def _to_dependency(name: str, specifier: str) -> Dependency | None:
    version = normalize_version(specifier)
    if version is None:
        return None
    return Dependency(name=name, version=version, ecosystem=Ecosystem.PYPI)


def parse(
    path: Path,
    lookup: RegistryLookup | None = None,
    *,
    delay: float = DEFAULT_LOOKUP_DELAY,
) -> list[Dependency]:
    """Return direct requirements plus one level of their requirements.

    Params:
        path: requirements.txt to read
        lookup: registry collaborator; when None only direct requirements
            are returned
        delay: seconds to wait between consecutive registry lookups

    A lookup failure only skips the expansion of that one requirement.
    """
    found = DependencySet()
    seen_names: set[str] = set()
    direct: list[Dependency] = []

    for name, specifier in parse_direct(path):
        dep = _to_dependency(name, specifier)
        if dep is None:
            logger.debug("Cannot normalize %s%s; skipping", name, specifier)
            continue
        if found.add(dep):
            direct.append(dep)
        seen_names.add(canonicalize_name(name))

    if lookup is None or not direct:
        return found.sorted()

    logger.info("Fetching first-level dependencies for %d requirement(s)", len(direct))

    for index, dep in enumerate(direct):
        if index and delay:
            time.sleep(delay)
        try:
            requirements = lookup.requires_dist(dep.name, dep.version)
        except RegistryLookupError as exc:
            logger.warning("Failed to fetch dependencies for %s: %s", dep, exc)
            continue

        for requirement in requirements:
            parsed = parse_requirement_line(strip_marker(requirement))
            if parsed is None:
                continue
            sub_name, sub_specifier = parsed
            canonical = canonicalize_name(sub_name)
            if canonical in seen_names:
                continue
            sub_dep = _to_dependency(sub_name, sub_specifier)
            if sub_dep is None:
                continue
            found.add(sub_dep)
            seen_names.add(canonical)

    return found.sorted()
