"""Classify npm lockfile ``resolved`` and ``integrity`` fields."""

from __future__ import annotations

from ..models import SourceType

REGISTRY_PREFIXES = (
    "https://registry.npmjs.org/",
    "https://registry.yarnpkg.com/",
)

STRONG_INTEGRITY_PREFIX = "sha512-"

# Order matters: the first matching rule wins, so "git+ssh://git@github.com/..."
# is git, not github.
_RULES: tuple[tuple[SourceType, tuple[str, ...], tuple[str, ...]], ...] = (
    (SourceType.GIT, ("git+",), ()),
    (SourceType.GITHUB, ("github:",), ("github.com",)),
    (SourceType.GITLAB, ("gitlab:",), ("gitlab.com",)),
    (SourceType.BITBUCKET, ("bitbucket:",), ("bitbucket.org",)),
    (SourceType.SVN, ("svn+",), ()),
    (SourceType.HTTP, ("http://",), ()),
    (SourceType.REGISTRY, REGISTRY_PREFIXES, ()),
    (SourceType.HTTPS, ("https://",), ()),
    (SourceType.FILE, ("file:",), ()),
    (SourceType.LINK, ("link:",), ()),
)


def classify_source(resolved: str | None) -> SourceType:
    """Return where a package was resolved from."""
    if not resolved:
        return SourceType.UNKNOWN
    for source_type, prefixes, substrings in _RULES:
        if resolved.startswith(prefixes) or any(s in resolved for s in substrings):
            return source_type
    return SourceType.UNKNOWN


def is_strong_integrity(integrity: str | None) -> bool:
    """True iff the integrity hash uses sha512."""
    return bool(integrity) and integrity.startswith(STRONG_INTEGRITY_PREFIX)
