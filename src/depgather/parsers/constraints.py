"""Best-effort reduction of version constraints to a single exact version.

This is not a resolver. The policy always picks the most conservative
plausible version:

- exact versions (e.g., "1.2.3") are returned unchanged
- wildcards ("2.*") have each ``*`` segment zeroed and are padded to three
  components → "2.0.0"
- comparator sets (">=1.7.4,!=1.8.1,<3.0.0") return the first lower bound,
  else the first ``==`` pin, else the first dotted number anywhere
"""

from __future__ import annotations

import re

CONSTRAINT_CHARS = re.compile(r"[<>=!~,*]")

_LOWER_BOUND = re.compile(r"^>=?\s*([0-9.]+)")
_PINNED = re.compile(r"^==\s*([0-9.]+)")
_DOTTED_NUMBER = re.compile(r"[0-9]+\.[0-9.]+")
_LEADING_OPERATORS = "<>=!~ "


def is_exact(spec: str) -> bool:
    return CONSTRAINT_CHARS.search(spec) is None


def _expand_wildcard(spec: str) -> str:
    segments = ["0" if part == "*" else part for part in spec.lstrip(_LEADING_OPERATORS).split(".")]
    while len(segments) < 3:
        segments.append("0")
    return ".".join(segments)


def normalize_version(spec: str) -> str | None:
    """Return an exact version for ``spec``, or None when it cannot be reduced.

    None means "exclude from expansion"; it must never be read as version 0.
    """
    spec = spec.strip()
    if is_exact(spec):
        return spec

    if "*" in spec:
        return _expand_wildcard(spec)

    clauses = [clause.strip() for clause in spec.split(",")]

    for clause in clauses:
        match = _LOWER_BOUND.match(clause)
        if match:
            return match.group(1)

    for clause in clauses:
        match = _PINNED.match(clause)
        if match:
            return match.group(1)

    for clause in clauses:
        match = _DOTTED_NUMBER.search(clause)
        if match:
            return match.group(0)

    return None
