"""Parse yarn.lock (v1 format) to capture resolved dependencies.

The grammar is handled by a two-state machine::

    AWAITING_HEADER --header line--> IN_BLOCK
    IN_BLOCK --indented `version "x"`--> AWAITING_HEADER (emits name@x)

A header line in either state starts a new block. Blank lines and comments
never change state. Resolved URLs and integrity hashes are not extracted
from this format.
"""

from __future__ import annotations

import re
from enum import Enum
from pathlib import Path

from ..models import Dependency, DependencySet, Ecosystem

_VERSION_LINE = re.compile(r'^version\s+"([^"]+)"\s*$')


class YarnState(Enum):
    AWAITING_HEADER = "awaiting-header"
    IN_BLOCK = "in-block"


def header_name(line: str) -> str | None:
    """Return the package name declared by a block header, else None.

    ``"@babel/core@^7.0.0", "@babel/core@^7.1.0":`` → ``@babel/core``. Only
    the first specifier is read; the others alias the same package.
    """
    if not line or line[0].isspace() or not line.rstrip().endswith(":"):
        return None
    header = line.rstrip()[:-1]
    first = header.split(",", 1)[0].strip().strip('"')
    # the scope's own "@" is not the name/range separator
    at = first.find("@", 1)
    if at <= 0:
        return None
    return first[:at]


def transition(
    state: YarnState, name: str | None, line: str
) -> tuple[YarnState, str | None, tuple[str, str] | None]:
    """Advance the parser by one line.

    Returns the new state, the captured package name and, when a version line
    completes a block, the emitted ``(name, version)`` pair.
    """
    stripped = line.strip()
    if not stripped or stripped.startswith("#"):
        return state, name, None

    new_name = header_name(line)
    if new_name is not None:
        return YarnState.IN_BLOCK, new_name, None

    if state is YarnState.IN_BLOCK and line[0].isspace():
        match = _VERSION_LINE.match(stripped)
        if match and name:
            return YarnState.AWAITING_HEADER, None, (name, match.group(1))

    return state, name, None


def parse(path: Path) -> list[Dependency]:
    """Return list of dependencies from a yarn lock file."""
    found = DependencySet()
    state = YarnState.AWAITING_HEADER
    name: str | None = None

    for line in path.read_text(encoding="utf-8").splitlines():
        state, name, emitted = transition(state, name, line)
        if emitted is not None:
            found.add(Dependency(name=emitted[0], version=emitted[1], ecosystem=Ecosystem.NPM))

    return found.sorted()
