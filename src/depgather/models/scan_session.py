"""Result value of one scan invocation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .dependency import Dependency, Ecosystem


@dataclass(frozen=True)
class FileFailure:
    """A file skipped during traversal because it could not be parsed."""

    path: Path
    reason: str

    def to_dict(self) -> dict[str, str]:
        return {"path": str(self.path), "reason": self.reason}


@dataclass(frozen=True)
class ScanSession:
    """Immutable snapshot of the dependencies collected by one scan.

    Callers that need the results of a scan for later operations keep and
    pass this value around; nothing is cached between invocations.
    """

    root: Path
    dependencies: tuple[Dependency, ...]
    files: tuple[Path, ...] = ()
    failures: tuple[FileFailure, ...] = ()

    @property
    def stats(self) -> dict[str, object]:
        from ..report import dependency_stats

        return dependency_stats(self.dependencies)

    def by_ecosystem(self, ecosystem: Ecosystem) -> list[Dependency]:
        return [dep for dep in self.dependencies if dep.ecosystem == ecosystem]

    def to_dict(self) -> dict[str, object]:
        return {
            "root": str(self.root),
            "dependencies": [dep.to_dict() for dep in self.dependencies],
            "files": [str(path) for path in self.files],
            "failures": [failure.to_dict() for failure in self.failures],
            "totals": self.stats,
        }
