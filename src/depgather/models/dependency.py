"""Dependency model shared by every parser."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

UNVERSIONED = "*"


class Ecosystem(str, Enum):
    """Package-hosting system a dependency belongs to."""

    NPM = "npm"
    PYPI = "pypi"
    UNKNOWN = "unknown"


class SourceType(str, Enum):
    """Origin of an npm-family package, derived from its resolved URL."""

    REGISTRY = "registry"
    GIT = "git"
    GITHUB = "github"
    GITLAB = "gitlab"
    BITBUCKET = "bitbucket"
    SVN = "svn"
    HTTP = "http"
    HTTPS = "https"
    FILE = "file"
    LINK = "link"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class Dependency:
    """A single package identity found in a manifest or lockfile."""

    name: str
    version: str
    ecosystem: Ecosystem = Ecosystem.UNKNOWN
    source_type: SourceType | None = None
    integrity_is_strong: bool | None = None
    resolved_url: str | None = None

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Dependency name must be non-empty")
        if not self.version:
            raise ValueError(f"Dependency {self.name!r} must have a non-empty version")

    @property
    def key(self) -> tuple[str, str]:
        return (self.name, self.version)

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "name": self.name,
            "version": self.version,
            "ecosystem": self.ecosystem.value,
        }
        if self.source_type is not None:
            data["sourceType"] = self.source_type.value
        if self.integrity_is_strong is not None:
            data["integrityIsStrong"] = self.integrity_is_strong
        if self.resolved_url is not None:
            data["resolvedUrl"] = self.resolved_url
        return data

    def __str__(self) -> str:
        return f"{self.name}@{self.version}"
