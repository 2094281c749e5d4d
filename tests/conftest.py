"""Pytest configuration and shared fixtures for all tests."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from depgather.errors import RegistryLookupError


class FakeRegistry:
    """In-memory stand-in for the PyPI registry.

    ``releases`` maps (name, version) to the requirement strings declared by
    that release; anything else is reported as not found.
    """

    def __init__(self, releases: dict[tuple[str, str], list[str]] | None = None) -> None:
        self.releases = releases or {}
        self.calls: list[tuple[str, str]] = []

    def requires_dist(self, name: str, version: str) -> list[str]:
        self.calls.append((name, version))
        try:
            return list(self.releases[(name, version)])
        except KeyError:
            raise RegistryLookupError(f"{name}@{version} not found") from None


@pytest.fixture
def fake_registry() -> FakeRegistry:
    return FakeRegistry()


@pytest.fixture
def write_json():
    def _write(path: Path, data: object) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        return path

    return _write


@pytest.fixture(autouse=True)
def isolated_env(monkeypatch):
    """Keep user configuration out of the tests."""
    for var in ("DEPGATHER_CONFIG", "DEPGATHER_PYPI_URL", "DEPGATHER_LOOKUP_DELAY", "DEPGATHER_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
