"""Data models for collected dependencies."""

from __future__ import annotations

from .dependency import UNVERSIONED, Dependency, Ecosystem, SourceType
from .dependency_set import DependencySet, sort_key
from .scan_session import FileFailure, ScanSession

__all__ = [
    "UNVERSIONED",
    "Dependency",
    "DependencySet",
    "Ecosystem",
    "FileFailure",
    "ScanSession",
    "SourceType",
    "sort_key",
]
