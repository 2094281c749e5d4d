"""Exceptions raised by depgather."""

from __future__ import annotations


class DepgatherError(RuntimeError):
    """Base error for all depgather failures."""


class ConfigError(DepgatherError):
    """Raised when the configuration file cannot be loaded or is invalid."""


class ScanPathError(DepgatherError):
    """Raised when a scan target does not exist or is neither a file nor a directory."""


class UnsupportedFileError(DepgatherError):
    """Raised when a file argument is not a recognized manifest or lockfile."""


class LockfileFormatError(DepgatherError, ValueError):
    """Raised when a manifest or lockfile cannot be parsed."""


class RegistryLookupError(DepgatherError):
    """Raised when a registry lookup fails or the release is unknown."""
