"""depgather core package.

Collects a canonical, deduplicated list of package identities from npm and
PyPI manifests and lockfiles so that vulnerability lookups and reporting can
consume a single flat view.
"""

from .config import Settings, load_settings
from .core import get_dependencies, parse_file, scan
from .errors import (
    ConfigError,
    DepgatherError,
    LockfileFormatError,
    RegistryLookupError,
    ScanPathError,
    UnsupportedFileError,
)
from .logging_config import setup_logging
from .models import Dependency, DependencySet, Ecosystem, ScanSession, SourceType

__all__ = [
    "ConfigError",
    "Dependency",
    "DependencySet",
    "DepgatherError",
    "Ecosystem",
    "LockfileFormatError",
    "RegistryLookupError",
    "ScanPathError",
    "ScanSession",
    "Settings",
    "SourceType",
    "UnsupportedFileError",
    "get_dependencies",
    "load_settings",
    "parse_file",
    "scan",
    "setup_logging",
]
