"""Package-registry clients."""

from .pypi import PyPIRegistry, RegistryLookup

__all__ = [
    "PyPIRegistry",
    "RegistryLookup",
]
