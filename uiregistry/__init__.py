"""Static component registry generation and serving."""

from .builder import BuildAbort, BuildResult, RegistryBuilder
from .models import Registry, RegistryEntry, Resolution, ResolutionState, freeze_registry
from .resolver import RegistryResolver, build_document, normalize_slug

__version__ = "0.1.0"

__all__ = [
    "BuildAbort",
    "BuildResult",
    "Registry",
    "RegistryBuilder",
    "RegistryEntry",
    "RegistryResolver",
    "Resolution",
    "ResolutionState",
    "build_document",
    "freeze_registry",
    "normalize_slug",
]
