"""Core data models shared across uiregistry components."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

from .serializer import unescape_source

Registry = Mapping[str, "RegistryEntry"]


@dataclass(frozen=True)
class RegistryEntry:
    """Precomputed metadata and escaped source for one component."""

    identifier: str
    display_name: str
    description: str
    dependencies: Tuple[str, ...]
    escaped_source: str
    registry_dependencies: Optional[Tuple[str, ...]] = None
    tailwind_config: Optional[Mapping[str, Any]] = None
    css_var_config: Optional[Mapping[str, Any]] = None

    @property
    def source(self) -> str:
        """Original component source, byte-for-byte."""
        return unescape_source(self.escaped_source)


@dataclass(frozen=True)
class ComponentOverride:
    """Registry fields that cannot be inferred from source and come from config."""

    registry_dependencies: Optional[Tuple[str, ...]] = None
    tailwind: Optional[Mapping[str, Any]] = None
    css_vars: Optional[Mapping[str, Any]] = None


class ResolutionState(str, Enum):
    RESOLVED_FROM_REGISTRY = "resolved_from_registry"
    RESOLVED_FROM_FALLBACK = "resolved_from_fallback"
    NOT_FOUND = "not_found"


@dataclass
class Resolution:
    """Outcome of resolving one identifier for a request."""

    state: ResolutionState
    status_code: int
    document: Dict[str, Any] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return self.state is not ResolutionState.NOT_FOUND


def freeze_registry(entries: Iterable[RegistryEntry]) -> Registry:
    """Build the read-only identifier -> entry mapping, preserving order."""
    mapping: Dict[str, RegistryEntry] = {}
    for entry in entries:
        if entry.identifier in mapping:
            raise ValueError(f"Duplicate registry identifier '{entry.identifier}'")
        mapping[entry.identifier] = entry
    return MappingProxyType(mapping)


__all__ = [
    "ComponentOverride",
    "Registry",
    "RegistryEntry",
    "Resolution",
    "ResolutionState",
    "freeze_registry",
]
