"""Per-request resolution of component identifiers to registry documents."""

from __future__ import annotations

import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Sequence

from .analyzers import DEFAULT_DEPENDENCY, DependencyDetector, get_detector
from .config import DEFAULT_NAMESPACE, DEFAULT_SUFFIX, RegistryConfig
from .logging import get_logger
from .models import Registry, RegistryEntry, Resolution, ResolutionState
from .naming import slug_to_name, synthesize_description
from .sources import read_source

DOCUMENT_SUFFIX = ".json"
ITEM_TYPE = "registry:ui"
NOT_FOUND_MESSAGE = "Component not found"

# Fallback reads only accept plain file names inside the source directory.
_SAFE_SLUG_RE = re.compile(r"[\w][\w.-]*")


def normalize_slug(slug: str) -> str:
    """Strip one trailing ``.json`` so ``modal.json`` and ``modal`` are equivalent."""
    if slug.endswith(DOCUMENT_SUFFIX):
        return slug[: -len(DOCUMENT_SUFFIX)]
    return slug


def build_document(
    slug: str,
    *,
    source: str,
    display_name: str,
    description: str,
    dependencies: Sequence[str],
    registry_dependencies: Sequence[str] | None = None,
    tailwind: Mapping[str, Any] | None = None,
    css_vars: Mapping[str, Any] | None = None,
    namespace: str = DEFAULT_NAMESPACE,
    suffix: str = DEFAULT_SUFFIX,
) -> Dict[str, Any]:
    """Render the distribution document for one component."""
    target = f"components/{namespace}/{slug}{suffix}"
    return {
        "name": slug,
        "type": ITEM_TYPE,
        "dependencies": list(dependencies),
        "devDependencies": [],
        "registryDependencies": list(registry_dependencies or []),
        "files": [
            {
                "path": target,
                "content": source,
                "type": ITEM_TYPE,
                "target": target,
            }
        ],
        "tailwind": dict(tailwind or {}),
        "cssVars": dict(css_vars or {}),
        "meta": {"name": display_name, "description": description},
    }


def not_found() -> Resolution:
    return Resolution(
        state=ResolutionState.NOT_FOUND,
        status_code=404,
        document={"error": NOT_FOUND_MESSAGE},
    )


class RegistryResolver:
    """Resolves identifiers against the prebuilt registry, then the source directory.

    The registry is shared and never mutated. Fallback results are computed
    fresh on every call and are not cached.
    """

    def __init__(
        self,
        registry: Registry,
        source_dir: Path,
        *,
        suffix: str = DEFAULT_SUFFIX,
        namespace: str = DEFAULT_NAMESPACE,
        detector: DependencyDetector | None = None,
    ) -> None:
        self.registry = registry
        self.source_dir = source_dir
        self.suffix = suffix
        self.namespace = namespace
        self.detector = detector or get_detector()
        self.logger = get_logger("resolver")

    @classmethod
    def from_config(cls, config: RegistryConfig, registry: Registry) -> "RegistryResolver":
        return cls(
            registry,
            config.source_dir,
            suffix=config.suffix,
            namespace=config.namespace,
            detector=get_detector(config.detection),
        )

    def resolve(self, slug: str) -> Resolution:
        normalized = normalize_slug(slug)

        entry = self.registry.get(normalized)
        if entry is not None:
            return Resolution(
                state=ResolutionState.RESOLVED_FROM_REGISTRY,
                status_code=200,
                document=self._document_from_entry(entry),
            )

        source = self._read_fallback(normalized)
        if source is None:
            self.logger.debug("Component %s not found", normalized)
            return not_found()

        self.logger.debug("Component %s resolved from source directory", normalized)
        document = build_document(
            normalized,
            source=source,
            display_name=slug_to_name(normalized),
            description=synthesize_description(normalized),
            dependencies=self.detector.detect(source),
            namespace=self.namespace,
            suffix=self.suffix,
        )
        return Resolution(
            state=ResolutionState.RESOLVED_FROM_FALLBACK,
            status_code=200,
            document=document,
        )

    def list_components(self) -> List[Dict[str, str]]:
        """Summaries of every precomputed component, in registry order."""
        return [
            {
                "name": entry.identifier,
                "title": entry.display_name,
                "description": entry.description,
            }
            for entry in self.registry.values()
        ]

    def _document_from_entry(self, entry: RegistryEntry) -> Dict[str, Any]:
        return build_document(
            entry.identifier,
            source=entry.source,
            display_name=entry.display_name,
            description=entry.description,
            dependencies=list(entry.dependencies) or [DEFAULT_DEPENDENCY],
            registry_dependencies=entry.registry_dependencies,
            tailwind=entry.tailwind_config,
            css_vars=entry.css_var_config,
            namespace=self.namespace,
            suffix=self.suffix,
        )

    def _read_fallback(self, slug: str) -> str | None:
        if not _SAFE_SLUG_RE.fullmatch(slug) or ".." in slug:
            return None
        path = self.source_dir / f"{slug}{self.suffix}"
        try:
            return read_source(path)
        except (OSError, UnicodeDecodeError):
            return None


__all__ = [
    "DOCUMENT_SUFFIX",
    "ITEM_TYPE",
    "NOT_FOUND_MESSAGE",
    "RegistryResolver",
    "build_document",
    "normalize_slug",
    "not_found",
]
