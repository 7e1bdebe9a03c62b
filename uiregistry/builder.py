"""Batch generation of the static component registry artifact."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List

from .analyzers import DependencyDetector, extract_description, get_detector
from .config import RegistryConfig
from .logging import get_logger
from .models import ComponentOverride, Registry, RegistryEntry, freeze_registry
from .naming import slug_from_filename, slug_to_name
from .serializer import escape_source
from .sources import list_source_files, read_source
from .stores import write_artifact


class BuildAbort(RuntimeError):
    """Raised when a build cannot complete; no artifact is written."""


@dataclass
class BuildResult:
    """Outcome of a successful registry build."""

    output_path: Path
    registry: Registry

    @property
    def count(self) -> int:
        return len(self.registry)


class RegistryBuilder:
    """Scans the component directory and regenerates the registry artifact."""

    def __init__(
        self,
        config: RegistryConfig,
        detector: DependencyDetector | None = None,
    ) -> None:
        self.config = config
        self.detector = detector or get_detector(config.detection)
        self.logger = get_logger("builder")

    def build(self) -> BuildResult:
        """Run one full build. Either everything is written or nothing is."""
        registry = self.collect()
        output_path = self.config.output_file
        try:
            write_artifact(output_path, registry)
        except OSError as exc:
            raise BuildAbort(f"Failed to write registry artifact {output_path}: {exc}") from exc
        self.logger.info("Generated %s with %d components", output_path, len(registry))
        return BuildResult(output_path=output_path, registry=registry)

    def collect(self) -> Registry:
        """Compute every entry in memory without touching the output file."""
        source_dir = self.config.source_dir
        self.logger.info("Scanning %s", source_dir)
        try:
            files = list_source_files(
                source_dir, self.config.suffix, sort=self.config.sort_entries
            )
        except OSError as exc:
            raise BuildAbort(f"Cannot read component directory {source_dir}: {exc}") from exc
        self.logger.info("Found %d component files", len(files))

        entries: List[RegistryEntry] = []
        for path in files:
            slug = slug_from_filename(path.name, self.config.suffix)
            try:
                source = read_source(path)
            except (OSError, UnicodeDecodeError) as exc:
                raise BuildAbort(f"Cannot read component source {path}: {exc}") from exc
            entries.append(self.build_entry(slug, source))
            self.logger.info("  - %s", slug)

        return freeze_registry(entries)

    def build_entry(self, slug: str, source: str) -> RegistryEntry:
        override = self.config.components.get(slug) or ComponentOverride()
        return RegistryEntry(
            identifier=slug,
            display_name=slug_to_name(slug),
            description=extract_description(source, slug),
            dependencies=tuple(self.detector.detect(source)),
            escaped_source=escape_source(source),
            registry_dependencies=override.registry_dependencies,
            tailwind_config=override.tailwind,
            css_var_config=override.css_vars,
        )


__all__ = ["BuildAbort", "BuildResult", "RegistryBuilder"]
