"""Persistence helpers for uiregistry."""

from .artifact import ArtifactError, load_registry, render_artifact, write_artifact

__all__ = ["ArtifactError", "load_registry", "render_artifact", "write_artifact"]
