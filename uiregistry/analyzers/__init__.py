"""Dependency detector plugins, discovery utilities and metadata extraction."""

from __future__ import annotations

from importlib import metadata
from typing import Callable, Dict, Iterable, List

from .base import DEFAULT_DEPENDENCY, DependencyDetector, DetectionRule, RuleBasedDetector
from .dependencies import DEFAULT_RULES, ImportDetector, SubstringDetector
from .descriptions import extract_description

_ENTRY_POINT_GROUP = "uiregistry.detectors"

DEFAULT_MODE = "substring"

_BUILTIN_FACTORIES: Dict[str, Callable[[], DependencyDetector]] = {
    "substring": SubstringDetector,
    "imports": ImportDetector,
}


def available_modes() -> List[str]:
    """Return every detection mode that :func:`get_detector` accepts."""
    modes = list(_BUILTIN_FACTORIES)
    for entry in _iter_entry_points():
        if entry.name.lower() not in modes:
            modes.append(entry.name.lower())
    return modes


def get_detector(mode: str | None = None) -> DependencyDetector:
    """Instantiate the detector registered under ``mode``."""
    key = (mode or DEFAULT_MODE).lower()
    factory = _BUILTIN_FACTORIES.get(key)
    if factory is not None:
        return factory()

    for entry in _iter_entry_points():
        if entry.name.lower() != key:
            continue
        try:
            loaded = entry.load()
        except Exception as exc:  # pragma: no cover - defensive guard
            raise RuntimeError(f"Failed to load detector entry point '{entry.name}': {exc}") from exc
        return _coerce_detector(loaded)

    known = ", ".join(available_modes())
    raise ValueError(f"Unknown detection mode: {mode} (expected one of: {known})")


def detect_dependencies(source: str, mode: str | None = None) -> List[str]:
    """Detect the dependencies of ``source`` with the detector for ``mode``."""
    return get_detector(mode).detect(source)


def _coerce_detector(obj: object) -> DependencyDetector:
    if isinstance(obj, DependencyDetector):
        return obj
    if isinstance(obj, type) and issubclass(obj, DependencyDetector):
        return obj()
    if callable(obj):
        instance = obj()
        if isinstance(instance, DependencyDetector):
            return instance
    raise TypeError("Detector entry point must be a DependencyDetector subclass or factory")


def _iter_entry_points() -> Iterable[metadata.EntryPoint]:
    try:
        entry_points = metadata.entry_points()
    except Exception:  # pragma: no cover - defensive guard
        return []

    if hasattr(entry_points, "select"):
        return entry_points.select(group=_ENTRY_POINT_GROUP)  # type: ignore[return-value]

    return entry_points.get(_ENTRY_POINT_GROUP, [])  # type: ignore[return-value]


__all__ = [
    "DEFAULT_DEPENDENCY",
    "DEFAULT_MODE",
    "DEFAULT_RULES",
    "DependencyDetector",
    "DetectionRule",
    "ImportDetector",
    "RuleBasedDetector",
    "SubstringDetector",
    "available_modes",
    "detect_dependencies",
    "extract_description",
    "get_detector",
]
