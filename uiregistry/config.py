"""Configuration loading for uiregistry (.uiregistry.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .models import ComponentOverride

CONFIG_FILENAME = ".uiregistry.yml"

DEFAULT_SOURCE_DIR = "src/registry"
DEFAULT_OUTPUT_FILE = "src/lib/component-registry.ts"
DEFAULT_SUFFIX = ".tsx"
DEFAULT_NAMESPACE = "nonaxial"
DEFAULT_DETECTION = "substring"


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class RegistryConfig:
    """Represents the settings defined in .uiregistry.yml."""

    root: Path
    source_dir: Path
    output_file: Path
    suffix: str = DEFAULT_SUFFIX
    namespace: str = DEFAULT_NAMESPACE
    detection: str = DEFAULT_DETECTION
    sort_entries: bool = False
    components: Dict[str, ComponentOverride] = field(default_factory=dict)

    @classmethod
    def defaults(cls, root: Path) -> "RegistryConfig":
        root = root.resolve()
        return cls(
            root=root,
            source_dir=root / DEFAULT_SOURCE_DIR,
            output_file=root / DEFAULT_OUTPUT_FILE,
        )


def load_config(config_path: Path) -> RegistryConfig:
    """Load configuration from disk, falling back to defaults when absent."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return RegistryConfig.defaults(root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    source_dir = _as_str(data.get("source_dir")) or DEFAULT_SOURCE_DIR
    output_file = _as_str(data.get("output_file")) or DEFAULT_OUTPUT_FILE
    suffix = _as_str(data.get("suffix")) or DEFAULT_SUFFIX
    if not suffix.startswith("."):
        suffix = f".{suffix}"

    components: Dict[str, ComponentOverride] = {}
    for slug, raw in _as_dict(data.get("components")).items():
        override = _parse_override(str(slug), raw)
        if override is not None:
            components[str(slug)] = override

    return RegistryConfig(
        root=root,
        source_dir=root / source_dir,
        output_file=root / output_file,
        suffix=suffix,
        namespace=_as_str(data.get("namespace")) or DEFAULT_NAMESPACE,
        detection=(_as_str(data.get("detection")) or DEFAULT_DETECTION).lower(),
        sort_entries=_as_bool(data.get("sort_entries")) or False,
        components=components,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded or {}


def _parse_override(slug: str, raw: Any) -> Optional[ComponentOverride]:
    if raw is None:
        return None
    if not isinstance(raw, dict):
        raise ConfigError(f"components.{slug} must be a mapping")

    registry_dependencies = None
    if "registryDependencies" in raw:
        registry_dependencies = tuple(_as_str_list(raw.get("registryDependencies")))

    tailwind = raw.get("tailwind")
    css_vars = raw.get("cssVars")
    for key, value in (("tailwind", tailwind), ("cssVars", css_vars)):
        if value is not None and not isinstance(value, dict):
            raise ConfigError(f"components.{slug}.{key} must be a mapping")

    return ComponentOverride(
        registry_dependencies=registry_dependencies,
        tailwind=tailwind,
        css_vars=css_vars,
    )


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []
