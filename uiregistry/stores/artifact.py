"""Generated registry artifact: rendering, atomic writes and loading."""

from __future__ import annotations

import json
import os
import re
from pathlib import Path
from typing import Any, Dict, List, Mapping, Tuple

from jinja2 import Environment, FileSystemLoader, StrictUndefined

from ..models import Registry, RegistryEntry, freeze_registry
from ..naming import slug_to_name, synthesize_description
from ..sources import read_source

TEMPLATE_NAME = "component-registry.ts.j2"

_TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

_REGISTRY_START_RE = re.compile(r"export\s+const\s+componentRegistry\b[^=]*=\s*\{")
_KEY_RE = re.compile(r'\s*("(?:[^"\\]|\\.)*")\s*:\s*\{')
_FIELD_RE = re.compile(r"\s*([A-Za-z_$][\w$]*)\s*:\s*")

_decoder = json.JSONDecoder()


class ArtifactError(RuntimeError):
    """Raised when a generated registry artifact cannot be parsed."""


def render_artifact(registry: Registry) -> str:
    """Render ``registry`` as the generated TypeScript module."""
    template = _environment().get_template(TEMPLATE_NAME)
    return template.render(entries=list(registry.values()))


def write_artifact(path: Path, registry: Registry) -> Path:
    """Replace ``path`` with a freshly rendered artifact.

    The content is written to a temporary sibling first, so readers only ever
    observe the previous artifact or the complete new one.
    """
    content = render_artifact(registry)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_name(f".{path.name}.tmp")
    try:
        with tmp_path.open("w", encoding="utf-8", newline="") as handle:
            handle.write(content)
        os.replace(tmp_path, path)
    except OSError:
        tmp_path.unlink(missing_ok=True)
        raise
    return path


def load_registry(path: Path) -> Registry:
    """Parse a generated artifact back into a read-only registry."""
    return parse_artifact(read_source(path))


def parse_artifact(text: str) -> Registry:
    start = _REGISTRY_START_RE.search(text)
    if start is None:
        raise ArtifactError("componentRegistry declaration not found")

    entries: List[RegistryEntry] = []
    pos = start.end()
    while True:
        pos = _skip_whitespace(text, pos)
        if text.startswith("}", pos):
            break
        key = _KEY_RE.match(text, pos)
        if key is None:
            raise ArtifactError(f"Expected registry key at offset {pos}")
        slug = json.loads(key.group(1))
        fields, pos = _parse_fields(text, key.end())
        entries.append(_entry_from_fields(slug, fields))

    try:
        return freeze_registry(entries)
    except ValueError as exc:
        raise ArtifactError(str(exc)) from exc


# ----------------------------------------------------------------------
# Internal helpers


def _environment() -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(_TEMPLATES_DIR)),
        autoescape=False,
        keep_trailing_newline=True,
        undefined=StrictUndefined,
    )
    env.filters["json"] = _to_json
    return env


def _to_json(value: Any) -> str:
    return json.dumps(value, ensure_ascii=False, default=_json_default)


def _json_default(value: Any) -> Any:
    if isinstance(value, Mapping):
        return dict(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def _skip_whitespace(text: str, pos: int) -> int:
    while pos < len(text) and text[pos].isspace():
        pos += 1
    return pos


def _parse_fields(text: str, pos: int) -> Tuple[Dict[str, Any], int]:
    fields: Dict[str, Any] = {}
    while True:
        pos = _skip_whitespace(text, pos)
        if pos >= len(text):
            raise ArtifactError("Unexpected end of artifact inside registry entry")
        if text[pos] == "}":
            pos = _skip_whitespace(text, pos + 1)
            if text.startswith(",", pos):
                pos += 1
            return fields, pos
        field_match = _FIELD_RE.match(text, pos)
        if field_match is None:
            raise ArtifactError(f"Expected field name at offset {pos}")
        name = field_match.group(1)
        pos = field_match.end()
        if text.startswith("`", pos):
            value, pos = _read_template_literal(text, pos + 1)
        else:
            try:
                value, pos = _decoder.raw_decode(text, pos)
            except json.JSONDecodeError as exc:
                raise ArtifactError(f"Invalid value for field '{name}': {exc}") from exc
        fields[name] = value
        pos = _skip_whitespace(text, pos)
        if text.startswith(",", pos):
            pos += 1


def _read_template_literal(text: str, pos: int) -> Tuple[str, int]:
    """Return the raw (still escaped) body of a backtick literal and the offset past it."""
    start = pos
    while pos < len(text):
        char = text[pos]
        if char == "\\":
            pos += 2
            continue
        if char == "`":
            return text[start:pos], pos + 1
        pos += 1
    raise ArtifactError("Unterminated template literal in artifact")


def _entry_from_fields(slug: str, fields: Dict[str, Any]) -> RegistryEntry:
    code = fields.get("code")
    if not isinstance(code, str):
        raise ArtifactError(f"Registry entry '{slug}' has no code")

    name = fields.get("name")
    description = fields.get("description")
    dependencies = fields.get("dependencies")
    registry_dependencies = fields.get("registryDependencies")
    tailwind = fields.get("tailwind")
    css_vars = fields.get("cssVars")

    return RegistryEntry(
        identifier=slug,
        display_name=name if isinstance(name, str) else slug_to_name(slug),
        description=(
            description if isinstance(description, str) else synthesize_description(slug)
        ),
        dependencies=_as_str_tuple(dependencies) or (),
        escaped_source=code,
        registry_dependencies=_as_str_tuple(registry_dependencies),
        tailwind_config=tailwind if isinstance(tailwind, dict) else None,
        css_var_config=css_vars if isinstance(css_vars, dict) else None,
    )


def _as_str_tuple(value: Any) -> Tuple[str, ...] | None:
    if not isinstance(value, list):
        return None
    return tuple(str(item) for item in value if isinstance(item, str))


__all__ = ["ArtifactError", "load_registry", "parse_artifact", "render_artifact", "write_artifact"]
