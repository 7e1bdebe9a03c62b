"""Tests for uiregistry.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from uiregistry.config import ConfigError, RegistryConfig, load_config
from uiregistry.models import ComponentOverride


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    assert isinstance(config, RegistryConfig)
    assert config.root == tmp_path.resolve()
    assert config.source_dir == tmp_path.resolve() / "src" / "registry"
    assert config.output_file == tmp_path.resolve() / "src" / "lib" / "component-registry.ts"
    assert config.suffix == ".tsx"
    assert config.namespace == "nonaxial"
    assert config.detection == "substring"
    assert config.sort_entries is False
    assert config.components == {}


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".uiregistry.yml"
    config_file.write_text(
        """
source_dir: "components/ui"
output_file: "generated/registry.ts"
suffix: "jsx"
namespace: "acme"
detection: "Imports"
sort_entries: yes
components:
  modal:
    registryDependencies:
      - button
    tailwind:
      config:
        theme: {}
  empty-entry:
""",
        encoding="utf-8",
    )

    config = load_config(config_file)
    root = tmp_path.resolve()

    assert config.source_dir == root / "components" / "ui"
    assert config.output_file == root / "generated" / "registry.ts"
    assert config.suffix == ".jsx"
    assert config.namespace == "acme"
    assert config.detection == "imports"
    assert config.sort_entries is True
    assert config.components == {
        "modal": ComponentOverride(
            registry_dependencies=("button",),
            tailwind={"config": {"theme": {}}},
        )
    }


def test_load_config_accepts_file_inside_root(tmp_path: Path) -> None:
    (tmp_path / ".uiregistry.yml").write_text("namespace: shop\n", encoding="utf-8")
    assert load_config(tmp_path / "package.json").namespace == "shop"


def test_load_config_rejects_non_mapping(tmp_path: Path) -> None:
    (tmp_path / ".uiregistry.yml").write_text("- just\n- a list\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_invalid_yaml(tmp_path: Path) -> None:
    (tmp_path / ".uiregistry.yml").write_text("source_dir: [unclosed\n", encoding="utf-8")
    with pytest.raises(ConfigError):
        load_config(tmp_path)


def test_load_config_rejects_non_mapping_css_vars(tmp_path: Path) -> None:
    (tmp_path / ".uiregistry.yml").write_text(
        "components:\n  modal:\n    cssVars: [1, 2]\n", encoding="utf-8"
    )
    with pytest.raises(ConfigError):
        load_config(tmp_path)
