"""Tests for the batch registry builder."""

from __future__ import annotations

import logging
from pathlib import Path

import pytest

from tests._fixtures.component_dir import ComponentProject
from tests._fixtures.sources import ICON_TOAST, MAGNETIC_BUTTON, TEMPLATE_HEAVY
from uiregistry.analyzers import DEFAULT_DEPENDENCY
from uiregistry.builder import BuildAbort, RegistryBuilder
from uiregistry.stores import load_registry


def _write_sources(project: ComponentProject) -> None:
    project.write(
        {
            "magnetic-button.tsx": MAGNETIC_BUTTON,
            "plain-card.tsx": TEMPLATE_HEAVY,
            "toast.tsx": ICON_TOAST,
            "notes.md": "not a component",
        }
    )


def test_build_writes_registry_for_every_component(project: ComponentProject) -> None:
    _write_sources(project)

    result = RegistryBuilder(project.config()).build()

    assert result.output_path == project.output_file
    assert result.count == 3
    loaded = load_registry(project.output_file)
    assert set(loaded) == {"magnetic-button", "plain-card", "toast"}

    button = loaded["magnetic-button"]
    assert button.display_name == "Magnetic Button"
    assert button.description == "Button that follows cursor with magnetic effect"
    assert button.dependencies == ("framer-motion", "clsx", "tailwind-merge")
    assert button.source == MAGNETIC_BUTTON

    card = loaded["plain-card"]
    assert card.description == "Plain Card component"
    assert card.dependencies == (DEFAULT_DEPENDENCY,)
    assert card.source == TEMPLATE_HEAVY

    assert loaded["toast"].description == "Toast notification with spring entrance"


def test_build_ignores_subdirectories(project: ComponentProject) -> None:
    _write_sources(project)
    nested = project.source_dir / "nested"
    nested.mkdir()
    (nested / "hidden.tsx").write_text("export const Hidden = 1;\n", encoding="utf-8")
    (project.source_dir / "folder.tsx").mkdir()

    result = RegistryBuilder(project.config()).build()

    assert "hidden" not in result.registry
    assert "folder" not in result.registry


def test_build_sorts_when_configured(project: ComponentProject) -> None:
    _write_sources(project)
    project.write_config("sort_entries: true\n")

    result = RegistryBuilder(project.config()).build()

    assert list(result.registry) == ["magnetic-button", "plain-card", "toast"]


def test_build_overwrites_previous_artifact(project: ComponentProject) -> None:
    _write_sources(project)
    builder = RegistryBuilder(project.config())
    builder.build()

    (project.source_dir / "toast.tsx").unlink()
    builder.build()

    assert "toast" not in load_registry(project.output_file)


def test_build_applies_component_overrides(project: ComponentProject) -> None:
    _write_sources(project)
    project.write_config(
        """
        components:
          toast:
            registryDependencies: [button]
            cssVars:
              light:
                toast-bg: "0 0% 100%"
        """
    )

    result = RegistryBuilder(project.config()).build()

    toast = load_registry(result.output_path)["toast"]
    assert toast.registry_dependencies == ("button",)
    assert toast.css_var_config == {"light": {"toast-bg": "0 0% 100%"}}
    assert toast.tailwind_config is None
    assert result.registry["plain-card"].registry_dependencies is None


def test_build_logs_progress_per_component(
    project: ComponentProject, caplog: pytest.LogCaptureFixture, monkeypatch
) -> None:
    _write_sources(project)
    monkeypatch.setattr(logging.getLogger("uiregistry"), "propagate", True)

    with caplog.at_level(logging.INFO, logger="uiregistry"):
        RegistryBuilder(project.config()).build()

    progress = [record.getMessage() for record in caplog.records if record.getMessage().startswith("  - ")]
    assert sorted(progress) == ["  - magnetic-button", "  - plain-card", "  - toast"]


def test_build_aborts_when_directory_missing(tmp_path: Path) -> None:
    project = ComponentProject(tmp_path)
    project.source_dir.rmdir()

    with pytest.raises(BuildAbort):
        RegistryBuilder(project.config()).build()

    assert not project.output_file.exists()


def test_build_aborts_without_partial_output(project: ComponentProject) -> None:
    _write_sources(project)
    (project.source_dir / "broken.tsx").write_bytes(b"\xff\xfe not utf-8")
    project.output_file.parent.mkdir(parents=True)
    project.output_file.write_text("previous artifact", encoding="utf-8")

    with pytest.raises(BuildAbort):
        RegistryBuilder(project.config()).build()

    assert project.output_file.read_text(encoding="utf-8") == "previous artifact"


def test_build_aborts_when_file_vanishes(project: ComponentProject, monkeypatch) -> None:
    _write_sources(project)
    import uiregistry.builder as builder_module

    real_read = builder_module.read_source

    def _flaky_read(path: Path) -> str:
        if path.name == "toast.tsx":
            raise FileNotFoundError(path)
        return real_read(path)

    monkeypatch.setattr(builder_module, "read_source", _flaky_read)

    with pytest.raises(BuildAbort):
        RegistryBuilder(project.config()).build()

    assert not project.output_file.exists()
