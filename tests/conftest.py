from __future__ import annotations

from pathlib import Path

import pytest

from tests._fixtures.component_dir import ComponentProject


@pytest.fixture
def project(tmp_path: Path) -> ComponentProject:
    """Provide a component project rooted at the pytest tmp_path."""
    return ComponentProject(tmp_path)
