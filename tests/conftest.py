"""Shared pytest configuration, markers and config-file fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

type ConfigFileFactory = Callable[..., Path]


def pytest_collection_modifyitems(
    config: pytest.Config, items: list[pytest.Item]
) -> None:
    """Attach suite markers based on test file path."""
    del config
    for item in items:
        parts = set(Path(str(item.fspath)).parts)
        if "e2e_tests" in parts:
            item.add_marker(pytest.mark.e2e)
        elif "integration_tests" in parts:
            item.add_marker(pytest.mark.integration)
        elif "unit_tests" in parts:
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def toml_config_file(tmp_path: Path) -> ConfigFileFactory:
    """Write step fields to a top-level TOML config and return its path."""

    def _write(name: str = "step.toml", **fields: str) -> Path:
        path = tmp_path / name
        path.write_text(
            "".join(f"{key} = '{value}'\n" for key, value in fields.items()),
            encoding="utf-8",
        )
        return path

    return _write
