#!/usr/bin/env python3
"""Architecture boundary checks."""

from __future__ import annotations

from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PACKAGE = ROOT / "src/variable_converter"

FRONT_END_IMPORTS = [
    "import typer",
    "from typer",
    "import fastapi",
    "from fastapi",
    "import uvicorn",
]


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


def _assert_no_imports(path: Path, banned: list[str]) -> None:
    text = _read(path)
    for token in banned:
        if token in text:
            raise SystemExit(f"Architecture violation in {path}: found '{token}'")


def main() -> None:
    """Run repository architecture boundary checks."""
    # The converter core stays a pure function of its inputs.
    _assert_no_imports(
        PACKAGE / "converter/core.py",
        [
            *FRONT_END_IMPORTS,
            "import os",
            "import logging",
            "from variable_converter.application",
            "from variable_converter.schemas",
        ],
    )

    for path in (PACKAGE / "application").glob("*.py"):
        _assert_no_imports(path, FRONT_END_IMPORTS)

    _assert_no_imports(PACKAGE / "schemas.py", FRONT_END_IMPORTS)

    print("Architecture checks passed.")


if __name__ == "__main__":
    main()
