"""Pydantic schemas for build-step configuration."""

from __future__ import annotations

import json
import tomllib
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, ValidationError

from variable_converter.errors import ConfigurationError

FIELD_NAMES = (
    "source_variable",
    "source_variable_pattern",
    "destination_variable",
    "destination_variable_pattern",
)

# Hint labels keep the build-step editor's camelCase field names.
_FIELD_LABELS = {
    "source_variable": "sourceVariable",
    "source_variable_pattern": "sourceVariablePattern",
    "destination_variable": "destinationVariable",
    "destination_variable_pattern": "destinationVariablePattern",
}


class VariableConverterConfig(BaseModel):
    """Validated, not yet expanded, configuration of one conversion step.

    Blank values are accepted here; the converter reports them so that the
    order of its checks stays observable.
    """

    model_config = ConfigDict(extra="forbid", strict=True, frozen=True)

    source_variable: str
    source_variable_pattern: str
    destination_variable: str
    destination_variable_pattern: str
    source_is_variable_name: bool = False


type HintLevel = Literal["ok", "warning", "error"]


@dataclass(frozen=True)
class FieldCheck:
    """Editor hint for one configuration field."""

    field: str
    level: HintLevel
    message: str = ""

    @property
    def ok(self) -> bool:
        return self.level == "ok"


def check_field(name: str, value: str) -> FieldCheck:
    """Return the editor hint for a single field value."""
    label = _FIELD_LABELS.get(name, name)
    if len(value) == 0:
        return FieldCheck(name, "error", f"Please set a {label}")
    if len(value) < 2:
        return FieldCheck(name, "warning", f"Isn't the {label} too short?")
    return FieldCheck(name, "ok")


def lint_config(config: VariableConverterConfig) -> list[FieldCheck]:
    """Return the non-ok hints for every text field of ``config``."""
    checks = (check_field(name, getattr(config, name)) for name in FIELD_NAMES)
    return [check for check in checks if not check.ok]


def parse_config(data: Mapping[str, object]) -> VariableConverterConfig:
    """Validate a raw mapping into a config.

    Raises
    ------
    ConfigurationError
        If required fields are missing, unknown keys are present or values
        have the wrong type.
    """
    try:
        return VariableConverterConfig.model_validate(dict(data))
    except ValidationError as exc:
        raise ConfigurationError(f"Invalid variable converter configuration: {exc}") from exc


def load_config(path: Path) -> VariableConverterConfig:
    """Load a config from a ``.json`` or ``.toml`` file.

    Parameters
    ----------
    path : Path
        Configuration file. TOML files may hold the fields at top level or
        under a ``[variable_converter]`` table.

    Raises
    ------
    ConfigurationError
        If the file cannot be read, parsed or validated.
    """
    suffix = path.suffix.lower()
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigurationError(f"Cannot read configuration file {path}: {exc}") from exc

    try:
        if suffix == ".json":
            data = json.loads(raw)
        elif suffix == ".toml":
            data = tomllib.loads(raw)
            section = data.get("variable_converter")
            if isinstance(section, dict):
                data = section
        else:
            raise ConfigurationError(
                f"Unsupported configuration format '{suffix}'. Use .json or .toml."
            )
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise ConfigurationError(f"Malformed configuration file {path}: {exc}") from exc

    if not isinstance(data, dict):
        raise ConfigurationError(f"Configuration file {path} must hold a mapping.")
    return parse_config(data)
