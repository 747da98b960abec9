"""Application-layer use-cases and result objects."""

from __future__ import annotations

from variable_converter.application.environment import (
    expand_config,
    expand_variables,
    resolve_source,
)
from variable_converter.application.results import StepResult
from variable_converter.application.use_cases import (
    run_conversion_step,
    run_conversion_step_from_mapping,
)

__all__ = [
    "StepResult",
    "expand_config",
    "expand_variables",
    "resolve_source",
    "run_conversion_step",
    "run_conversion_step_from_mapping",
]
