"""Application-layer result objects."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from variable_converter.converter.core import ConversionRequest, ConversionResult


@dataclass(frozen=True)
class StepResult:
    """Structured build-step outcome."""

    success: bool
    result: ConversionResult
    request: ConversionRequest
    environment: Mapping[str, str]
