"""Top-level API for regex-driven build variable conversion."""

from __future__ import annotations

from variable_converter.converter.core import (
    ConversionRequest,
    ConversionResult,
    Failure,
    Success,
    convert,
    convert_values,
    substitute_groups,
)
from variable_converter.errors import (
    ConfigurationError,
    ConversionFailedError,
    VariableConverterError,
)
from variable_converter.types import FailureKind

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "ConversionFailedError",
    "ConversionRequest",
    "ConversionResult",
    "Failure",
    "FailureKind",
    "Success",
    "VariableConverterError",
    "convert",
    "convert_values",
    "substitute_groups",
]
