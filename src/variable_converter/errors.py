"""Exception hierarchy for variable conversion."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from variable_converter.converter.core import Failure


class VariableConverterError(Exception):
    """Base exception for all variable-converter errors."""

    exit_code = 1

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ConfigurationError(VariableConverterError):
    """Build-step configuration could not be loaded or validated."""

    exit_code = 2


class ConversionFailedError(VariableConverterError):
    """A conversion produced a failure and the caller asked for a value."""

    def __init__(self, failure: Failure) -> None:
        super().__init__(failure.detail)
        self.failure = failure
