"""Shared type aliases and enumerations for converter modules."""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum


class FailureKind(str, Enum):
    """Reasons a conversion can fail, in validation order."""

    BLANK_DESTINATION_NAME = "BlankDestinationName"
    BLANK_SOURCE_PATTERN = "BlankSourcePattern"
    INVALID_PATTERN = "InvalidPattern"
    NO_MATCH = "NoMatch"
    BLANK_DESTINATION_TEMPLATE = "BlankDestinationTemplate"


type Environment = Mapping[str, str]
