"""Regex capture to template conversion core."""

from __future__ import annotations

import re
from collections.abc import Sequence
from dataclasses import dataclass, fields

from variable_converter.errors import ConversionFailedError
from variable_converter.types import FailureKind

BLANK_DESTINATION_NAME_MESSAGE = "Destination variable name should not be blank"
BLANK_SOURCE_PATTERN_MESSAGE = "Source variable pattern should not be blank"
BLANK_DESTINATION_TEMPLATE_MESSAGE = "Destination variable pattern should not be blank"

# Characters ``str.isspace`` accepts that still count as content.
_NON_BLANK_SPACES = frozenset("\xa0\u2007\u202f\x85")


@dataclass(frozen=True)
class ConversionRequest:
    """Already-expanded inputs of a single conversion.

    Parameters
    ----------
    source_value : str
        Text the pattern is searched in.
    source_pattern : str
        Regular expression; its first match supplies the capture groups.
    destination_name : str
        Name of the variable to produce.
    destination_template : str
        Output template with ``{1}``, ``{2}``, ... placeholders.

    Raises
    ------
    TypeError
        If any field is not a ``str``.
    """

    source_value: str
    source_pattern: str
    destination_name: str
    destination_template: str

    def __post_init__(self) -> None:
        for field in fields(self):
            value = getattr(self, field.name)
            if not isinstance(value, str):
                raise TypeError(
                    f"{field.name} must be a str, got {type(value).__name__}"
                )


@dataclass(frozen=True)
class Success:
    """Produced variable."""

    name: str
    value: str

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> Success:
        return self


@dataclass(frozen=True)
class Failure:
    """Conversion failure with a human readable detail."""

    reason: FailureKind
    detail: str

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> Success:
        """Raise ``ConversionFailedError`` for callers that want exceptions."""
        raise ConversionFailedError(self)


type ConversionResult = Success | Failure


def is_blank(value: str) -> bool:
    """Return ``True`` for empty or whitespace-only text.

    No-break spaces (``\\xa0``, ``\\u2007``, ``\\u202f``) and NEL (``\\x85``)
    count as content, so text made only of them is not blank.
    """
    return all(char.isspace() and char not in _NON_BLANK_SPACES for char in value)


def substitute_groups(template: str, groups: Sequence[str | None]) -> str:
    """Replace ``{1}``..``{n}`` placeholders with capture groups.

    Groups are applied in ascending order, each pass running over the output
    of the previous one, so text inserted by ``{1}`` that contains ``{2}`` is
    itself replaced by group 2. Non-participating groups (``None``) become
    empty strings. Placeholders beyond ``len(groups)`` are left untouched.
    """
    output = template
    for index, group in enumerate(groups, start=1):
        output = output.replace(f"{{{index}}}", group if group is not None else "")
    return output


def convert(request: ConversionRequest) -> ConversionResult:
    """Match ``source_pattern`` against ``source_value`` and fill the template.

    Checks run in a fixed order and the first failing one is reported:
    blank destination name, blank source pattern, invalid pattern, no match,
    blank destination name again, blank destination template.

    Parameters
    ----------
    request : ConversionRequest
        Already-expanded conversion inputs.

    Returns
    -------
    ConversionResult
        ``Success`` with the destination name and filled template, or
        ``Failure`` describing the first failed check.
    """
    if is_blank(request.destination_name):
        return Failure(FailureKind.BLANK_DESTINATION_NAME, BLANK_DESTINATION_NAME_MESSAGE)

    if is_blank(request.source_pattern):
        return Failure(FailureKind.BLANK_SOURCE_PATTERN, BLANK_SOURCE_PATTERN_MESSAGE)

    try:
        pattern = re.compile(request.source_pattern)
    except re.error as exc:
        return Failure(
            FailureKind.INVALID_PATTERN,
            f"Invalid reg ex value {request.source_pattern}: {exc}",
        )

    match = pattern.search(request.source_value)
    if match is None:
        return Failure(
            FailureKind.NO_MATCH,
            f"No match of reg ex value {request.source_pattern} "
            f"for variable value {request.source_value}",
        )

    if is_blank(request.destination_name):
        return Failure(FailureKind.BLANK_DESTINATION_NAME, BLANK_DESTINATION_NAME_MESSAGE)

    if is_blank(request.destination_template):
        return Failure(
            FailureKind.BLANK_DESTINATION_TEMPLATE, BLANK_DESTINATION_TEMPLATE_MESSAGE
        )

    value = substitute_groups(request.destination_template, match.groups())
    return Success(name=request.destination_name, value=value)


def convert_values(
    *,
    source_value: str,
    source_pattern: str,
    destination_name: str,
    destination_template: str,
) -> ConversionResult:
    """Keyword wrapper around :func:`convert`."""
    return convert(
        ConversionRequest(
            source_value=source_value,
            source_pattern=source_pattern,
            destination_name=destination_name,
            destination_template=destination_template,
        )
    )
