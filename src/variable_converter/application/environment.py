"""Host-side variable expansion of build-step inputs."""

from __future__ import annotations

import re

from variable_converter.converter.core import ConversionRequest
from variable_converter.schemas import VariableConverterConfig
from variable_converter.types import Environment

# $$ (escaped dollar), ${NAME} or $NAME
_REFERENCE = re.compile(
    r"\$(?:(?P<escaped>\$)|\{(?P<braced>[A-Za-z_][A-Za-z0-9_]*)\}|(?P<bare>[A-Za-z_][A-Za-z0-9_]*))"
)


def expand_variables(text: str, env: Environment) -> str:
    """Expand ``${NAME}`` and ``$NAME`` references against ``env``.

    Unknown references are left as written. Expansion is a single pass, so
    values containing ``$`` are not expanded again.
    """

    def _repl(match: re.Match[str]) -> str:
        if match.group("escaped"):
            return "$"
        name = match.group("braced") or match.group("bare")
        if name in env:
            return env[name]
        return match.group(0)

    return _REFERENCE.sub(_repl, text)


def resolve_source(text: str, env: Environment, *, by_name: bool = False) -> str:
    """Return the source value, looking it up by variable name if requested."""
    if not by_name:
        return text
    return env.get(text.strip(), "")


def expand_config(config: VariableConverterConfig, env: Environment) -> ConversionRequest:
    """Expand all config fields into a conversion request."""
    source = expand_variables(config.source_variable, env)
    return ConversionRequest(
        source_value=resolve_source(source, env, by_name=config.source_is_variable_name),
        source_pattern=expand_variables(config.source_variable_pattern, env),
        destination_name=expand_variables(config.destination_variable, env),
        destination_template=expand_variables(config.destination_variable_pattern, env),
    )
