"""Application use-cases orchestrating a conversion build step."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping

from variable_converter.application.environment import expand_config
from variable_converter.application.results import StepResult
from variable_converter.converter.core import Failure, Success, convert
from variable_converter.schemas import VariableConverterConfig, parse_config
from variable_converter.types import Environment

logger = logging.getLogger(__name__)

type ConsoleLog = Callable[[str], None]


def success_message(result: Success) -> str:
    return f"Adding environment variable named {result.name} with value of {result.value}"


def run_conversion_step(
    config: VariableConverterConfig,
    env: Environment,
    *,
    log: ConsoleLog | None = None,
) -> StepResult:
    """Use-case: expand the step inputs, convert and contribute the variable.

    Parameters
    ----------
    config : VariableConverterConfig
        Unexpanded step configuration.
    env : Environment
        Variables visible to the step. Never mutated.
    log : ConsoleLog | None, default=None
        Host console sink receiving one line per outcome.

    Returns
    -------
    StepResult
        On success ``environment`` is ``env`` plus the produced variable; on
        failure it is an unchanged copy of ``env``.
    """
    request = expand_config(config, env)
    result = convert(request)
    environment = dict(env)

    if isinstance(result, Failure):
        message = result.detail
        logger.warning("conversion failed (%s): %s", result.reason.value, message)
    else:
        message = success_message(result)
        logger.info(message)
        environment[result.name] = result.value

    if log is not None:
        log(message)

    return StepResult(
        success=result.ok,
        result=result,
        request=request,
        environment=environment,
    )


def run_conversion_step_from_mapping(
    data: Mapping[str, object],
    env: Environment,
    *,
    log: ConsoleLog | None = None,
) -> StepResult:
    """Validate a raw config mapping, then run :func:`run_conversion_step`.

    Raises
    ------
    ConfigurationError
        If ``data`` is not a valid configuration.
    """
    return run_conversion_step(parse_config(data), env, log=log)
