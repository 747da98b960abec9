#!/usr/bin/env python3
"""
variable_converter.cli.cli

Typer-based CLI that derives one build variable from another.

The source value, pattern, destination name and destination template are
expanded against the environment (``${NAME}`` / ``$NAME``), the pattern's
first match is searched in the source value and its capture groups fill the
``{1}``, ``{2}``, ... placeholders of the template.

Examples
--------
Print ``VERSION=1.4`` from a tag name:

    convert-variable convert \\
        --source-variable '${GIT_TAG}' \\
        --source-pattern 'v(\\d+)\\.(\\d+)' \\
        --destination-variable VERSION \\
        --destination-pattern '{1}.{2}'

Append the produced variable to a CI environment file:

    convert-variable convert --config step.toml --append-to "$GITHUB_ENV"
"""

from __future__ import annotations

import json
import logging
import os
import secrets
import traceback
from pathlib import Path

import typer

from variable_converter.converter.core import Failure, Success
from variable_converter.errors import ConfigurationError, VariableConverterError
from variable_converter.schemas import (
    VariableConverterConfig,
    lint_config,
    load_config,
    parse_config,
)

app = typer.Typer(
    name="convert-variable",
    help="Derive a build variable from another one with a regex and a {n} template.",
    no_args_is_help=True,
)

OUTPUT_FORMATS = ("dotenv", "json", "value")
EXIT_CONVERSION_FAILED = 1
FIELD_FLAGS = {
    "source_variable": "--source-variable",
    "source_variable_pattern": "--source-pattern",
    "destination_variable": "--destination-variable",
    "destination_variable_pattern": "--destination-pattern",
}


# -----------------------------
# Utilities
# -----------------------------
def _print_error(exc: Exception, debug: bool) -> int:
    """Print a user-friendly error.

    Parameters
    ----------
    exc : Exception
        Exception raised while running the command.
    debug : bool
        Whether to include traceback details.

    Returns
    -------
    int
        Process exit code.
    """
    typer.secho(f"✗ {type(exc).__name__}: {exc}", fg=typer.colors.RED, err=True)
    if debug:
        typer.echo("\nTraceback:", err=True)
        typer.echo("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)), err=True)
    code = getattr(exc, "exit_code", None)
    if isinstance(code, int) and code > 0:
        return code
    return 1


def _parse_env_items(env_items: list[str] | None) -> dict[str, str]:
    """Parse repeated KEY=VALUE environment entries."""
    parsed: dict[str, str] = {}
    for item in env_items or []:
        if "=" not in item:
            raise typer.BadParameter(
                f"Invalid env entry '{item}'. Use KEY=VALUE format."
            )
        key, value = item.split("=", 1)
        key = key.strip()
        if not key:
            raise typer.BadParameter("Env key cannot be empty.")
        parsed[key] = value
    return parsed


def _build_config(
    config_path: Path | None,
    overrides: dict[str, str | None],
    source_is_name: bool,
) -> VariableConverterConfig:
    """Merge an optional config file with command-line field values."""
    data: dict[str, object] = {}
    if config_path is not None:
        data.update(load_config(config_path).model_dump())
    data.update({key: value for key, value in overrides.items() if value is not None})
    if source_is_name:
        data["source_is_variable_name"] = True

    missing = [key for key in overrides if key not in data]
    if missing:
        flags = ", ".join(FIELD_FLAGS[key] for key in missing)
        raise typer.BadParameter(f"Missing {flags} (or provide --config).")
    return parse_config(data)


def _format_output(result: Success, output_format: str) -> str:
    if output_format == "json":
        return json.dumps({"name": result.name, "value": result.value})
    if output_format == "value":
        return result.value
    return _dotenv_entry(result)


def _dotenv_entry(result: Success) -> str:
    """Render one variable as a dotenv entry.

    Multi-line values use the ``NAME<<DELIMITER`` heredoc form read by
    ``$GITHUB_ENV`` style files, so a captured line break cannot start a
    second variable.
    """
    if "\n" not in result.value and "\r" not in result.value:
        return f"{result.name}={result.value}"
    delimiter = f"EOF_{secrets.token_hex(16)}"
    while delimiter in result.value:
        delimiter = f"EOF_{secrets.token_hex(16)}"
    return f"{result.name}<<{delimiter}\n{result.value}\n{delimiter}"


def _append_to_env_file(path: Path, result: Success) -> None:
    """Append one dotenv entry to a host environment file."""
    with path.open("a", encoding="utf-8", newline="") as handle:
        handle.write(f"{_dotenv_entry(result)}\n")


def _echo_hints(config: VariableConverterConfig) -> None:
    for check in lint_config(config):
        typer.secho(f"{check.level}: {check.message}", fg=typer.colors.YELLOW, err=True)


# -----------------------------
# Global options
# -----------------------------
@app.callback()
def _main(
    ctx: typer.Context,
    debug: bool = typer.Option(False, "--debug", help="Show full tracebacks on error."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging."),
) -> None:
    """Initialize shared CLI state.

    Parameters
    ----------
    ctx : typer.Context
        Typer context object used to store shared state.
    debug : bool, default=False
        Whether to enable debug error output.
    verbose : bool, default=False
        Whether to configure logging at DEBUG level.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    ctx.obj = {"debug": debug}


# -----------------------------
# Commands
# -----------------------------
@app.command("convert")
def convert_cmd(
    ctx: typer.Context,
    source_variable: str | None = typer.Option(
        None,
        "--source-variable",
        "-s",
        help="Source value, usually a reference such as '${GIT_BRANCH}'.",
    ),
    source_variable_pattern: str | None = typer.Option(
        None, "--source-pattern", "-p", help="Regular expression searched in the source value."
    ),
    destination_variable: str | None = typer.Option(
        None, "--destination-variable", "-d", help="Name of the variable to produce."
    ),
    destination_variable_pattern: str | None = typer.Option(
        None,
        "--destination-pattern",
        "-t",
        help="Output template; {1}, {2}, ... are replaced by capture groups.",
    ),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        "-c",
        exists=True,
        readable=True,
        dir_okay=False,
        help="JSON or TOML file holding the step fields.",
    ),
    source_is_name: bool = typer.Option(
        False,
        "--source-is-name",
        help="Treat the source value as the name of an environment variable.",
    ),
    env: list[str] | None = typer.Option(
        None, "--env", "-e", help="Extra environment entry KEY=VALUE (repeatable)."
    ),
    inherit_env: bool = typer.Option(
        True,
        "--inherit-env/--no-inherit-env",
        help="Expand against the process environment.",
    ),
    output_format: str = typer.Option(
        "dotenv", "--format", "-f", help="Output format: dotenv, json or value."
    ),
    append_to: Path | None = typer.Option(
        None,
        "--append-to",
        dir_okay=False,
        help="Append NAME=VALUE to this environment file (e.g. $GITHUB_ENV).",
    ),
) -> None:
    """Convert a source value into a new variable.

    Parameters
    ----------
    ctx : typer.Context
        Typer context containing global options.
    source_variable : str | None
        Source value or reference; required unless given by ``--config``.
    source_variable_pattern : str | None
        Regular expression; its first match supplies the capture groups.
    destination_variable : str | None
        Name of the produced variable.
    destination_variable_pattern : str | None
        Template with ``{n}`` placeholders.
    config_path : Path | None
        Optional config file; explicit options override its fields.

    Notes
    -----
    - Console messages go to stderr, the produced variable to stdout.
    - Exit code is 1 when the conversion fails and 2 on usage errors.
    """
    debug: bool = bool(ctx.obj.get("debug", False))

    if output_format not in OUTPUT_FORMATS:
        raise typer.BadParameter(
            f"Unknown format '{output_format}'. Use one of: {', '.join(OUTPUT_FORMATS)}."
        )
    extra_env = _parse_env_items(env)

    try:
        config = _build_config(
            config_path,
            {
                "source_variable": source_variable,
                "source_variable_pattern": source_variable_pattern,
                "destination_variable": destination_variable,
                "destination_variable_pattern": destination_variable_pattern,
            },
            source_is_name,
        )
    except ConfigurationError as exc:
        raise typer.Exit(code=_print_error(exc, debug))

    _echo_hints(config)

    environment: dict[str, str] = dict(os.environ) if inherit_env else {}
    environment.update(extra_env)

    try:
        from variable_converter.application.use_cases import run_conversion_step

        step = run_conversion_step(
            config, environment, log=lambda line: typer.echo(line, err=True)
        )
        if isinstance(step.result, Failure):
            raise typer.Exit(code=EXIT_CONVERSION_FAILED)

        typer.echo(_format_output(step.result, output_format))
        if append_to is not None:
            _append_to_env_file(append_to, step.result)
    except typer.Exit:
        raise
    except VariableConverterError as exc:
        raise typer.Exit(code=_print_error(exc, debug))
    except Exception as exc:
        # Unexpected crash: still show a clean message; debug prints traceback.
        raise typer.Exit(code=_print_error(exc, debug))


@app.command("check")
def check_cmd(
    config_path: Path = typer.Argument(
        ...,
        exists=True,
        readable=True,
        dir_okay=False,
        help="JSON or TOML file holding the step fields.",
    ),
) -> None:
    """Validate a config file and print field hints."""
    try:
        config = load_config(config_path)
    except ConfigurationError as exc:
        raise typer.Exit(code=_print_error(exc, debug=False))

    hints = lint_config(config)
    for check in hints:
        typer.echo(f"{check.field}: {check.level}: {check.message}")
    if any(check.level == "error" for check in hints):
        raise typer.Exit(code=EXIT_CONVERSION_FAILED)
    if not hints:
        typer.secho("✓ Configuration looks good.", fg=typer.colors.GREEN)


@app.command("version")
def version_cmd() -> None:
    """Print the installed version."""
    from variable_converter import __version__

    typer.echo(__version__)


if __name__ == "__main__":
    app()
