"""HTTP server exposing variable conversion as a JSON endpoint."""

from __future__ import annotations

import argparse
import importlib
import logging
import os
from types import ModuleType
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, ConfigDict, Field

from variable_converter.application.use_cases import run_conversion_step
from variable_converter.converter.core import Failure
from variable_converter.schemas import VariableConverterConfig

logger = logging.getLogger(__name__)

if TYPE_CHECKING:
    from fastapi import FastAPI

_fastapi_module: ModuleType | None = None
_fastapi_responses_module: ModuleType | None = None
try:
    _fastapi_module = importlib.import_module("fastapi")
    _fastapi_responses_module = importlib.import_module("fastapi.responses")
except ModuleNotFoundError:  # pragma: no cover
    pass

try:
    import uvicorn as _uvicorn_imported

    _uvicorn_module: ModuleType | None = _uvicorn_imported
except ModuleNotFoundError:  # pragma: no cover
    _uvicorn_module = None

uvicorn: ModuleType | None = _uvicorn_module


def _require_http_runtime() -> None:
    """Ensure HTTP server runtime dependencies are available."""
    if _fastapi_module is None or _fastapi_responses_module is None:
        raise RuntimeError(
            "fastapi is required to run variable-converter-http. Install with extra: .[server]"
        )


class HealthResponse(BaseModel):
    """Health response payload."""

    model_config = ConfigDict(extra="forbid")

    status: str


class ReadyResponse(BaseModel):
    """Readiness response payload."""

    model_config = ConfigDict(extra="forbid")

    status: str


class ConvertPayload(VariableConverterConfig):
    """Conversion request body: step fields plus the variables to expand against."""

    env: dict[str, str] = Field(default_factory=dict)


class ConvertedVariable(BaseModel):
    """Successful conversion payload."""

    model_config = ConfigDict(extra="forbid")

    name: str
    value: str


class ConversionFailure(BaseModel):
    """Failed conversion payload."""

    model_config = ConfigDict(extra="forbid")

    reason: str
    detail: str


def create_app() -> FastAPI:
    """Create variable converter HTTP application."""
    _require_http_runtime()
    fastapi_module: Any = _fastapi_module
    responses_module: Any = _fastapi_responses_module
    app = fastapi_module.FastAPI(
        title="Variable Converter",
        version="0.1.0",
        description=(
            "Derive a variable from a source value with a regular expression and "
            "a {n} placeholder template."
        ),
    )

    @app.get("/healthz", response_model=HealthResponse)
    async def healthz() -> HealthResponse:
        return HealthResponse(status="ok")

    @app.get("/readyz", response_model=ReadyResponse)
    async def readyz() -> ReadyResponse:
        return ReadyResponse(status="ready")

    @app.post(
        "/v1/convert",
        response_model=ConvertedVariable,
        responses={422: {"model": ConversionFailure}},
    )
    def convert_variable(payload: ConvertPayload) -> Any:
        """Convert the posted step fields and return the produced variable."""
        config = VariableConverterConfig.model_validate(
            payload.model_dump(exclude={"env"})
        )
        try:
            step = run_conversion_step(config, payload.env)
        except Exception as exc:  # pragma: no cover
            logger.exception("unexpected error during HTTP conversion")
            raise fastapi_module.HTTPException(
                status_code=fastapi_module.status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="internal server error",
            ) from exc

        result = step.result
        if isinstance(result, Failure):
            return responses_module.JSONResponse(
                status_code=422,
                content=ConversionFailure(
                    reason=result.reason.value, detail=result.detail
                ).model_dump(),
            )
        return ConvertedVariable(name=result.name, value=result.value)

    return app


if TYPE_CHECKING:
    app: FastAPI | None

if _fastapi_module is not None:
    app = create_app()
else:  # pragma: no cover
    app = None


def main() -> None:
    """Run variable converter HTTP entrypoint."""
    _require_http_runtime()
    if uvicorn is None:
        raise RuntimeError("uvicorn is required to run variable-converter-http")
    parser = argparse.ArgumentParser(description="Variable converter HTTP server.")
    parser.add_argument(
        "--host",
        default=os.getenv("VARIABLE_CONVERTER_HTTP_HOST", "0.0.0.0"),
    )
    parser.add_argument(
        "--port",
        type=int,
        default=int(os.getenv("VARIABLE_CONVERTER_HTTP_PORT", "8090")),
    )
    args = parser.parse_args()
    uvicorn.run(
        "variable_converter.converter.http_server:app",
        host=args.host,
        port=args.port,
        reload=False,
    )


if __name__ == "__main__":
    main()
