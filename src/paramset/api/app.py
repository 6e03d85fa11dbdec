"""
FastAPI application exposing the parameter update endpoint.

The application holds no state of its own: the host adapter and the
authorization policy are injected through `create_app` and read back by the
dependencies below, so tests can hand in stubs.
"""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.concurrency import run_in_threadpool
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from paramset.api.auth import (
    UPDATE_PERMISSION,
    AllowAll,
    Authorizer,
    BearerTokenAuthorizer,
)
from paramset.api.models import ErrorResponse, OkResponse, SetParameterRequest
from paramset.core.adapters.filestore import JsonFileHost
from paramset.core.config import api_token, state_dir
from paramset.core.errors import ParameterError
from paramset.core.host import HostAdapter
from paramset.core.parameters import update_parameters

logger = logging.getLogger(__name__)

PLUGIN_PREFIX = "/plugin/setparametervalue"
INTERNAL_ERROR_MESSAGE = "Internal server error"


class ApiError(Exception):
    """An error answered as `{"message": ...}` with the given status."""

    def __init__(self, status_code: int, message: str):
        super().__init__(message)
        self.status_code = status_code
        self.message = message


async def _api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=ErrorResponse(message=exc.message).model_dump(),
    )


def get_host(request: Request) -> HostAdapter:
    """FastAPI dependency returning the injected host adapter."""
    return request.app.state.host


def require_update_permission(request: Request) -> None:
    """FastAPI dependency rejecting callers the authorizer does not admit."""
    authorizer: Authorizer = request.app.state.authorizer
    if not authorizer(request):
        logger.warning(
            "Rejected %s %s: missing %s",
            request.method,
            request.url.path,
            UPDATE_PERMISSION,
        )
        raise ApiError(403, f"Permission denied: {UPDATE_PERMISSION}")


def _describe(exc: Exception) -> str:
    if isinstance(exc, ValidationError):
        first = exc.errors()[0]
        location = ".".join(str(part) for part in first.get("loc", ()))
        return f"{location}: {first['msg']}" if location else first["msg"]
    return str(exc)


router = APIRouter()


@router.post(
    "/setParameter",
    response_model=OkResponse,
    responses={
        400: {"model": ErrorResponse},
        403: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
    dependencies=[Depends(require_update_permission)],
)
async def set_parameter(request: Request, host: HostAdapter = Depends(get_host)):
    """
    Update parameters that already exist on a run.

    The whole batch is validated before anything is written; a single unknown
    parameter name rejects the request and leaves the run untouched.
    """
    raw = await request.body()
    try:
        payload = SetParameterRequest.model_validate_json(raw.decode("utf-8"))
    except (UnicodeDecodeError, ValidationError) as exc:
        raise ApiError(400, f"Malformed request body: {_describe(exc)}") from exc

    logger.info(
        "Set parameter request for %s #%s (%d parameter(s))",
        payload.job,
        payload.run,
        len(payload.parameter),
    )
    updates = [p.to_value() for p in payload.parameter]
    try:
        await run_in_threadpool(
            update_parameters, host, payload.job, payload.run, updates
        )
    except ParameterError as exc:
        logger.info("Rejected set parameter request: %s", exc)
        raise ApiError(400, str(exc)) from exc
    except Exception as exc:  # noqa: BLE001
        logger.exception("Set parameter request failed")
        raise ApiError(500, INTERNAL_ERROR_MESSAGE) from exc

    return OkResponse()


health_router = APIRouter()


@health_router.get("/health", response_model=OkResponse)
async def health_check():
    """Liveness probe."""
    return OkResponse()


def create_app(host: HostAdapter, authorizer: Authorizer | None = None) -> FastAPI:
    """
    Factory function to create and configure the FastAPI application.

    Args:
        host: Host adapter the endpoint reads and writes through.
        authorizer: Policy deciding who may update runs. Defaults to bearer
            token auth when `PARAMSET_API_TOKEN` is set, otherwise allow-all.
    """
    if authorizer is None:
        token = api_token()
        if token:
            authorizer = BearerTokenAuthorizer(token)
        else:
            logger.warning("No API token configured; every caller may update runs")
            authorizer = AllowAll()

    app = FastAPI(
        title="paramset",
        description="Read and update parameter values recorded on job runs",
        version="1.0.0",
    )
    app.state.host = host
    app.state.authorizer = authorizer
    app.add_exception_handler(ApiError, _api_error_handler)

    app.include_router(health_router, tags=["health"])
    app.include_router(router, prefix=PLUGIN_PREFIX, tags=["parameters"])
    return app


def create_app_from_env() -> FastAPI:
    """Build the application over the JSON file store in the configured state dir."""
    return create_app(JsonFileHost(state_dir()))
