"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from forq.api.auth import router as auth_router
from forq.api.db import router as db_router
from forq.api.glp import router as glp_router
from forq.api.nutrition import router as nutrition_router
from forq.app_logging import configure_logging
from forq.containers import AppContainer
from forq.domain.errors import (
    AuthenticationError,
    ConfigurationError,
    ConflictError,
    FatSecretApiError,
    FoodDetailIncompleteError,
    NotFoundError,
    ResponseShapeError,
    UnknownResponseFormatError,
    UpstreamUnavailableError,
    ValidationFailedError,
)

# Error class -> (HTTP status, machine-readable error code).
_ERROR_STATUS: dict[type[Exception], tuple[int, str]] = {
    UpstreamUnavailableError: (502, "upstream_unavailable"),
    FatSecretApiError: (502, "upstream_error"),
    ResponseShapeError: (502, "response_shape_mismatch"),
    UnknownResponseFormatError: (502, "unknown_response_format"),
    FoodDetailIncompleteError: (422, "food_detail_incomplete"),
    NotFoundError: (404, "not_found"),
    ConflictError: (409, "conflict"),
    ValidationFailedError: (400, "validation_failed"),
    AuthenticationError: (401, "authentication_failed"),
    ConfigurationError: (500, "configuration_error"),
}


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.include_router(nutrition_router)
    app.include_router(auth_router)
    app.include_router(db_router)
    app.include_router(glp_router)

    async def handle_domain_error(request: Request, exc: Exception) -> JSONResponse:
        status_code, error = _error_status(exc)
        if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
            logger.warning(
                "%s %s failed: %s", request.method, request.url.path, exc
            )
        content: dict[str, object] = {"error": error, "message": str(exc)}
        if isinstance(exc, FoodDetailIncompleteError):
            content["food"] = exc.food
        if isinstance(exc, FatSecretApiError):
            content["code"] = exc.code
        return JSONResponse(status_code=status_code, content=jsonable_encoder(content))

    for error_class in _ERROR_STATUS:
        app.add_exception_handler(error_class, handle_domain_error)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "error": "validation_failed",
                "message": "Invalid request",
                "details": jsonable_encoder(exc.errors()),
            },
        )

    @app.get("/api/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    return app


def _error_status(exc: Exception) -> tuple[int, str]:
    for error_class in type(exc).__mro__:
        if error_class in _ERROR_STATUS:
            return _ERROR_STATUS[error_class]
    return status.HTTP_500_INTERNAL_SERVER_ERROR, "internal_error"
