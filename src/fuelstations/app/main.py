from __future__ import annotations

import logging
from collections.abc import AsyncIterator, Awaitable, Callable
from contextlib import asynccontextmanager
from http import HTTPStatus

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from .. import config
from ..api.routes import auth, stations
from ..core.errors import (
    AuthError,
    NotFound,
    StationApiError,
    StoreError,
    ValidationError,
)
from ..core.tokens import TokenService
from ..db.store import StationStore
from ..services.station_service import StationService

logger = logging.getLogger(__name__)

# No content security policy: the interactive docs load assets from a CDN.
SECURITY_HEADERS = {
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=15552000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}

ERROR_STATUS: dict[type[StationApiError], int] = {
    ValidationError: status.HTTP_400_BAD_REQUEST,
    AuthError: status.HTTP_401_UNAUTHORIZED,
    NotFound: status.HTTP_404_NOT_FOUND,
    StoreError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": HTTPStatus(status_code).phrase, "message": message},
    )


def status_for(exc: StationApiError) -> int:
    for error_type, status_code in ERROR_STATUS.items():
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def handle_station_api_error(
    request: Request, exc: StationApiError
) -> JSONResponse:
    status_code = status_for(exc)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error(
            "%s %s failed: %s", request.method, request.url.path, exc, exc_info=exc
        )
        return error_response(status_code, HTTPStatus(status_code).phrase)
    return error_response(status_code, exc.message)


async def handle_request_validation_error(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    logger.debug("Rejected malformed request to %s: %s", request.url.path, exc)
    return error_response(
        status.HTTP_400_BAD_REQUEST, "The request body must be valid JSON"
    )


async def handle_http_exception(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    if exc.status_code == status.HTTP_404_NOT_FOUND:
        return error_response(
            exc.status_code,
            f"The requested URL was not found on this server: {request.url.path}",
        )
    return error_response(exc.status_code, str(exc.detail))


async def add_security_headers(
    request: Request, call_next: Callable[[Request], Awaitable[Response]]
) -> Response:
    response = await call_next(request)
    for name, value in SECURITY_HEADERS.items():
        response.headers.setdefault(name, value)
    return response


def create_app(
    store: StationStore | None = None, tokens: TokenService | None = None
) -> FastAPI:
    owns_store = store is None
    if store is None:
        store = StationStore.open(config.database_path())
    if tokens is None:
        tokens = TokenService(config.jwt_key())

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncIterator[None]:
        yield
        if owns_store:
            store.close()

    app = FastAPI(title="Fuel Station API", lifespan=lifespan)
    app.state.station_service = StationService(store)
    app.state.token_service = tokens

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "PUT", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    app.middleware("http")(add_security_headers)
    app.add_exception_handler(StationApiError, handle_station_api_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation_error)
    app.add_exception_handler(StarletteHTTPException, handle_http_exception)

    app.include_router(auth.router)
    app.include_router(stations.router)

    return app
