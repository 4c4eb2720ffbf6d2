"""FastAPI application factory and configuration."""

from __future__ import annotations

from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.sessions import SessionMiddleware

from . import __version__, models  # noqa: F401 - ensure models are registered with SQLModel
from .api import register_routes
from .core import (
    ALLOWED_CORS_ORIGINS,
    COOKIE_SECURE,
    DB_RESET,
    SESSION_SECRET,
    configure_logging,
    init_db,
)
from .errors import AppError, InternalError, ValidationError

logger = structlog.get_logger(__name__)


def _error_body(message: str, kind: str) -> dict:
    return {"success": False, "message": message, "error": kind}


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(_error_body(exc.message, exc.kind), status_code=exc.status_code)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = exc.errors()
    message = ValidationError.default_message
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        message = f"{location}: {first.get('msg')}" if location else str(first.get("msg"))
    return JSONResponse(
        _error_body(message, ValidationError.kind), status_code=ValidationError.status_code
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error", path=request.url.path, method=request.method)
    return await handle_app_error(request, InternalError())


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db(reset=DB_RESET)
    yield


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="Thrift Store API", version=__version__, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    # Only carries the OAuth state between /auth/google and its callback.
    app.add_middleware(
        SessionMiddleware,
        secret_key=SESSION_SECRET,
        session_cookie="oauth_state",
        max_age=600,
        https_only=COOKIE_SECURE,
        same_site="lax",
    )

    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)

    register_routes(app)
    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("thriftstore.app:app", host="127.0.0.1", port=5001, reload=True)
