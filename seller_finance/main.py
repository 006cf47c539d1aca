# This project was developed with assistance from AI tools.
"""FastAPI application entry point."""

import logging
import uuid
from collections.abc import Sequence

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .core.config import settings
from .routes import calculator, chat, health
from .schemas.error import ErrorCode, ErrorResponse
from .schemas.property import Property
from .services.catalog import PropertyNotFoundError
from .services.npv import DegenerateInputError, InvalidInputError

logger = logging.getLogger(__name__)

_HTTP_STATUS_TITLES: dict[int, str] = {
    400: "Bad Request",
    404: "Not Found",
    405: "Method Not Allowed",
    422: "Unprocessable Entity",
    500: "Internal Server Error",
}


def _problem(request: Request, status_code: int, detail: str, code: ErrorCode) -> JSONResponse:
    """Render an RFC 7807 body, echoing the caller's x-request-id when present."""
    body = ErrorResponse(
        title=_HTTP_STATUS_TITLES.get(status_code, "Error"),
        status=status_code,
        detail=detail,
        code=code,
        request_id=request.headers.get("x-request-id", str(uuid.uuid4())),
    )
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return _problem(request, exc.status_code, str(exc.detail), ErrorCode.HTTP_ERROR)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    return _problem(request, 422, str(exc.errors()), ErrorCode.VALIDATION_ERROR)


async def solver_exception_handler(request: Request, exc: ValueError):
    logger.info("Solver rejected request: %s", exc)
    if isinstance(exc, DegenerateInputError):
        return _problem(request, 422, str(exc), ErrorCode.DEGENERATE_INPUT)
    return _problem(request, 422, str(exc), ErrorCode.INVALID_INPUT)


async def not_found_exception_handler(request: Request, exc: PropertyNotFoundError):
    return _problem(request, 404, str(exc), ErrorCode.NOT_FOUND)


async def unhandled_exception_handler(request: Request, exc: Exception):
    """Catch-all: log with traceback and hide the details from the caller."""
    response = _problem(request, 500, "An unexpected error occurred.", ErrorCode.INTERNAL_ERROR)
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return response


def create_app(catalog: Sequence[Property] | None = None) -> FastAPI:
    """Build the API around a read-only property catalog.

    Loading the catalog is the caller's job; without one the calculator still
    works but every property lookup is a 404.
    """
    app = FastAPI(
        title="Seller Finance API",
        description="NPV installment planning and alternative matching for seller-financed sales",
        version="0.1.0",
        debug=settings.DEBUG,
    )
    app.state.catalog = tuple(catalog or ())

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_HOSTS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type"],
    )

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(InvalidInputError, solver_exception_handler)
    app.add_exception_handler(DegenerateInputError, solver_exception_handler)
    app.add_exception_handler(PropertyNotFoundError, not_found_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(health.router, prefix="/health", tags=["health"])
    app.include_router(calculator.router, prefix="/api/calculator", tags=["calculator"])
    app.include_router(chat.router, prefix="/api/chat", tags=["chat"])

    logger.info("%s ready with %d catalog properties", settings.APP_NAME, len(app.state.catalog))
    return app


app = create_app()
