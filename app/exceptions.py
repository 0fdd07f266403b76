"""Domain errors raised by the services and their mapping to HTTP responses."""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

log = logging.getLogger("uvicorn.error")


class AppError(Exception):
    """Base for every error a service raises on purpose. Terminal for the current operation."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(AppError):
    status_code = 404


class UnauthorizedError(AppError):
    """Role or ownership violation (authenticated, but not allowed)."""
    status_code = 403


class InvalidCredentialsError(AppError):
    status_code = 401


class DuplicateResourceError(AppError):
    status_code = 409

    def __init__(self, message: str, field: str):
        super().__init__(message)
        self.field = field


class InvalidOperationError(AppError):
    """Illegal state transition or violated precondition."""
    status_code = 400


class ValidationError(AppError):
    status_code = 400

    def __init__(self, message: str, field: str | None = None):
        super().__init__(message)
        self.field = field


def _first_validation_message(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Validation failed"
    first = errors[0]
    loc = [str(p) for p in first.get("loc", ()) if p not in ("body", "query", "path")]
    msg = first.get("msg") or "Validation failed"
    # pydantic prefixes messages from custom validators with "Value error, "
    if msg.startswith("Value error, "):
        return msg[len("Value error, "):]
    return f"{'.'.join(loc)}: {msg}" if loc else msg


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.message})

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException):
        return JSONResponse(status_code=exc.status_code, content={"message": exc.detail}, headers=exc.headers)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return JSONResponse(status_code=400, content={"message": _first_validation_message(exc)})

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        log.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"message": f"An error occurred: {exc}"})
