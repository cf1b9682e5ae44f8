"""Structured error responses: consistent JSON format for all errors.

View errors are the only failures the view engine raises. Missing rows or
fields never raise; they are absorbed by defaulting in the field accessor.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException


class ViewError(Exception):
    """Base class for failures that abort a view query."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class StoreUnavailable(ViewError):
    """A table fetch failed. Not retried; no partial view is returned."""

    status_code = status.HTTP_503_SERVICE_UNAVAILABLE

    def __init__(self, db: str, table: str, reason: str):
        super().__init__(f"Failed to fetch {db} {table}: {reason}")
        self.db = db
        self.table = table
        self.reason = reason


class MalformedEncoding(ViewError):
    """The rendered view could not be serialized."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR


class UnknownView(ViewError):
    """No view producer is registered for the requested path."""

    status_code = status.HTTP_404_NOT_FOUND

    def __init__(self, path: str):
        super().__init__(f"Unknown view: {path}")
        self.path = path


def _error_body(request: Request, status_code: int, detail) -> dict:
    return {
        "error": True,
        "status_code": status_code,
        "detail": detail,
        "request_id": getattr(request.state, "request_id", None),
    }


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers on the FastAPI app."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(request, exc.status_code, exc.detail),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        content = _error_body(request, 422, "Validation error")
        content["errors"] = exc.errors()
        return JSONResponse(status_code=422, content=content)

    @app.exception_handler(ViewError)
    async def view_exception_handler(request: Request, exc: ViewError):
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(request, exc.status_code, exc.detail),
        )

    @app.exception_handler(Exception)
    async def generic_exception_handler(request: Request, exc: Exception):
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=_error_body(
                request, status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error"
            ),
        )
