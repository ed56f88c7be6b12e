"""
Exception handlers that render every error as ``{"error": message}``.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from contacts_api.validation import ContactValidationError

_LOCATION_PREFIXES = ("body", "path", "query", "header", "cookie")


def format_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request"
    first = errors[0]
    loc = [str(part) for part in first.get("loc", ()) if part not in _LOCATION_PREFIXES]
    message = first.get("msg", "invalid value")
    if loc:
        return f"{'.'.join(loc)}: {message}"
    return message


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        {"error": exc.detail},
        status_code=exc.status_code,
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse({"error": format_validation_error(exc)}, status_code=400)


async def contact_validation_handler(request: Request, exc: ContactValidationError):
    return JSONResponse({"error": str(exc)}, status_code=400)


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(ContactValidationError, contact_validation_handler)
