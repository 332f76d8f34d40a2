"""
Exception handlers that shape every failure into the response envelope:
{"success": false, "message": ..., "errors": [...]}.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from eventplanner.core.exceptions import ValidationError
from eventplanner.core.logging import get_logger
from eventplanner.schemas.common import envelope

logger = get_logger(__name__)

ROUTING_MESSAGES = {
    status.HTTP_404_NOT_FOUND: "Route not found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "Method not allowed",
}


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    if isinstance(exc, ValidationError):
        body = envelope(success=False, message=exc.detail, errors=exc.errors)
    elif type(exc) is StarletteHTTPException and exc.status_code in ROUTING_MESSAGES:
        # Raised by the router itself, not by a service
        body = envelope(success=False, message=ROUTING_MESSAGES[exc.status_code], path=request.url.path)
    else:
        body = envelope(success=False, message=str(exc.detail))
    return JSONResponse(status_code=exc.status_code, content=body, headers=getattr(exc, "headers", None))


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed ids, query parameters or bodies that are not JSON objects."""
    errors = []
    for err in exc.errors():
        where = ".".join(str(part) for part in err.get("loc", ())[1:]) or "body"
        errors.append(f"{where}: {err.get('msg')}")
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=envelope(success=False, message="Invalid request", errors=errors),
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_exception", error=str(exc), exc_info=exc)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=envelope(success=False, message="Internal server error"),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
