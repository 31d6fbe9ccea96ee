"""Error handlers for the FastAPI application.

Every failure leaves the API in the same envelope:
`{"error": {"message", "status_code", "details"?, "request_id"?}}`.
A client-supplied `X-Request-ID` header is echoed back in the envelope.
"""

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import SQLAlchemyError
from core.exceptions import AppException
from core.logger import get_logger
import traceback

logger = get_logger("core.error_handlers")

REQUEST_ID_HEADER = "x-request-id"


def create_error_response(
    message: str,
    status_code: int = 500,
    details: dict = None,
    request_id: str = None
) -> JSONResponse:
    """Create a standardized error response.

    Args:
        message: Error message.
        status_code: HTTP status code.
        details: Optional error details; omitted from the body when empty.
        request_id: Optional request ID for tracking.

    Returns:
        JSONResponse with error details.
    """
    error_body = {
        "error": {
            "message": message,
            "status_code": status_code,
        }
    }
    if details:
        error_body["error"]["details"] = details
    if request_id:
        error_body["error"]["request_id"] = request_id

    return JSONResponse(status_code=status_code, content=error_body)


def _request_id(request: Request):
    headers = getattr(request, "headers", None) or {}
    return headers.get(REQUEST_ID_HEADER)


async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Render a rejected operation (validation, not found, plan state).

    Client errors are logged as warnings; 5xx domain errors as errors.
    """
    log = logger.error if exc.status_code >= 500 else logger.warning
    log("%s %s rejected with %s: %s", request.method, request.url.path, exc.status_code, exc.message)
    return create_error_response(
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        request_id=_request_id(request),
    )


async def validation_exception_handler(
    request: Request,
    exc: RequestValidationError
) -> JSONResponse:
    """Handle request validation errors raised by pydantic.

    Out-of-range profile fields (age, weight, height, plan duration) end up
    here before any nutrition computation runs. The body location prefix is
    dropped so clients see plain field names.
    """
    errors = []
    for error in exc.errors():
        loc = [str(part) for part in error["loc"]]
        if loc and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:] or loc
        errors.append({"field": ".".join(loc), "message": error["msg"], "type": error["type"]})

    logger.warning("Invalid request %s %s: %s", request.method, request.url.path,
                   [e["field"] for e in errors])
    return create_error_response(
        message="Validation error",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        details={"validation_errors": errors},
        request_id=_request_id(request),
    )


async def sqlalchemy_exception_handler(
    request: Request,
    exc: SQLAlchemyError
) -> JSONResponse:
    """Handle SQLAlchemy database errors without leaking internals."""
    logger.error("Database error on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
    return create_error_response(
        message="A database error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        details={"type": "database_error"},
        request_id=_request_id(request),
    )


async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """Handle all unhandled exceptions with a generic 500."""
    logger.error(
        "Unhandled %s on %s %s:\n%s",
        type(exc).__name__,
        request.method,
        request.url.path,
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__)),
    )
    return create_error_response(
        message="An internal server error occurred",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        details={"type": "internal_error"},
        request_id=_request_id(request),
    )


def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI app.

    Args:
        app: FastAPI application instance.
    """
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
    logger.info("Exception handlers registered")
