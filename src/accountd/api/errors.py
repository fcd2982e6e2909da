"""Error envelope and exception handlers.

Learn: This is the only place that knows how an ErrorCode becomes an
HTTP status. Handlers build {"status": "error", "error": {code, message}}
from the exception's code and client-safe message; exception objects
themselves are never serialized.
"""

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from accountd.errors import ErrorCode, ServiceError
from accountd.middleware.security import apply_security_headers

logger = structlog.get_logger()

STATUS_BY_CODE = {
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.DUPLICATE_EMAIL: 400,
    ErrorCode.EMAIL_NOT_FOUND: 400,
    ErrorCode.BAD_PASSWORD: 401,
    ErrorCode.INVALID_TOKEN: 401,
    ErrorCode.INTERNAL_ERROR: 500,
}


def error_response(code: ErrorCode, message: str) -> JSONResponse:
    headers = None
    if code is ErrorCode.INVALID_TOKEN:
        headers = {"WWW-Authenticate": "Bearer"}
    return JSONResponse(
        status_code=STATUS_BY_CODE[code],
        content={
            "status": "error",
            "error": {"code": code.value, "message": message},
        },
        headers=headers,
    )


async def service_error_handler(request: Request, exc: ServiceError) -> JSONResponse:
    return error_response(exc.code, exc.message)


async def request_validation_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    # Field locations only; the rejected input may contain a password.
    logger.info(
        "request.invalid",
        path=request.url.path,
        fields=[".".join(str(p) for p in err["loc"]) for err in exc.errors()],
    )
    return error_response(ErrorCode.VALIDATION_ERROR, "Request body is invalid")


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "request.unhandled_error",
        path=request.url.path,
        error_type=type(exc).__name__,
        exc_info=exc,
    )
    # Answered outside the middleware stack, so add their headers here.
    response = error_response(ErrorCode.INTERNAL_ERROR, "Internal server error")
    request_id = getattr(request.state, "request_id", None)
    if request_id:
        response.headers["X-Request-ID"] = request_id
    return apply_security_headers(request, response)


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ServiceError, service_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)
