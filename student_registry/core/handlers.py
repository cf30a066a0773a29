# student_registry/core/handlers.py
from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from student_registry.core.config import settings
from student_registry.core.exceptions import BaseAPIException, DatabaseConnectionError
from student_registry.core.logging import logger


def _error_body(code: str, message: str, details=None) -> dict:
    return {
        "success": False,
        "error": {
            "code": code,
            "message": message,
            "details": details
        }
    }


# 1. Database unreachable: the whole response is the single error line
async def database_connection_handler(request: Request, exc: DatabaseConnectionError):
    return PlainTextResponse(exc.message, status_code=exc.status_code)


# 2. Handle custom logic errors (raised by our own code)
async def custom_api_exception_handler(request: Request, exc: BaseAPIException):
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.code, exc.message, exc.details),
    )


# 3. Handle validation errors (raised by FastAPI when the client sends bad input)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    details = {}
    for error in exc.errors():
        # "body.age" / "query.limit" -> "age" / "limit"
        field = ".".join(str(x) for x in error["loc"] if x not in ("body", "query", "path"))
        details[field] = error["msg"]

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=_error_body("VALIDATION_ERROR", "Input validation failed", details),
    )


# 4. Handle standard HTTP errors (404 on an unknown URL, 405, ...)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body("HTTP_ERROR", str(exc.detail)),
    )


# 5. Handle everything else (bugs, driver errors after connect)
async def general_exception_handler(request: Request, exc: Exception):
    logger.critical(f"Unhandled Exception: {exc}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=_error_body(
            "INTERNAL_SERVER_ERROR",
            "An unexpected error occurred. Please contact support.",
            str(exc) if settings.DEBUG else None,
        ),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DatabaseConnectionError, database_connection_handler)
    app.add_exception_handler(BaseAPIException, custom_api_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
