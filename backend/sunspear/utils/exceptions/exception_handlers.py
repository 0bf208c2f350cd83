"""
Global Exception Handlers

Domain errors propagate out of the service layer untouched; these handlers map
each family to an HTTP status and render it in the response envelope.

    BusinessException    -> its own 4xx code (400, 404, 409)
    ValidationException  -> 422
    EngineError          -> 502
    PersistenceError     -> 500
    anything else        -> 500
"""

import os
import logging
from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from sunspear.utils.model.response_model import BaseResponse
from sunspear.utils.model.response_code import ResponseCode
from sunspear.utils.exceptions.base_exceptions import (
    BusinessException,
    EngineError,
    PersistenceError,
    ValidationException,
)

logger = logging.getLogger(__name__)


def _render(status_code: int, response: BaseResponse) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=response.model_dump())


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """
    Handle request body and parameter validation errors

    A project name that is not a valid engine object name ends up here.

    Args:
        request: Request object
        exc: Validation exception

    Returns:
        422 envelope listing each failing field
    """
    logger.warning(f"Validation error on {request.url}: {exc.errors()}")

    messages = []
    details = []

    for error in exc.errors():
        ctx = error.get("ctx")
        if isinstance(ctx, dict) and "error" in ctx:
            messages.append(str(ctx["error"]))
        else:
            messages.append(error["msg"])

        detail = {
            "loc": list(error["loc"]),
            "msg": error["msg"],
            "type": error["type"],
        }
        if "input" in error:
            detail["input"] = repr(error["input"])[:200]
        details.append(detail)

    response = BaseResponse.validation_error(data={"details": details}, message="; ".join(messages))
    return _render(status.HTTP_422_UNPROCESSABLE_ENTITY, response)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """
    Handle routing-level HTTP errors (unknown path, wrong method)

    Args:
        request: Request object
        exc: HTTP exception

    Returns:
        Envelope carrying the same status code
    """
    logger.warning(f"HTTP {exc.status_code} on {request.url}: {exc.detail}")

    return _render(exc.status_code, BaseResponse.of(exc.status_code, data="", message=str(exc.detail)))


async def business_exception_handler(request: Request, exc: BusinessException) -> JSONResponse:
    """
    Handle client-side domain errors

    Manifest, dependency and template-name errors answer 400, unknown ids 404,
    duplicate project names 409.

    Args:
        request: Request object
        exc: Business exception

    Returns:
        Envelope with ``exc.data`` as payload
    """
    logger.warning(f"Business error on {request.url}: {exc.message}")

    status_code = exc.code if 400 <= exc.code < 500 else status.HTTP_400_BAD_REQUEST
    response = BaseResponse.error(message=exc.message, data=exc.data, code=status_code)

    return _render(status_code, response)


async def data_validation_exception_handler(request: Request, exc: ValidationException) -> JSONResponse:
    """Handle install requests missing a required environment variable"""
    logger.warning(f"Validation failed on {request.url}: {exc.message}")

    response = BaseResponse.validation_error(data=exc.errors, message=exc.message)
    return _render(status.HTTP_422_UNPROCESSABLE_ENTITY, response)


async def engine_exception_handler(request: Request, exc: EngineError) -> JSONResponse:
    """Handle container engine failures as upstream errors"""
    logger.error(f"Engine error on {request.url} during {exc.operation}: {exc.message}")

    response = BaseResponse.error(
        message=exc.message,
        data={"operation": exc.operation, **exc.details},
        code=ResponseCode.BAD_GATEWAY,
    )
    return _render(status.HTTP_502_BAD_GATEWAY, response)


async def persistence_exception_handler(request: Request, exc: PersistenceError) -> JSONResponse:
    """Handle store failures"""
    logger.error(f"Persistence error on {request.url}: {exc.message}")

    response = BaseResponse.error(
        message=exc.message,
        data={"operation": exc.operation},
        code=ResponseCode.INTERNAL_SERVER_ERROR,
    )
    return _render(status.HTTP_500_INTERNAL_SERVER_ERROR, response)


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle all uncaught exceptions

    The error type and text are only exposed when ENVIRONMENT is development.
    """
    logger.error(f"Unhandled exception on {request.url}: {exc}", exc_info=True)

    if os.getenv("ENVIRONMENT", "development") == "development":
        message = f"Internal server error: {exc}"
        data = {"error_type": type(exc).__name__, "error_message": str(exc)}
    else:
        message = "Internal server error, please try again later"
        data = None

    response = BaseResponse.error(message=message, data=data, code=ResponseCode.INTERNAL_SERVER_ERROR)
    return _render(status.HTTP_500_INTERNAL_SERVER_ERROR, response)


def register_exception_handlers(app):
    """
    Register all exception handlers

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(BusinessException, business_exception_handler)
    app.add_exception_handler(ValidationException, data_validation_exception_handler)
    app.add_exception_handler(EngineError, engine_exception_handler)
    app.add_exception_handler(PersistenceError, persistence_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Exception handlers registered")
