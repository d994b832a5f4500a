from enum import Enum
from typing import Any, Dict, Union

from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from tracker.config import Config, logger

PRIVATE_HEADERS = {"Vary": "Cookie", "Cache-Control": "private, no-store"}


class ErrorCode(str, Enum):
    """Machine-checkable error kinds returned in every error body."""

    BAD_REQUEST = "BAD_REQUEST"
    UNAUTHORIZED = "UNAUTHORIZED"
    FORBIDDEN = "FORBIDDEN"
    NOT_FOUND = "NOT_FOUND"
    CONFLICT = "CONFLICT"
    RATE_LIMITED = "RATE_LIMITED"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# Custom exceptions
class AppException(Exception):
    """Base exception for application-specific errors."""

    def __init__(
        self,
        status_code: int,
        detail: Union[str, Dict[str, Any]],
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
    ):
        super().__init__(detail)
        self.status_code = status_code
        self.detail = detail
        self.code = code


class DatabaseException(AppException):
    """Exception for database-related errors."""

    def __init__(self, detail: str = "Database error occurred"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            code=ErrorCode.INTERNAL_ERROR,
        )


class AuthenticationException(AppException):
    """Exception for authentication-related errors."""

    def __init__(self, detail: str = "Unauthorized"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            code=ErrorCode.UNAUTHORIZED,
        )


class AuthorizationException(AppException):
    """Exception for authorization-related errors."""

    def __init__(self, detail: str = "Forbidden"):
        super().__init__(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=detail,
            code=ErrorCode.FORBIDDEN,
        )


class ResourceNotFoundException(AppException):
    """Exception for resource not found errors."""

    def __init__(self, detail: str = "Resource not found"):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            code=ErrorCode.NOT_FOUND,
        )


class BadRequestException(AppException):
    """Exception for bad request errors."""

    def __init__(self, detail: Union[str, Dict[str, Any]] = "Invalid request"):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            code=ErrorCode.BAD_REQUEST,
        )


class ConflictException(AppException):
    """Exception for uniqueness violations."""

    def __init__(self, detail: str = "Conflict"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            code=ErrorCode.CONFLICT,
        )


def error_response(status_code: int, detail: Any, code: ErrorCode) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": detail, "code": code.value},
        headers=PRIVATE_HEADERS,
    )


# Exception handlers
async def app_exception_handler(request: Request, exc: AppException):
    """Handler for application-specific exceptions."""
    logger.error(
        f"Application error: {exc.detail} (Status: {exc.status_code}, Code: {exc.code.value})"
    )
    return error_response(exc.status_code, exc.detail, exc.code)


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    formatted_errors = [
        {
            "type": error["type"],
            "loc": list(error["loc"]),
            "msg": error["msg"],
        }
        for error in exc.errors()
    ]
    logger.warning(f"Request validation failed: {formatted_errors}")
    message = formatted_errors[0]["msg"] if formatted_errors else "Invalid request"

    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "detail": message,
            "code": ErrorCode.BAD_REQUEST.value,
            "issues": formatted_errors,
        },
        headers=PRIVATE_HEADERS,
    )


async def pydantic_validation_exception_handler(request: Request, exc: ValidationError):
    """Handler for Pydantic validation errors."""
    errors = exc.errors(include_url=False, include_context=False)
    logger.error(f"Pydantic validation error: {errors}")
    return error_response(
        status.HTTP_400_BAD_REQUEST, "Validation failed", ErrorCode.BAD_REQUEST
    )


async def sqlalchemy_exception_handler(request: Request, exc: SQLAlchemyError):
    """Handler for SQLAlchemy errors."""
    logger.error(f"Database error: {str(exc)}")
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "Database error occurred. Please try again later.",
        ErrorCode.INTERNAL_ERROR,
    )


async def general_exception_handler(request: Request, exc: Exception):
    """Handler for all other exceptions."""
    logger.error(f"Unexpected error: {str(exc)}", exc_info=True)
    detail = "Internal server error"
    if Config.IS_DEVELOPMENT:
        detail = f"Internal error: {exc}"
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, detail, ErrorCode.INTERNAL_ERROR
    )


# Function to register exception handlers with FastAPI app
def register_exception_handlers(app):
    """Register all exception handlers with the FastAPI application."""
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(ValidationError, pydantic_validation_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)

    logger.info("Exception handlers registered")
