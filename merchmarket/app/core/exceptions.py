"""
Custom exceptions and error handlers for consistent error responses.

Provides standardized error codes and global exception handlers.
Messages are part of the public contract with existing clients and
must not be reworded.
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException
from typing import Any, Dict

logger = logging.getLogger("merchmarket.errors")


class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, error_code: str, status_code: int = 500, details: Dict[str, Any] = None):
        self.message = message
        self.error_code = error_code
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class InputValidationError(AppException):
    """Raised for malformed or missing input (non-positive amount, empty item name)."""

    def __init__(self, message: str = "Неверный запрос", details: Dict[str, Any] = None):
        super().__init__(
            message=message,
            error_code="ERR_VALIDATION",
            status_code=status.HTTP_400_BAD_REQUEST,
            details=details
        )


class AuthenticationError(AppException):
    """Raised for authentication failures."""

    def __init__(self, message: str = "Пользователь не авторизован"):
        super().__init__(
            message=message,
            error_code="ERR_AUTH_001",
            status_code=status.HTTP_401_UNAUTHORIZED
        )


class ResourceNotFoundError(AppException):
    """Raised when requested resource is not found."""

    def __init__(self, message: str, resource: str, resource_id: Any = None):
        super().__init__(
            message=message,
            error_code="ERR_NOT_FOUND_001",
            status_code=status.HTTP_404_NOT_FOUND,
            details={"resource": resource, "id": resource_id}
        )


class AccountNotFoundError(ResourceNotFoundError):
    """Raised when an account cannot be resolved by username."""

    def __init__(self, message: str, username: str = None):
        super().__init__(message=message, resource="account", resource_id=username)


class ItemNotFoundError(ResourceNotFoundError):
    """Raised when a catalog item does not exist."""

    def __init__(self, item_name: str = None):
        super().__init__(message="Товар не найден", resource="merch", resource_id=item_name)


class InsufficientFundsError(AppException):
    """Raised when a balance is below the amount required."""

    def __init__(self, balance: int = None, required: int = None):
        super().__init__(
            message="Недостаточно средств",
            error_code="ERR_FUNDS_001",
            status_code=status.HTTP_400_BAD_REQUEST,
            details={"balance": balance, "required": required}
        )


class InternalError(AppException):
    """Raised for storage, hashing or signing failures."""

    def __init__(self, message: str = "An internal server error occurred"):
        super().__init__(
            message=message,
            error_code="ERR_INTERNAL_SERVER",
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR
        )


# Global Exception Handlers

async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
    """Handler for custom application exceptions."""
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message, exc_info=exc.__cause__)

    headers = None
    if exc.status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": exc.error_code,
            "message": exc.message,
            "details": exc.details
        },
        headers=headers
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handler for FastAPI HTTPException with standardized format."""
    # Map status code to error code
    error_code_map = {
        400: "ERR_BAD_REQUEST",
        401: "ERR_UNAUTHORIZED",
        403: "ERR_FORBIDDEN",
        404: "ERR_NOT_FOUND",
        405: "ERR_METHOD_NOT_ALLOWED",
        500: "ERR_INTERNAL_SERVER"
    }

    error_code = error_code_map.get(exc.status_code, "ERR_UNKNOWN")

    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error_code": error_code,
            "message": exc.detail,
            "details": {}
        }
    )


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Handler for Pydantic validation errors."""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error_code": "ERR_VALIDATION",
            "message": "Неверный запрос",
            "details": {
                "errors": [
                    {"loc": list(error.get("loc", ())), "msg": error.get("msg"), "type": error.get("type")}
                    for error in exc.errors()
                ]
            }
        }
    )


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handler for unhandled exceptions."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error_code": "ERR_INTERNAL_SERVER",
            "message": "Внутренняя ошибка сервера",
            "details": {}
        }
    )
