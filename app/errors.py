"""Structured error helpers for API responses."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from fastapi import Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import InterfaceError, OperationalError

logger = logging.getLogger(__name__)


def build_error_payload(code: str, message: str, details: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    payload = {"error": {"code": code, "message": message}}
    if details is not None:
        payload["error"]["details"] = details
    return payload


class AppError(Exception):
    """Application-scoped error for standardized API responses."""

    def __init__(self, status_code: int, code: str, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.status_code = status_code
        self.code = code
        self.message = message
        self.payload = build_error_payload(code, message, details)


class NotFoundError(AppError):
    """
    Raised when a record is missing or owned by another user.

    The two cases are intentionally reported the same way.
    """

    def __init__(self, message: str):
        super().__init__(status.HTTP_404_NOT_FOUND, "not_found", message)


async def app_error_handler(_: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.payload)


async def database_unavailable_handler(_: Request, exc: Exception) -> JSONResponse:
    logger.error("Database unavailable: %s", exc)
    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=build_error_payload("database_unavailable", "Database not available"),
    )


def raise_app_error(status_code: int, code: str, message: str, details: Optional[Dict[str, Any]] = None) -> None:
    """Raise an AppError with a standardized error shape."""
    raise AppError(status_code, code, message, details)


def register_error_handlers(app) -> None:
    """Attach the error handlers to a FastAPI app."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(OperationalError, database_unavailable_handler)
    app.add_exception_handler(InterfaceError, database_unavailable_handler)
    # asyncpg raises this unwrapped when the server refuses the connection
    app.add_exception_handler(ConnectionRefusedError, database_unavailable_handler)
