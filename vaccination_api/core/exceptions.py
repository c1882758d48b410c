"""
Domain errors and global exception handlers — prevents stack-trace leakage
to clients.
"""

from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError, SQLAlchemyError

logger = logging.getLogger(__name__)


# ── Domain errors ───────────────────────────────────────────────────
class DomainError(Exception):
    """Base class for errors that carry their own client-facing message."""

    status_code: int = 400
    code: str = "BAD_REQUEST"
    message: str = "Bad request"

    def __init__(self, message: str | None = None, **extra: Any) -> None:
        self.message = message or self.message
        self.extra = extra
        super().__init__(self.message)


class NotFoundError(DomainError):
    status_code = 404
    code = "NOT_FOUND"
    message = "Resource not found"


class DuplicateResourceError(DomainError):
    status_code = 409
    code = "DUPLICATE_RESOURCE"
    message = "Resource already exists"


class DuplicateEmailError(DuplicateResourceError):
    code = "EMAIL_ALREADY_REGISTERED"
    message = "Email already registered"


class DuplicateCPFError(DuplicateResourceError):
    code = "CPF_ALREADY_REGISTERED"
    message = "CPF already registered"


class DuplicateCORENError(DuplicateResourceError):
    code = "COREN_ALREADY_REGISTERED"
    message = "COREN already registered"


class MissingCORENError(DomainError):
    code = "COREN_REQUIRED"
    message = "COREN is required for NURSE role"


class InvalidRoleError(DomainError):
    code = "INVALID_ROLE"
    message = "Invalid role"


class AuthenticationError(Exception):
    """Rejected request; ``body`` is sent to the client as-is."""

    def __init__(self, body: dict[str, str]) -> None:
        self.body = body
        super().__init__(body.get("message", body["error"]))


# ── Handlers ────────────────────────────────────────────────────────
async def _domain_error_handler(_request: Request, exc: DomainError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "code": exc.code, **exc.extra, "success": False},
    )


async def _authentication_error_handler(
    _request: Request, exc: AuthenticationError
) -> JSONResponse:
    return JSONResponse(
        status_code=401,
        content=exc.body,
        headers={"WWW-Authenticate": "Bearer"},
    )


async def _http_exception_handler(_request: Request, exc: HTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "success": False},
        headers=exc.headers,
    )


async def _integrity_error_handler(_request: Request, exc: IntegrityError) -> JSONResponse:
    logger.error("Database integrity error: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=409,
        content={"detail": "Database constraint violation", "success": False},
    )


async def _sqlalchemy_error_handler(_request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.error("Database error: %s", exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal database error", "success": False},
    )


async def _generic_exception_handler(_request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception: %s", exc)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "success": False},
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Attach all exception handlers to the FastAPI app."""
    app.add_exception_handler(DomainError, _domain_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(AuthenticationError, _authentication_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(HTTPException, _http_exception_handler)  # type: ignore[arg-type]
    app.add_exception_handler(IntegrityError, _integrity_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(SQLAlchemyError, _sqlalchemy_error_handler)  # type: ignore[arg-type]
    app.add_exception_handler(Exception, _generic_exception_handler)
