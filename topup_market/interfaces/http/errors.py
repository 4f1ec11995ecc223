"""Translate domain errors into the standard JSON error body."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from topup_market.modules.accounts.exceptions import (
    AccountError,
    InsufficientFundsError,
    InvalidCredentialsError,
)
from topup_market.modules.common.exceptions import (
    ConflictError,
    DomainError,
    InactiveResourceError,
    NotFoundError,
    ValidationError,
)
from topup_market.schemas import ErrorDetail, ErrorResponse

logger = logging.getLogger(__name__)

# checked in order, first match wins
STATUS_BY_ERROR: tuple[tuple[type[DomainError], int], ...] = (
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (InsufficientFundsError, status.HTTP_402_PAYMENT_REQUIRED),
    (InactiveResourceError, status.HTTP_409_CONFLICT),
    (ConflictError, status.HTTP_409_CONFLICT),
    (ValidationError, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InvalidCredentialsError, status.HTTP_401_UNAUTHORIZED),
    (AccountError, status.HTTP_400_BAD_REQUEST),
)


def status_for(exc: DomainError) -> int:
    for error_type, status_code in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status_code
    return status.HTTP_400_BAD_REQUEST


def error_response(exc: DomainError) -> JSONResponse:
    body = ErrorResponse(
        error=ErrorDetail(
            code=exc.code,
            message=exc.message,
            retryable=exc.retryable,
            context=exc.context or None,
        )
    )
    return JSONResponse(status_code=status_for(exc), content=body.model_dump(mode="json"))


async def domain_exception_handler(request: Request, exc: DomainError) -> JSONResponse:
    if exc.retryable:
        logger.warning("Retryable error on %s %s: %s", request.method, request.url.path, exc.message)
    else:
        logger.info("Rejected %s %s: %s %s", request.method, request.url.path, exc.code, exc.message)
    return error_response(exc)


def add_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DomainError, domain_exception_handler)


__all__ = ["add_error_handlers", "error_response", "status_for"]
