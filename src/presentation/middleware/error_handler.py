"""Error handling middleware and exception handlers."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import structlog

from src.domain.exceptions import (
    AccountInactiveException,
    ConflictException,
    CreditNotActiveException,
    DomainException,
    DuplicatePendingCreditException,
    DuplicateUserException,
    InsufficientFundsException,
    InvalidRequestException,
    InvalidStateTransitionException,
    LedgerImmutableException,
    NotFoundException,
    RepaymentExceedsBalanceException,
)
from .request_context import get_request_id

logger = structlog.get_logger(__name__)

# Domain exception -> HTTP status. Subclasses inherit their base's status.
STATUS_CODES = {
    NotFoundException: 404,
    InvalidRequestException: 400,
    RepaymentExceedsBalanceException: 400,
    InsufficientFundsException: 400,
    DuplicatePendingCreditException: 409,
    CreditNotActiveException: 409,
    InvalidStateTransitionException: 409,
    AccountInactiveException: 409,
    DuplicateUserException: 409,
    ConflictException: 409,
}


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={
            "error": code,
            "message": message,
            "request_id": get_request_id(),
        },
    )


def _describe(error: dict) -> str:
    """One pydantic error as 'field: message', without the body/query prefix."""
    location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
    field = ".".join(location)
    return f"{field}: {error.get('msg', 'invalid')}" if field else error.get("msg", "invalid")


def error_handler_middleware(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI app.

    Maps domain exceptions to appropriate HTTP responses.
    """

    async def mapped_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle domain exceptions with a known status code."""
        status_code = next(
            status for exc_type, status in STATUS_CODES.items() if isinstance(exc, exc_type)
        )
        logger.info(
            "request_rejected",
            request_id=get_request_id(),
            code=exc.code,
            status_code=status_code,
        )
        return _error_response(status_code, exc.code, exc.message)

    for exc_type in STATUS_CODES:
        app.add_exception_handler(exc_type, mapped_exception_handler)

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(
        request: Request,
        exc: RequestValidationError,
    ) -> JSONResponse:
        """Malformed bodies and query params share the INVALID_REQUEST contract."""
        message = "; ".join(_describe(error) for error in exc.errors())
        logger.info(
            "request_rejected",
            request_id=get_request_id(),
            code="INVALID_REQUEST",
            status_code=400,
        )
        return _error_response(400, "INVALID_REQUEST", message or "Invalid request")

    @app.exception_handler(LedgerImmutableException)
    async def ledger_immutable_handler(
        request: Request,
        exc: LedgerImmutableException,
    ) -> JSONResponse:
        """A code path tried to rewrite history; this is a bug, not a user error."""
        logger.error(
            "ledger_immutable_violation",
            request_id=get_request_id(),
            reference=exc.reference,
        )
        return _error_response(500, exc.code, "An unexpected error occurred.")

    @app.exception_handler(DomainException)
    async def domain_exception_handler(
        request: Request,
        exc: DomainException,
    ) -> JSONResponse:
        """Handle generic domain exceptions."""
        logger.warning(
            "domain_exception",
            request_id=get_request_id(),
            code=exc.code,
            message=exc.message,
        )
        return _error_response(400, exc.code, exc.message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request,
        exc: Exception,
    ) -> JSONResponse:
        """Handle unexpected exceptions."""
        logger.exception(
            "unhandled_exception",
            request_id=get_request_id(),
            error=str(exc),
            error_type=type(exc).__name__,
        )
        return _error_response(500, "INTERNAL_ERROR", "An unexpected error occurred.")
