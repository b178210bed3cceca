"""
Domain error → HTTP response mapping.

Handlers return the exception's ``to_dict()`` body with the status code of
its category.
"""

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from src.application.exceptions import DispatchMisconfigurationException
from src.domain.exceptions import (DomainException,
                                   InvariantViolationException,
                                   PermissionDeniedError,
                                   ResourceNotFoundException,
                                   TenantLimitExceededException,
                                   TenantNotFoundException,
                                   UnresolvedTenantException,
                                   ValidationException)
from src.shared.telemetry.logging import get_logger

logger = get_logger(__name__)

# First match wins
STATUS_CODES: tuple[tuple[type[DomainException], int], ...] = (
    (ValidationException, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (InvariantViolationException, status.HTTP_409_CONFLICT),
    (ResourceNotFoundException, status.HTTP_404_NOT_FOUND),
    (TenantNotFoundException, status.HTTP_404_NOT_FOUND),
    (UnresolvedTenantException, status.HTTP_400_BAD_REQUEST),
    (PermissionDeniedError, status.HTTP_403_FORBIDDEN),
    (TenantLimitExceededException, status.HTTP_429_TOO_MANY_REQUESTS),
)


def status_code_for(exc: DomainException) -> int:
    for exc_type, code in STATUS_CODES:
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_400_BAD_REQUEST


async def domain_exception_handler(request: Request, exc: DomainException) -> JSONResponse:
    code = status_code_for(exc)
    logger.info(f"{request.method} {request.url.path} -> {code} {exc.error_code}")
    return JSONResponse(status_code=code, content=exc.to_dict())


async def dispatch_misconfiguration_handler(
    request: Request, exc: DispatchMisconfigurationException
) -> JSONResponse:
    logger.error(f"Dispatch misconfigured for {request.url.path}: {exc.message}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": exc.error_code, "message": "Internal server error", "details": {}},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(DispatchMisconfigurationException, dispatch_misconfiguration_handler)
    app.add_exception_handler(DomainException, domain_exception_handler)
