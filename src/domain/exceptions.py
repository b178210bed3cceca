"""
Domain exceptions for the tenant core.

This module defines domain-level exceptions that represent business rule violations.
These exceptions are independent of infrastructure concerns: the transport
adapter decides how each one surfaces to a caller.
"""

from typing import Any


class DomainException(Exception):
    """
    Base exception for all tenant core errors.

    All custom exceptions should inherit from this class to allow
    for consistent error handling and logging.

    Attributes:
        message: Human-readable error description
        error_code: Machine-readable error code for API responses
        details: Additional error context
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to dictionary for API responses."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }


class ValidationException(DomainException):
    """Raised when a required domain field is missing or malformed."""

    def __init__(self, message: str, field: str | None = None):
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class InvariantViolationException(DomainException):
    """Raised when an operation is attempted from a state that does not allow it."""

    def __init__(self, message: str, aggregate: str | None = None, state: str | None = None):
        details: dict[str, Any] = {}
        if aggregate:
            details["aggregate"] = aggregate
        if state:
            details["state"] = state
        super().__init__(message, "INVARIANT_VIOLATION", details)


class ResourceNotFoundException(DomainException):
    """Raised when a requested resource is absent or not visible to the tenant."""

    def __init__(self, resource_type: str, resource_id: str):
        super().__init__(
            f"{resource_type} not found: {resource_id}",
            "RESOURCE_NOT_FOUND",
            {"resource_type": resource_type, "resource_id": resource_id},
        )


class TenantNotFoundException(DomainException):
    """Raised when tenant is not found."""

    def __init__(self, tenant_id: str):
        super().__init__(
            f"Tenant not found: {tenant_id}",
            "TENANT_NOT_FOUND",
            {"tenant_id": tenant_id},
        )


class UnresolvedTenantException(DomainException):
    """Raised when a tenant-scoped operation runs without a tenant context."""

    def __init__(self, message: str = "Tenant context is required for this operation"):
        super().__init__(message, "TENANT_UNRESOLVED")


class PermissionDeniedError(DomainException):
    """Permission denied - the tenant's plan lacks a module or feature."""

    def __init__(
        self,
        message: str = "Permission denied",
        resource: str | None = None,
        action: str | None = None,
    ):
        details: dict[str, Any] = {}
        if resource:
            details["resource"] = resource
        if action:
            details["action"] = action
        super().__init__(message, "PERMISSION_DENIED", details)


class TenantLimitExceededException(DomainException):
    """Raised when a tenant reaches one of its usage caps."""

    def __init__(self, limit: str, current: int, maximum: int):
        super().__init__(
            f"Tenant limit exceeded for {limit}. Current: {current}, Max: {maximum}",
            "TENANT_LIMIT_EXCEEDED",
            {"limit": limit, "current": current, "max": maximum},
        )
