"""Custom exception classes for the application.

Defines domain-specific exceptions raised by the services and repositories
and rendered consistently by the exception handlers in
`core.error_handlers`.
"""

from typing import Optional, Any, Dict


class AppException(Exception):
    """Base exception class for all application exceptions.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code to return.
        details: Optional additional error details.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[Dict[str, Any]] = None
    ):
        """Initialize application exception.

        Args:
            message: Error message.
            status_code: HTTP status code (default: 500).
            details: Optional dictionary with additional error context.
        """
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppException):
    """Raised when profile or plan input falls outside its documented range.

    Raised before any computation starts, so nothing is partially applied.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        """Initialize validation error.

        Args:
            message: Validation error message.
            field: Optional field name that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, status_code=400, details=details)


class NotFoundError(AppException):
    """Exception raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: Any):
        """Initialize not found error.

        Args:
            resource: Type of resource (e.g., 'Profile', 'DietPlan', 'Day').
            identifier: ID or identifier that was not found.
        """
        message = f"{resource} with id '{identifier}' not found"
        super().__init__(message, status_code=404, details={"resource": resource, "id": identifier})


class StateInvariantViolation(AppException):
    """Raised when an operation would break a plan-state rule.

    Examples are deleting the active plan or touching a plan that belongs
    to another user. The operation is rejected, never silently ignored.
    """

    def __init__(self, message: str, status_code: int = 409, details: Optional[Dict[str, Any]] = None):
        super().__init__(message, status_code=status_code, details=details)


class PlanOwnershipError(StateInvariantViolation):
    """Raised when a user addresses a diet plan they do not own."""

    def __init__(self, plan_id: Any, user_id: Any):
        super().__init__(
            f"DietPlan '{plan_id}' is not owned by user '{user_id}'",
            status_code=403,
            details={"plan_id": plan_id, "user_id": user_id},
        )


class DatabaseError(AppException):
    """Exception raised when database operations fail."""

    def __init__(self, message: str, operation: Optional[str] = None):
        """Initialize database error.

        Args:
            message: Database error message.
            operation: Optional operation that failed (e.g., 'create', 'update').
        """
        details = {"operation": operation} if operation else {}
        super().__init__(message, status_code=500, details=details)
