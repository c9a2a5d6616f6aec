"""Custom exceptions for the application."""
from typing import Any, Optional


class AppException(Exception):
    """Base application exception."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)


class ValidationError(AppException):
    """Validation errors."""

    def __init__(
        self,
        message: str,
        field: Optional[str] = None,
        error_code: str = "VALIDATION_ERROR",
    ):
        super().__init__(
            message,
            error_code=error_code,
            details={"field": field} if field else {},
        )


class InvalidIdentifierError(ValidationError):
    """Identifier is not a well-formed document id."""

    def __init__(self, value: Any):
        super().__init__("invalid id", field="id", error_code="INVALID_ID")
        self.details["value"] = value


class MissingDataError(ValidationError):
    """Required book fields are empty or absent."""

    def __init__(self, fields: list[str]):
        super().__init__("missing form data", error_code="MISSING_DATA")
        self.details["fields"] = fields


class NotFoundError(AppException):
    """Resource not found errors."""

    def __init__(self, resource: str, resource_id: Any):
        super().__init__(
            f"{resource} with id {resource_id} not found",
            error_code="NOT_FOUND",
            details={"resource": resource, "id": resource_id},
        )


class BookNotFoundError(NotFoundError):
    """No book matches the identifier."""

    def __init__(self, book_id: str):
        super().__init__("Book", book_id)


class ConflictError(AppException):
    """Resource conflicts with an existing one."""

    def __init__(self, message: str, details: Optional[dict[str, Any]] = None):
        super().__init__(message, error_code="ALREADY_EXISTS", details=details)


class BookAlreadyExistsError(ConflictError):
    """A book with the same isbn, or the same name and author, exists."""

    def __init__(self, existing_id: Optional[str], matched_on: str):
        super().__init__(
            "book already exists",
            details={"existing_id": existing_id, "matched_on": matched_on},
        )


class StoreError(AppException):
    """Document store failures (connectivity, timeouts, driver errors)."""

    def __init__(self, message: str = "document store unavailable", operation: Optional[str] = None):
        super().__init__(
            message,
            error_code="STORE_ERROR",
            details={"operation": operation} if operation else {},
        )


class StoreTimeoutError(StoreError):
    """A store call exceeded its deadline."""

    def __init__(self, operation: str, timeout: float):
        super().__init__(f"{operation} timed out after {timeout}s", operation=operation)
        self.details["timeout"] = timeout


class BookNotCreatedError(StoreError):
    """Insert failed in the store."""

    def __init__(self):
        super().__init__("book not created", operation="insert_one")


class BookNotUpdatedError(StoreError):
    """Update failed in the store."""

    def __init__(self):
        super().__init__("book not updated", operation="update_one")


class OperationNotAllowedError(AppException):
    """Operation is switched off by configuration."""

    def __init__(self, operation: str):
        super().__init__(
            f"{operation} is disabled",
            error_code="NOT_ALLOWED",
            details={"operation": operation},
        )
