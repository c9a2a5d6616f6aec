"""Core utilities."""
from book_catalog.core.exceptions import (
    AppException,
    BookAlreadyExistsError,
    BookNotCreatedError,
    BookNotFoundError,
    BookNotUpdatedError,
    ConflictError,
    InvalidIdentifierError,
    MissingDataError,
    NotFoundError,
    OperationNotAllowedError,
    StoreError,
    StoreTimeoutError,
    ValidationError,
)
from book_catalog.core.logging import get_logger, setup_logging

__all__ = [
    # Logging
    "get_logger",
    "setup_logging",
    # Exceptions
    "AppException",
    "ValidationError",
    "InvalidIdentifierError",
    "MissingDataError",
    "NotFoundError",
    "BookNotFoundError",
    "ConflictError",
    "BookAlreadyExistsError",
    "StoreError",
    "StoreTimeoutError",
    "BookNotCreatedError",
    "BookNotUpdatedError",
    "OperationNotAllowedError",
]
