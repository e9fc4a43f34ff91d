"""Domain exceptions for multisearch.

Defines domain-level exceptions that represent invalid requests and
isolated source failures. A caller layer (HTTP controller, CLI) maps them
to its own error responses using message, error_code and details.
"""

from typing import Any


class MultiSearchException(Exception):
    """Base exception for all multisearch errors.

    Attributes:
        message: Human-readable error description.
        error_code: Machine-readable error code.
        details: Additional error context (e.g. field, entity_type).
    """

    def __init__(
        self,
        message: str,
        error_code: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        """Initialize the exception.

        Args:
            message: Human-readable error description.
            error_code: Optional machine-readable code; defaults to class name.
            details: Optional dict of extra context.
        """
        self.message = message
        self.error_code = error_code or self.__class__.__name__
        self.details = details or {}
        super().__init__(self.message)


class ValidationException(MultiSearchException):
    """Raised when input validation fails (e.g. invalid page or limit)."""

    def __init__(self, message: str, field: str | None = None) -> None:
        """Initialize with message and optional field name.

        Args:
            message: Description of the validation failure.
            field: Optional field that failed validation.
        """
        details = {"field": field} if field else {}
        super().__init__(message, "VALIDATION_ERROR", details)


class InvalidQueryException(ValidationException):
    """Raised when the search term is missing or too short after trimming."""

    def __init__(self, min_length: int = 2) -> None:
        """Initialize with the minimum accepted term length.

        Args:
            min_length: Minimum number of characters after trim.
        """
        super().__init__(
            f"Search term must be at least {min_length} characters long",
            field="term",
        )
        self.error_code = "INVALID_QUERY"
        self.details["min_length"] = min_length


class UnknownEntityTypeException(ValidationException):
    """Raised when a scoped search names an entity type that does not exist."""

    def __init__(self, entity_type: str) -> None:
        """Initialize with the unrecognized entity type.

        Args:
            entity_type: The value that matched no entity type.
        """
        super().__init__(f"Unknown entity type: {entity_type}", field="entity_type")
        self.error_code = "UNKNOWN_ENTITY_TYPE"
        self.details["entity_type"] = entity_type


class EntitySearchFailure(MultiSearchException):
    """One entity branch of a search failed (repository error or timeout).

    Internal: recorded on the branch outcome and logged, never raised to the
    caller of a search.
    """

    def __init__(self, entity_type: str, cause: BaseException) -> None:
        """Initialize with the failing entity type and underlying error.

        Args:
            entity_type: Entity type whose repository failed.
            cause: The original exception (or TimeoutError).
        """
        super().__init__(
            f"Search failed for entity type {entity_type}: {cause!r}",
            "ENTITY_SEARCH_FAILED",
            {"entity_type": entity_type, "cause": type(cause).__name__},
        )
        self.cause = cause
