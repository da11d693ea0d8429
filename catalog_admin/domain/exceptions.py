"""Domain exceptions.

All catalog-level errors raised by the store and service layers. The API
layer maps each subclass to an HTTP status in one place.
"""

from typing import Any


class CatalogError(Exception):
    """Base class for all catalog exceptions.

    All catalog errors should inherit from this class to allow
    catching them uniformly at the API layer.
    """

    status_code = 500

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        """Initialize catalog error.

        Args:
            message: Human-readable error message.
            details: Optional dictionary with additional error context.
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(CatalogError):
    """Raised when a required field is missing or has an invalid value."""

    status_code = 400

    def __init__(self, field: str, reason: str) -> None:
        """Initialize validation error.

        Args:
            field: Name of the offending field.
            reason: Explanation of why the value is invalid.
        """
        super().__init__(
            f"Invalid {field}: {reason}",
            details={"field": field, "reason": reason},
        )


class NotFoundError(CatalogError):
    """Raised when no record exists for the requested id."""

    status_code = 404

    def __init__(self, entity_type: str, entity_id: str) -> None:
        """Initialize not found error.

        Args:
            entity_type: Type of entity (e.g., "Product", "Category").
            entity_id: ID that was looked up.
        """
        super().__init__(
            f"{entity_type} not found: {entity_id}",
            details={"entity_type": entity_type, "entity_id": entity_id},
        )


class UpstreamError(CatalogError):
    """Raised when the database or the asset store fails."""

    status_code = 502

    def __init__(self, service: str, message: str, status_code: int | None = None) -> None:
        """Initialize upstream error.

        Args:
            service: Name of the failing collaborator (e.g., "imagekit").
            message: Error description.
            status_code: HTTP status returned by the collaborator, if any.
        """
        super().__init__(
            f"[{service}] {message}",
            details={"service": service, "upstream_status": status_code},
        )
        self.service = service
        self.upstream_status = status_code
