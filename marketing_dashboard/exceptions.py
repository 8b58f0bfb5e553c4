"""Custom exceptions for the dashboard core."""

from typing import Any


class DashboardError(Exception):
    """Base exception for dashboard computation errors."""

    pass


class ValidationError(DashboardError):
    """Input violates a record invariant (negative count, unknown status, ...)."""

    pass


class EmptyInputError(DashboardError):
    """A record set that must be non-empty was empty."""

    pass


class ReferenceDataError(DashboardError):
    """Failed to load the reference data file."""

    pass


class ReferenceValidationError(DashboardError):
    """Reference records failed validation against Pydantic models."""

    def __init__(self, errors: list[dict[str, Any]], record_count: int):
        self.errors = errors
        self.record_count = record_count
        super().__init__(
            f"Validation failed for {len(errors)} of {record_count} records. "
            f"First error: {errors[0] if errors else 'N/A'}"
        )
