from typing import TYPE_CHECKING


if TYPE_CHECKING:
    from src.progress.results import ErrorKind


class DomainError(Exception):
    """Base exception class for all domain-specific exceptions."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


class ResourceNotFoundError(DomainError):
    """Exception raised when a requested resource is not found."""

    def __init__(self, resource_type: str, resource_id: str) -> None:
        self.resource_type = resource_type
        self.resource_id = resource_id
        message = f"{resource_type} with ID {resource_id} not found"
        super().__init__(message)


class ProgressStoreError(DomainError):
    """Exception raised when a progress store operation fails.

    Carries the failure kind so the HTTP layer can tell a duplicate section
    apart from a missing one or an unreachable backend.
    """

    def __init__(self, kind: "ErrorKind", operation: str, message: str) -> None:
        self.kind = kind
        self.operation = operation
        super().__init__(f"Error {operation}: {message}")
