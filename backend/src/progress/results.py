"""Tagged results for progress store operations.

The repository never raises for store failures. It returns ``Ok`` with the
value or ``Err`` describing what went wrong, so callers can tell a
legitimately absent section apart from a failed request.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, NoReturn, TypeVar

from src.exceptions import ProgressStoreError


T = TypeVar("T")


class ErrorKind(str, Enum):
    """Stable categories for progress store failures."""

    TRANSPORT = "transport"
    CONSTRAINT = "constraint"
    NOT_FOUND = "not_found"
    QUERY = "query"


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful store round trip."""

    value: T

    @property
    def ok(self) -> bool:
        return True

    def unwrap(self) -> T:
        return self.value

    def unwrap_or(self, default: T) -> T:  # noqa: ARG002
        return self.value


@dataclass(frozen=True)
class Err:
    """Failed store round trip."""

    kind: ErrorKind
    operation: str
    message: str

    @property
    def ok(self) -> bool:
        return False

    def unwrap(self) -> NoReturn:
        raise ProgressStoreError(self.kind, self.operation, self.message)

    def unwrap_or(self, default: T) -> T:
        return default


Result = Ok[T] | Err
