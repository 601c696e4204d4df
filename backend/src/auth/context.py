"""UserContext: the authenticated user paired with a storage client.

Feature modules receive identity and storage handle together instead of
reaching for a module-level client.
"""

from typing import Any
from uuid import UUID


class UserContext:
    """Request-scoped user context."""

    def __init__(self, user_id: UUID, client: Any) -> None:
        self.user_id = user_id
        self.client = client

    def __repr__(self) -> str:
        """Return string representation of the context."""
        return f"<UserContext(user_id={self.user_id})>"
