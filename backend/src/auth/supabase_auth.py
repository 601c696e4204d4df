"""Supabase authentication using a per-request client bound to the user's JWT."""

import logging
from uuid import UUID

import httpx
from supabase import AsyncClient, AsyncClientOptions, AuthError, acreate_client

from src.auth.context import UserContext
from src.auth.exceptions import InvalidTokenError, SupabaseConfigError
from src.config.settings import get_settings


logger = logging.getLogger(__name__)


class SupabaseAuth:
    """Resolve the ambient identity for a request.

    The returned client sends the user's token with every PostgREST request,
    so row-level security on ``user_progress`` sees the same user the API
    resolved.
    """

    def __init__(self, url: str | None = None, key: str | None = None) -> None:
        """Read Supabase configuration."""
        settings = get_settings()
        self.url = url or settings.SUPABASE_URL
        self.key = key or settings.SUPABASE_PUBLISHABLE_KEY

        if not self.url or not self.key:
            logger.error("Supabase configuration missing")
            raise SupabaseConfigError

    async def create_client(self) -> AsyncClient:
        """Create an async client that neither persists nor refreshes sessions."""
        options = AsyncClientOptions(
            auto_refresh_token=False,
            persist_session=False,  # Don't persist on server
        )
        return await acreate_client(self.url, self.key, options=options)

    @staticmethod
    async def close_client(client: AsyncClient) -> None:
        """Close the PostgREST HTTP session held by a per-request client."""
        await client.postgrest.aclose()

    async def authenticate(self, token: str) -> UserContext:
        """Validate a JWT and return the user's context."""
        client = await self.create_client()

        try:
            response = await client.auth.get_user(token)
        except (AuthError, httpx.HTTPError) as e:
            logger.debug(f"Token validation failed: {e}")
            await self.close_client(client)
            raise InvalidTokenError from e

        if not response or not response.user:
            logger.warning("Token validation returned no user")
            await self.close_client(client)
            raise InvalidTokenError

        client.postgrest.auth(token)
        user_id = UUID(str(response.user.id))
        logger.debug(f"Successfully authenticated user: {user_id}")
        return UserContext(user_id=user_id, client=client)
