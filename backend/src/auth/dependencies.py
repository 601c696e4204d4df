"""FastAPI authentication dependencies."""

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, Request

from src.auth.context import UserContext
from src.auth.exceptions import MissingTokenError
from src.auth.supabase_auth import SupabaseAuth


def _extract_token_from_request(request: Request) -> str | None:
    """Extract JWT token from request headers or cookies."""
    auth_header = request.headers.get("Authorization", "")
    if auth_header.startswith("Bearer "):
        return auth_header.removeprefix("Bearer ")

    # httpOnly cookie auth; the cookie may carry the "Bearer " prefix too
    cookie_token = request.cookies.get("access_token")
    if cookie_token:
        return cookie_token.removeprefix("Bearer ")

    return None


async def get_user_context(request: Request) -> AsyncGenerator[UserContext, None]:
    """Resolve the authenticated user for a route; closes its client afterwards."""
    token = _extract_token_from_request(request)
    if not token:
        raise MissingTokenError

    auth = SupabaseAuth()
    context = await auth.authenticate(token)
    try:
        yield context
    finally:
        await auth.close_client(context.client)


# Usage: async def my_route(user: CurrentUser) -> Response:
CurrentUser = Annotated[UserContext, Depends(get_user_context)]
