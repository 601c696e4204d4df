"""Authentication module exports."""

from src.auth.context import UserContext
from src.auth.dependencies import CurrentUser, get_user_context
from src.auth.supabase_auth import SupabaseAuth


__all__ = [
    "CurrentUser",
    "SupabaseAuth",
    "UserContext",
    "get_user_context",
]
