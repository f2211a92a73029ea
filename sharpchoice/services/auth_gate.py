"""Bearer-token auth gate for admin endpoints, backed by Supabase Auth."""

from typing import Any, Optional

from sharpchoice.services.supabase_client import get_user_for_token
from sharpchoice.utils.errors import AuthError, SupabaseError
from sharpchoice.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Pull the token out of an ``Authorization: Bearer <token>`` header."""
    if not authorization or not authorization.startswith("Bearer "):
        raise AuthError("Missing token")
    token = authorization[len("Bearer "):].strip()
    if not token:
        raise AuthError("Missing token")
    return token


def _user_to_dict(user: Any) -> dict:
    if isinstance(user, dict):
        return user
    if hasattr(user, "model_dump"):
        return user.model_dump(mode="json")
    return {"id": getattr(user, "id", None), "email": getattr(user, "email", None)}


async def authenticate(authorization: Optional[str]) -> dict:
    """
    Validate the request's bearer token against Supabase Auth.

    Returns the resolved user as a dict. Raises AuthError when the header is
    missing or the token is rejected.
    """
    token = extract_bearer_token(authorization)

    try:
        user = await get_user_for_token(token)
    except SupabaseError:
        raise
    except Exception as e:
        # gotrue raises AuthApiError for expired/forged tokens
        logger.warning("Token rejected by Supabase Auth", error=str(e))
        raise AuthError("Invalid or expired token")

    if not user:
        raise AuthError("Invalid or expired token")

    identity = _user_to_dict(user)
    logger.info("Admin request authenticated", user_id=identity.get("id"))
    return identity
