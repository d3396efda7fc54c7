from dataclasses import dataclass
from typing import Any, Optional

from flask import g


@dataclass
class AuthUser:
    user_id: str
    session_id: Optional[str]
    request_state: Any


def get_current_user() -> Optional[AuthUser]:
    """
    Helper function to get current user information.
    Returns None if not authenticated.
    """
    if not hasattr(g, "auth_user_id") or not g.auth_user_id:
        return None

    return AuthUser(
        user_id=g.auth_user_id,
        session_id=g.auth_session_id,
        request_state=g.auth_request_state,
    )


def get_current_user_id() -> Optional[str]:
    """The Clerk subject id of the current request, or None."""
    user = get_current_user()
    return user.user_id if user else None
