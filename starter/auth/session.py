import httpx
from clerk_backend_api import Clerk
from clerk_backend_api.security.types import AuthenticateRequestOptions
from flask import current_app, g, request

from starter.constants import CLOCK_SKEW_MS
from starter.exceptions import AuthenticationError


def _create_httpx_request():
    """Helper function to convert Flask request to httpx.Request"""
    return httpx.Request(
        method=request.method, url=str(request.url), headers=dict(request.headers), content=request.get_data()
    )


def _get_authorized_parties() -> list[str]:
    """Origins allowed in the token's azp claim, falling back to the app's own domains."""
    parties = current_app.config.get("AUTH_AUTHORIZED_PARTIES") or [
        current_app.config.get("FRONTEND_DOMAIN"),
        current_app.config.get("BACKEND_DOMAIN"),
    ]
    # azp is an origin, so it never carries a trailing slash
    return [party.rstrip("/") for party in parties if party]


def has_bearer_token() -> bool:
    auth_header = request.headers.get("Authorization")
    return bool(auth_header and auth_header.startswith("Bearer "))


def authenticate_request(allow_cookies: bool = False):
    """
    Core authentication logic
    Returns: request_state object if authenticated
    Raises: AuthenticationError if not authenticated
    """
    if not allow_cookies and not has_bearer_token():
        raise AuthenticationError("Bearer token required")

    clerk_client: Clerk = current_app.clerk_client
    if not clerk_client:
        raise AuthenticationError("Authentication service not initialized", 500)

    httpx_request = _create_httpx_request()

    try:
        request_state = clerk_client.authenticate_request(
            httpx_request,
            AuthenticateRequestOptions(authorized_parties=_get_authorized_parties(), clock_skew_in_ms=CLOCK_SKEW_MS),
        )

        if not request_state.is_signed_in:
            current_app.logger.warning(f"User is not signed in: {request_state.message}")
            raise AuthenticationError("User is not signed in")

        return request_state

    except AuthenticationError as e:
        current_app.logger.warning(f"Authentication error: {e}")
        raise e

    except ValueError as e:
        # Token parsing/JSON errors
        current_app.logger.warning(f"Token parsing error: {e}")
        raise AuthenticationError("Invalid token format")

    except Exception as e:
        current_app.logger.error(f"Unexpected authentication error: {e}")

        # Check if it's likely an authentication-related error
        error_str = str(e).lower()
        if any(keyword in error_str for keyword in ["401", "unauthorized", "authentication", "token"]):
            raise AuthenticationError("Authentication failed")
        else:
            raise AuthenticationError("Authentication service error", 500)


def set_user_context(request_state):
    """Set user context in Flask g object"""
    g.auth_request_state = request_state
    g.auth_user_id = request_state.payload.get("sub", None)
    g.auth_session_id = request_state.payload.get("sid", None)
    g.auth_issued_at = request_state.payload.get("iat", None)
    g.auth_expires_at = request_state.payload.get("exp", None)
    g.auth_issuer = request_state.payload.get("iss", None)


def clear_user_context():
    """Clear user context from Flask g object"""
    g.auth_request_state = None
    g.auth_user_id = None
    g.auth_session_id = None
    g.auth_issued_at = None
    g.auth_expires_at = None
    g.auth_issuer = None

