"""
Access gate run before every request.

Each request path is classified as excluded (static assets, build output),
public (matches PUBLIC_ROUTES) or protected. Protected requests need a valid
Clerk session; without one they are rejected before any view runs. API
callers get a 401, browsers asking for a page are sent to the sign-in page.
"""

from urllib.parse import urlencode

from flask import Response, current_app, redirect, request
from werkzeug.http import HTTP_STATUS_CODES

from starter.auth.session import (
    authenticate_request,
    clear_user_context,
    has_bearer_token,
    set_user_context,
)
from starter.exceptions import AuthenticationError
from starter.middleware.route_matcher import (
    create_route_matcher,
    is_api_path,
    is_excluded_path,
)


def _wants_html() -> bool:
    accept = request.accept_mimetypes
    return accept["text/html"] > accept["application/json"]


def _reject(error: AuthenticationError):
    if error.status_code == 401 and not is_api_path(request.path) and _wants_html():
        sign_in_url = current_app.config.get("SIGN_IN_URL", "/sign-in")
        return redirect(f"{sign_in_url}?{urlencode({'redirect_url': request.url})}")

    # The reason stays in the log, the caller only sees the status phrase
    current_app.logger.info(f"Rejected {request.method} {request.path}: {error}")
    return Response(HTTP_STATUS_CODES[error.status_code], status=error.status_code, mimetype="text/plain")


def _resolve_optional_session():
    """Attach a session on public routes when the caller sent one, never reject."""
    if not has_bearer_token():
        clear_user_context()
        return

    try:
        set_user_context(authenticate_request())
    except AuthenticationError as e:
        current_app.logger.debug(f"Optional authentication failed: {e}")
        clear_user_context()


def init_access_gate(app):
    is_public_route = create_route_matcher(app.config.get("PUBLIC_ROUTES", []))

    @app.before_request
    def access_gate():
        path = request.path

        if is_excluded_path(path) or request.method == "OPTIONS":
            return None

        if is_public_route(path):
            _resolve_optional_session()
            return None

        try:
            # Pages rely on the Clerk session cookie; API callers send a bearer token
            request_state = authenticate_request(allow_cookies=not is_api_path(path))
        except AuthenticationError as e:
            clear_user_context()
            return _reject(e)

        set_user_context(request_state)
        return None

    return is_public_route
