import sentry_sdk
from flask import Blueprint, Response, current_app, jsonify, request
from pydantic import ValidationError

from starter.auth.helpers import get_current_user_id
from starter.exceptions import UserRecordError
from starter.schemas.user import UserCreate, UserProfileRequest, UserUpdate
from starter.services.user_service import UserService

bp = Blueprint("api", __name__, url_prefix="/api")

INTERNAL_SERVER_ERROR = "Internal Server Error"


def _user_service() -> UserService:
    return current_app.user_service


def _report(error: UserRecordError):
    """Log a gateway failure; every kind becomes the same generic 500 for the caller."""
    current_app.logger.error(f"API error: {error!r}")
    sentry_sdk.capture_exception(error)


def _envelope(data=None, error=None, status=200):
    return jsonify({"data": data, "error": error}), status


def _unauthorized_envelope():
    return _envelope(error="Unauthorized", status=401)


def _internal_error_envelope(error: UserRecordError):
    _report(error)
    return _envelope(error=INTERNAL_SERVER_ERROR, status=500)


@bp.get("/protected")
def list_users():
    """Return every row of the users table to a signed-in caller."""
    if not get_current_user_id():
        return Response("Unauthorized", status=401, mimetype="text/plain")

    result = _user_service().list_users()
    if result.error:
        _report(result.error)
        return Response(INTERNAL_SERVER_ERROR, status=500, mimetype="text/plain")

    return jsonify([user.model_dump() for user in result.data])


@bp.get("/users/me")
def get_me():
    clerk_id = get_current_user_id()
    if not clerk_id:
        return _unauthorized_envelope()

    result = _user_service().get_user_by_clerk_id(clerk_id)
    if result.error:
        return _internal_error_envelope(result.error)

    return _envelope(data=result.data.model_dump())


@bp.post("/users/me")
def create_me():
    clerk_id = get_current_user_id()
    if not clerk_id:
        return _unauthorized_envelope()

    try:
        body = UserProfileRequest.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return _envelope(error=e.errors(include_url=False, include_context=False), status=400)

    result = _user_service().create_user(UserCreate(clerkId=clerk_id, email=body.email, name=body.name))
    if result.error:
        return _internal_error_envelope(result.error)

    return _envelope(data=result.data.model_dump(), status=201)


@bp.patch("/users/me")
def update_me():
    clerk_id = get_current_user_id()
    if not clerk_id:
        return _unauthorized_envelope()

    try:
        changes = UserUpdate.model_validate(request.get_json(silent=True) or {})
    except ValidationError as e:
        return _envelope(error=e.errors(include_url=False, include_context=False), status=400)

    result = _user_service().update_user(clerk_id, changes)
    if result.error:
        return _internal_error_envelope(result.error)

    return _envelope(data=result.data.model_dump())


@bp.delete("/users/me")
def delete_me():
    clerk_id = get_current_user_id()
    if not clerk_id:
        return _unauthorized_envelope()

    result = _user_service().delete_user(clerk_id)
    if result.error:
        return _internal_error_envelope(result.error)

    return _envelope(data={"deleted": result.deleted_count})
