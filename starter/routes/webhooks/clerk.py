"""
Clerk webhook handlers.

Clerk user lifecycle events keep the users table in step with the identity
provider: a row is created the first time a subject signs up, updated when
their profile changes and deleted with their Clerk account.
"""

import base64
import binascii
import hashlib
import hmac
import time
from typing import Optional

from flask import abort, current_app, request

from starter.constants import WEBHOOK_TOLERANCE_SECONDS
from starter.exceptions import UserErrorKind
from starter.routes.webhooks import bp
from starter.schemas.user import UserCreate, UserUpdate


def _webhook_key(webhook_secret: str) -> bytes:
    if webhook_secret.startswith("whsec_"):
        return base64.b64decode(webhook_secret[len("whsec_") :])
    return webhook_secret.encode("utf-8")


def _timestamp_is_fresh(svix_timestamp: str) -> bool:
    try:
        sent_at = int(svix_timestamp)
    except ValueError:
        current_app.logger.error(f"Malformed svix-timestamp: {svix_timestamp!r}")
        return False

    if abs(time.time() - sent_at) > WEBHOOK_TOLERANCE_SECONDS:
        current_app.logger.error(f"Stale webhook timestamp: {sent_at}")
        return False

    return True


def verify_clerk_webhook(payload: bytes, headers: dict) -> bool:
    """
    Verify a Clerk (svix) webhook.

    The signature is an HMAC-SHA256 of "<svix-id>.<svix-timestamp>.<body>" keyed
    with the base64 part of the ``whsec_`` secret. Deliveries whose timestamp is
    more than WEBHOOK_TOLERANCE_SECONDS away from now are refused, so a captured
    request cannot be replayed later.
    """
    webhook_secret = current_app.config.get("CLERK_WEBHOOK_SECRET")
    if not webhook_secret:
        current_app.logger.error("CLERK_WEBHOOK_SECRET not configured")
        return False

    svix_id = headers.get("svix-id")
    svix_timestamp = headers.get("svix-timestamp")
    svix_signature = headers.get("svix-signature")

    if not all([svix_id, svix_timestamp, svix_signature]):
        current_app.logger.error("Missing svix headers")
        return False

    if not _timestamp_is_fresh(svix_timestamp):
        return False

    signed_content = f"{svix_id}.{svix_timestamp}.".encode("utf-8") + payload
    expected = hmac.new(_webhook_key(webhook_secret), signed_content, hashlib.sha256).digest()

    # Space separated list, e.g. "v1,<sig> v1,<sig>" during secret rotation
    for entry in svix_signature.split(" "):
        version, _, signature = entry.partition(",")
        if version != "v1" or not signature:
            continue
        try:
            candidate = base64.b64decode(signature, validate=True)
        except binascii.Error:
            continue
        if hmac.compare_digest(candidate, expected):
            return True

    current_app.logger.error("Invalid webhook signature")
    return False


def primary_email_address(data: dict) -> Optional[str]:
    addresses = data.get("email_addresses") or []
    primary_id = data.get("primary_email_address_id")

    for address in addresses:
        if address.get("id") == primary_id:
            return address.get("email_address")

    # Fall back to the first address when no primary is flagged
    if addresses:
        return addresses[0].get("email_address")

    return None


def display_name(data: dict) -> Optional[str]:
    parts = [data.get("first_name"), data.get("last_name")]
    name = " ".join(part for part in parts if part)
    return name or None


@bp.post("/clerk")
def clerk_webhook():
    """
    Handle Clerk webhook events.

    Documentation: https://clerk.com/docs/integrations/webhooks/overview
    """
    payload = request.get_data()

    if not verify_clerk_webhook(payload, request.headers):
        current_app.logger.warning("Clerk webhook signature verification failed")
        abort(401, description="Invalid signature")

    event = request.get_json(silent=True)
    if not isinstance(event, dict):
        current_app.logger.error("Failed to parse Clerk webhook payload")
        abort(400, description="Invalid JSON")

    event_type = event.get("type")
    current_app.logger.info(f"Received Clerk webhook: {event_type}")

    handlers = {
        "user.created": handle_user_created,
        "user.updated": handle_user_updated,
        "user.deleted": handle_user_deleted,
    }
    handler = handlers.get(event_type)
    if handler is None:
        return {"success": True, "message": f"Event {event_type} received but not handled"}, 200

    data = event.get("data") or {}
    if not data.get("id"):
        current_app.logger.error(f"Clerk {event_type} event without a user id")
        return {"success": False, "error": "Missing user id"}, 400

    return handler(data)


def _failed(event_type: str, error):
    current_app.logger.error(f"Clerk {event_type} webhook failed: {error!r}")
    return {"success": False, "error": "Internal Server Error"}, 500


def handle_user_created(data: dict):
    email = primary_email_address(data)
    if not email:
        current_app.logger.error(f"user.created for {data['id']} has no email address")
        return {"success": False, "error": "Missing email address"}, 400

    result = current_app.user_service.create_user(UserCreate(clerkId=data["id"], email=email, name=display_name(data)))

    if result.error:
        # Svix redelivers events, so a row that already exists means an earlier delivery won
        if result.error.kind == UserErrorKind.CONFLICT:
            current_app.logger.info(f"User {data['id']} already exists, ignoring duplicate user.created")
            return {"success": True, "message": "User already exists"}, 200
        return _failed("user.created", result.error)

    return {"success": True, "user": result.data.model_dump()}, 200


def handle_user_updated(data: dict):
    changes = {"name": display_name(data)}
    email = primary_email_address(data)
    if email:
        changes["email"] = email

    result = current_app.user_service.update_user(data["id"], UserUpdate(**changes))
    if result.error:
        return _failed("user.updated", result.error)

    return {"success": True, "user": result.data.model_dump()}, 200


def handle_user_deleted(data: dict):
    result = current_app.user_service.delete_user(data["id"])
    if result.error:
        return _failed("user.deleted", result.error)

    return {"success": True, "deleted": result.deleted_count}, 200
