"""
Webhook endpoints for third-party integrations.
"""

from flask import Blueprint

bp = Blueprint("webhooks", __name__, url_prefix="/api/webhooks")

# Import webhook handlers to register routes
from starter.routes.webhooks import clerk  # noqa: E402, F401
