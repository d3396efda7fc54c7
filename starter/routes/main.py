from flask import Blueprint, current_app, jsonify

bp = Blueprint("main", __name__)


# Health check endpoint
@bp.route("/health")
def health():
    clerk_status = "not initialized"
    if getattr(current_app, "clerk_client", None) is not None:
        clerk_status = "initialized"

    supabase_status = "not initialized"
    if getattr(current_app, "supabase_client", None) is not None:
        supabase_status = "initialized"

    return (
        jsonify(
            {
                "status": "healthy",
                "message": "Flask backend is running",
                "supabase": supabase_status,
                "clerk_sdk": clerk_status,
                "version": current_app.config.get("APP_VERSION", "unknown"),
                "environment": current_app.config.get("FLASK_ENV", "unknown"),
            }
        ),
        200,
    )


# Basic route
@bp.route("/")
def index():
    return jsonify(
        {
            "message": "Flask backend API",
            "version": current_app.config.get("APP_VERSION", "unknown"),
        }
    )
