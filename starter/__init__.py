import os

import sentry_sdk
from clerk_backend_api import Clerk
from dotenv import load_dotenv
from flask import Flask
from sentry_sdk.integrations.flask import FlaskIntegration

from .constants import ENV_DEVELOPMENT, ENV_PRODUCTION, ENV_STAGING, ENV_TESTING

# Import extensions from the extensions module
from .extensions import cors
from .supabase.client import create_supabase_client, validate_supabase_config


def create_app(config_class=None, supabase_client=None):
    """
    Application factory function to create and configure the Flask app.

    ``supabase_client`` lets callers hand in an already-built client; otherwise
    one is created from SUPABASE_URL / SUPABASE_KEY and shared by all requests.
    """
    app = Flask(__name__)

    # Load environment variables early
    load_dotenv()

    # --- Configuration ---
    if config_class is None:
        # Determine configuration based on FLASK_ENV environment variable
        env = os.getenv("FLASK_ENV", ENV_DEVELOPMENT)
        if env == ENV_PRODUCTION:
            from .config import ProductionConfig

            config_class = ProductionConfig
        elif env == ENV_STAGING:
            from .config import StagingConfig

            config_class = StagingConfig
        elif env == ENV_TESTING:
            from .config import TestingConfig

            config_class = TestingConfig
        else:  # Default to development
            from .config import DevelopmentConfig

            config_class = DevelopmentConfig

    app.config.from_object(config_class)

    # Missing database settings are fatal: raise before anything else is wired up
    validate_supabase_config(app.config)

    # --- Sentry Initialization ---
    sentry_dsn = app.config.get("SENTRY_DSN")
    if sentry_dsn:
        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[
                FlaskIntegration(),
            ],
            traces_sample_rate=app.config.get("SENTRY_TRACES_SAMPLE_RATE", 1.0),
            profiles_sample_rate=app.config.get("SENTRY_PROFILES_SAMPLE_RATE", 1.0),
            environment=app.config.get("FLASK_ENV"),
            release=app.config.get("APP_VERSION", None),
        )
        app.logger.info(f"Sentry initialized for environment: {app.config.get('FLASK_ENV')}")
    else:
        app.logger.info("SENTRY_DSN not found. Sentry will not be initialized.")

    # --- Clerk SDK Initialization ---
    clerk_secret_key = app.config.get("CLERK_SECRET_KEY")

    if not clerk_secret_key:
        app.logger.warning("CLERK_SECRET_KEY not found. Clerk authentication will be disabled.")
        app.clerk_client = None
    else:
        app.clerk_client = Clerk(bearer_auth=clerk_secret_key)
        app.logger.info("Clerk SDK initialized successfully.")

    # --- Supabase Client ---
    app.supabase_client = supabase_client if supabase_client is not None else create_supabase_client(app.config)

    from .services.user_service import UserService

    app.user_service = UserService(app.supabase_client)

    # --- CORS Configuration ---
    if app.config["FLASK_ENV"] == ENV_PRODUCTION or app.config["FLASK_ENV"] == ENV_STAGING:
        configured_origins = app.config.get("CORS_ORIGINS", [])
        configured_supports_credentials = app.config.get("CORS_SUPPORTS_CREDENTIALS", False)
        configured_allow_headers = app.config.get("CORS_ALLOW_HEADERS", ["Content-Type"])
        cors.init_app(
            app,
            resources={
                r"/*": {
                    "origins": configured_origins,
                    "supports_credentials": configured_supports_credentials,
                    "allow_headers": configured_allow_headers,
                }
            },
        )
    else:  # For development, use simpler CORS or specific dev settings
        cors.init_app(
            app,
            resources={
                r"/*": {
                    "origins": "*",  # Allow all for development
                    "supports_credentials": True,
                    "allow_headers": [
                        "Content-Type",
                        "Authorization",
                    ],  # Be explicit for dev
                }
            },
        )

    # --- Access Gate ---
    from .middleware.access_gate import init_access_gate

    init_access_gate(app)

    # --- Register Blueprints ---
    from .routes.api import bp as api_bp
    from .routes.main import bp as main_bp
    from .routes.webhooks import bp as webhooks_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(api_bp)
    app.register_blueprint(webhooks_bp)

    return app
