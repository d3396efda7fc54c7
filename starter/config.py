import os

from dotenv import load_dotenv

from .constants import DEFAULT_PUBLIC_ROUTES, DEFAULT_SIGN_IN_URL

# Config attributes are read at import time, so .env has to be loaded first
load_dotenv()


class Config:
    """Base configuration."""

    FLASK_ENV = os.getenv("FLASK_ENV", "development")
    SENTRY_DSN = os.getenv("SENTRY_DSN")
    SENTRY_TRACES_SAMPLE_RATE = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "1.0"))
    SENTRY_PROFILES_SAMPLE_RATE = float(os.getenv("SENTRY_PROFILES_SAMPLE_RATE", "1.0"))
    APP_VERSION = os.getenv("HEROKU_SLUG_COMMIT", "local")
    FRONTEND_DOMAIN = os.getenv("FRONTEND_DOMAIN", "http://localhost:3000")
    BACKEND_DOMAIN = os.getenv("BACKEND_DOMAIN", "http://localhost:5000")
    AUTH_AUTHORIZED_PARTIES = [
        os.getenv("FRONTEND_DOMAIN", "http://localhost:3000"),
        os.getenv("BACKEND_DOMAIN", "http://localhost:5000"),
    ]

    # Clerk Configuration
    CLERK_SECRET_KEY = os.getenv("CLERK_SECRET_KEY")
    CLERK_WEBHOOK_SECRET = os.getenv("CLERK_WEBHOOK_SECRET")

    # Supabase Configuration (both required)
    SUPABASE_URL = os.getenv("SUPABASE_URL")
    SUPABASE_KEY = os.getenv("SUPABASE_KEY")

    # Access Gate
    PUBLIC_ROUTES = [route for route in os.getenv("PUBLIC_ROUTES", "").split(",") if route] or DEFAULT_PUBLIC_ROUTES
    SIGN_IN_URL = os.getenv("SIGN_IN_URL", DEFAULT_SIGN_IN_URL)


class DevelopmentConfig(Config):
    """Development configuration."""

    DEBUG = True


class TestingConfig(Config):
    """Testing configuration."""

    TESTING = True
    DEBUG = True
    FLASK_ENV = "testing"
    SENTRY_DSN = None
    CLERK_WEBHOOK_SECRET = os.getenv("CLERK_WEBHOOK_SECRET", "whsec_dGVzdC13ZWJob29rLXNlY3JldA==")
    SUPABASE_URL = os.getenv("SUPABASE_URL", "http://localhost:54321")
    SUPABASE_KEY = os.getenv("SUPABASE_KEY", "test-supabase-key")


class StagingConfig(Config):
    """Staging configuration."""

    DEBUG = True
    SENTRY_TRACES_SAMPLE_RATE = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.5"))
    SENTRY_PROFILES_SAMPLE_RATE = float(os.getenv("SENTRY_PROFILES_SAMPLE_RATE", "0.25"))
    CORS_ORIGINS = os.getenv(
        "CORS_ORIGINS",
        "",
    ).split(",")
    CORS_SUPPORTS_CREDENTIALS = True
    CORS_ALLOW_HEADERS = ["Content-Type", "Authorization"]


class ProductionConfig(Config):
    """Production configuration."""

    DEBUG = False
    SENTRY_TRACES_SAMPLE_RATE = float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.1"))  # Lower sample rate for prod
    SENTRY_PROFILES_SAMPLE_RATE = float(os.getenv("SENTRY_PROFILES_SAMPLE_RATE", "0.05"))
    CORS_ORIGINS = os.getenv(
        "CORS_ORIGINS",
        "",
    ).split(",")
    CORS_SUPPORTS_CREDENTIALS = True
    CORS_ALLOW_HEADERS = ["Content-Type", "Authorization"]
