from supabase import Client, create_client

from starter.exceptions import ConfigurationError

REQUIRED_SETTINGS = ("SUPABASE_URL", "SUPABASE_KEY")


def validate_supabase_config(config) -> None:
    """Raise ConfigurationError if any setting the remote store needs is missing."""
    missing = [key for key in REQUIRED_SETTINGS if not config.get(key)]
    if missing:
        raise ConfigurationError(f"Missing required configuration: {', '.join(missing)}")


def create_supabase_client(config) -> Client:
    """
    Build the single Supabase client shared by every request.

    The client holds no per-request state, so one instance is safe to use from
    concurrent request handlers.
    """
    validate_supabase_config(config)
    return create_client(config["SUPABASE_URL"], config["SUPABASE_KEY"])
