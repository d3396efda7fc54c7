import pytest

from starter import create_app
from starter.config import TestingConfig
from starter.exceptions import ConfigurationError
from starter.services.user_service import UserService


class MissingSupabaseUrlConfig(TestingConfig):
    SUPABASE_URL = None


class MissingSupabaseKeyConfig(TestingConfig):
    SUPABASE_KEY = ""


@pytest.mark.parametrize("config_class", [MissingSupabaseUrlConfig, MissingSupabaseKeyConfig])
def test_missing_supabase_settings_are_fatal(config_class, mock_supabase):
    with pytest.raises(ConfigurationError):
        create_app(config_class, supabase_client=mock_supabase)


def test_supabase_client_built_once_and_shared(mocker):
    sentinel = object()
    create_client = mocker.patch("starter.create_supabase_client", return_value=sentinel)

    app = create_app(TestingConfig)

    create_client.assert_called_once()
    assert app.supabase_client is sentinel
    assert isinstance(app.user_service, UserService)
    assert app.user_service.client is sentinel


def test_create_supabase_client_uses_config(mocker):
    from starter.supabase.client import create_supabase_client

    create_client = mocker.patch("starter.supabase.client.create_client", return_value="client")

    client = create_supabase_client({"SUPABASE_URL": "https://project.supabase.co", "SUPABASE_KEY": "key"})

    assert client == "client"
    create_client.assert_called_once_with("https://project.supabase.co", "key")


def test_clerk_disabled_without_secret(mock_supabase):
    class NoClerkConfig(TestingConfig):
        CLERK_SECRET_KEY = None

    app = create_app(NoClerkConfig, supabase_client=mock_supabase)

    assert app.clerk_client is None


def test_protected_route_without_clerk_is_500_for_pages(mock_supabase):
    class NoClerkConfig(TestingConfig):
        CLERK_SECRET_KEY = None

    app = create_app(NoClerkConfig, supabase_client=mock_supabase)

    response = app.test_client().get("/dashboard")

    assert response.status_code == 500
