import pytest
from pytest_mock import MockerFixture

from starter import create_app
from starter.config import TestingConfig
from starter.exceptions import AuthenticationError
from tests.supabase_mocks import create_mock_supabase_client, setup_standard_test_data

SIGNED_IN_USER_ID = "user_test_123"


def make_request_state(mocker: MockerFixture, user_id=SIGNED_IN_USER_ID):
    mock_request_state = mocker.Mock()
    mock_request_state.is_signed_in = True
    mock_request_state.payload = {
        "sub": user_id,
        "sid": "session_id_123",
        "iat": 1700000000,
        "exp": 1700003600,
        "iss": "https://clerk.example.com",
    }
    return mock_request_state


@pytest.fixture
def mock_supabase():
    """Mock Supabase client with standard test data."""
    return create_mock_supabase_client(setup_standard_test_data())


@pytest.fixture
def app(mock_supabase):
    app = create_app(TestingConfig, supabase_client=mock_supabase)

    with app.app_context():
        yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def signed_in(mocker: MockerFixture):
    # Patch where the gate looks it up so no Clerk client is needed
    return mocker.patch(
        "starter.middleware.access_gate.authenticate_request",
        return_value=make_request_state(mocker),
    )


@pytest.fixture
def signed_out(mocker: MockerFixture):
    return mocker.patch(
        "starter.middleware.access_gate.authenticate_request",
        side_effect=AuthenticationError("User is not signed in"),
    )


@pytest.fixture
def users_table(mock_supabase):
    return mock_supabase.table("users")
