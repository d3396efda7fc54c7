import pytest

from starter.auth.session import _get_authorized_parties, authenticate_request
from starter.exceptions import AuthenticationError
from tests.conftest import make_request_state


def test_authorized_parties_from_config(app):
    app.config["AUTH_AUTHORIZED_PARTIES"] = ["https://app.example.com/", "", None]

    assert _get_authorized_parties() == ["https://app.example.com"]


def test_authorized_parties_fall_back_to_domains(app):
    app.config["AUTH_AUTHORIZED_PARTIES"] = []
    app.config["FRONTEND_DOMAIN"] = "https://app.example.com"
    app.config["BACKEND_DOMAIN"] = "https://api.example.com/"

    assert _get_authorized_parties() == ["https://app.example.com", "https://api.example.com"]


def test_authenticate_request_passes_authorized_parties(app, mocker):
    app.config["AUTH_AUTHORIZED_PARTIES"] = ["https://app.example.com"]
    app.clerk_client = mocker.Mock()
    app.clerk_client.authenticate_request.return_value = make_request_state(mocker)

    with app.test_request_context("/api/protected", headers={"Authorization": "Bearer token"}):
        state = authenticate_request()

    assert state.payload["sub"] == "user_test_123"
    options = app.clerk_client.authenticate_request.call_args.args[1]
    assert options.authorized_parties == ["https://app.example.com"]


def test_signed_out_state_raises(app, mocker):
    app.clerk_client = mocker.Mock()
    app.clerk_client.authenticate_request.return_value = mocker.Mock(is_signed_in=False, message="expired")

    with app.test_request_context("/api/protected", headers={"Authorization": "Bearer token"}):
        with pytest.raises(AuthenticationError) as exc_info:
            authenticate_request()

    assert exc_info.value.status_code == 401
