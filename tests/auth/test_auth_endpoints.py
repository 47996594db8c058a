"""Tests for authentication endpoint definitions."""

import json

import pytest

from src.auth.endpoints import AUTH_ROUTES, auth_endpoint
from src.auth.models import (
    AuthData,
    AuthResponse,
    ConfirmEmailRequest,
    ForgotPasswordRequest,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    ResetPasswordRequest,
    TwoFactorLoginRequest,
)
from src.network.endpoint import HTTPMethod


class TestAuthEndpoints:
    """Tests for auth_endpoint()."""

    @pytest.mark.parametrize(
        "request_model,path,body",
        [
            (
                RegisterRequest(
                    display_name="Jane Doe",
                    email="jane@example.com",
                    password="secret",
                    phone_number="+90 555 000 0000",
                ),
                "/api/auth/register",
                {
                    "displayName": "Jane Doe",
                    "email": "jane@example.com",
                    "password": "secret",
                    "phoneNumber": "+90 555 000 0000",
                },
            ),
            (
                LoginRequest(email="jane@example.com", password="secret"),
                "/api/auth/login",
                {"email": "jane@example.com", "password": "secret"},
            ),
            (
                TwoFactorLoginRequest(
                    email="jane@example.com", password="secret", two_factor_code="123456"
                ),
                "/api/auth/two-factor-login",
                {"email": "jane@example.com", "password": "secret", "twoFactorCode": "123456"},
            ),
            (
                ForgotPasswordRequest(email="jane@example.com"),
                "/api/auth/forgot-password",
                {"email": "jane@example.com"},
            ),
            (
                ResetPasswordRequest(
                    user_id="u1", token="t1", new_password="new", confirm_password="new"
                ),
                "/api/auth/reset-password",
                {"userId": "u1", "token": "t1", "newPassword": "new", "confirmPassword": "new"},
            ),
            (
                ConfirmEmailRequest(user_id="u1", token="t1"),
                "/api/auth/confirm-email",
                {"userId": "u1", "token": "t1"},
            ),
            (
                RefreshTokenRequest(refresh_token="r1"),
                "/api/auth/refresh-token",
                {"refreshToken": "r1"},
            ),
        ],
    )
    def test_request_maps_to_endpoint(self, request_model, path, body):
        """Each request maps to its path with a camelCase POST body."""
        endpoint = auth_endpoint(request_model, base_url="https://api.example.com")

        assert endpoint.path == path
        assert endpoint.method is HTTPMethod.POST
        assert endpoint.base_url == "https://api.example.com"
        assert dict(endpoint.body) == body

        prepared = endpoint.to_request()
        assert prepared.url == f"https://api.example.com{path}"
        assert json.loads(prepared.body) == body
        assert "Authorization" not in prepared.headers

    def test_every_route_is_unique(self):
        """No two request types share a path."""
        assert len(set(AUTH_ROUTES.values())) == len(AUTH_ROUTES)

    def test_unknown_request_type(self):
        """Requests without a route are rejected."""
        with pytest.raises(KeyError):
            auth_endpoint(AuthData())


class TestAuthModels:
    """Tests for auth response decoding."""

    def test_decode_full_response(self):
        """Auth responses decode camelCase payloads."""
        body = {
            "status": "Success",
            "message": "Welcome",
            "data": {
                "accessToken": "abc",
                "refreshToken": "r1",
                "expiresIn": 900,
                "user": {
                    "email": "jane@example.com",
                    "displayName": "Jane",
                    "phoneNumber": "555",
                    "profilePictureUrl": "https://cdn.example.com/jane.png",
                    "company": "Acme",
                },
            },
        }

        response = AuthResponse.model_validate_json(json.dumps(body))

        assert response.is_success
        assert response.data.access_token == "abc"
        assert response.data.refresh_token == "r1"
        assert response.data.expires_in == 900
        assert response.data.user.display_name == "Jane"
        assert response.data.user.profile_picture_url == "https://cdn.example.com/jane.png"

    def test_decode_minimal_response(self):
        """message and data are optional."""
        response = AuthResponse.model_validate_json('{"status": "TwoFactorRequired"}')

        assert response.requires_two_factor
        assert response.message is None
        assert response.data is None

    def test_user_requires_email(self):
        """A user without an email does not decode."""
        with pytest.raises(ValueError):
            AuthResponse.model_validate_json('{"status": "Success", "data": {"user": {}}}')
