"""
Authentication API endpoint definitions.

Each request model maps to exactly one path; every auth call is a POST whose
JSON body is the request's camelCase fields.
"""

from typing import Dict, Type

from pydantic import BaseModel

from src.network.endpoint import DEFAULT_BASE_URL, Endpoint, HTTPMethod

from .models import (
    AuthRequest,
    ConfirmEmailRequest,
    ForgotPasswordRequest,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    ResetPasswordRequest,
    TwoFactorLoginRequest,
)

AUTH_REGISTER = "/api/auth/register"
AUTH_LOGIN = "/api/auth/login"
AUTH_TWO_FACTOR_LOGIN = "/api/auth/two-factor-login"
AUTH_FORGOT_PASSWORD = "/api/auth/forgot-password"
AUTH_RESET_PASSWORD = "/api/auth/reset-password"
AUTH_CONFIRM_EMAIL = "/api/auth/confirm-email"
AUTH_REFRESH_TOKEN = "/api/auth/refresh-token"

AUTH_ROUTES: Dict[Type[BaseModel], str] = {
    RegisterRequest: AUTH_REGISTER,
    LoginRequest: AUTH_LOGIN,
    TwoFactorLoginRequest: AUTH_TWO_FACTOR_LOGIN,
    ForgotPasswordRequest: AUTH_FORGOT_PASSWORD,
    ResetPasswordRequest: AUTH_RESET_PASSWORD,
    ConfirmEmailRequest: AUTH_CONFIRM_EMAIL,
    RefreshTokenRequest: AUTH_REFRESH_TOKEN,
}


def auth_endpoint(request: AuthRequest, base_url: str = DEFAULT_BASE_URL) -> Endpoint:
    """
    Build the endpoint for an authentication request.

    Args:
        request: One of the auth request models
        base_url: API origin

    Returns:
        POST endpoint carrying the request as its JSON body

    Raises:
        KeyError: If the request type has no route
    """
    return Endpoint(
        path=AUTH_ROUTES[type(request)],
        method=HTTPMethod.POST,
        base_url=base_url,
        body=request.model_dump(by_alias=True),
    )
