"""
Request and response models for the authentication API.

Field names are snake_case in Python and camelCase on the wire.
"""

from typing import Optional, Union

from pydantic import Field

from src.network.response import APIResponse, CamelModel


class UserInfo(CamelModel):
    """Profile of the signed-in user."""

    email: str
    display_name: Optional[str] = None
    phone_number: Optional[str] = None
    profile_picture_url: Optional[str] = None
    company: Optional[str] = None


class AuthData(CamelModel):
    """
    Payload of authentication responses.

    Attributes:
        access_token: Short-lived token authorizing API calls
        refresh_token: Long-lived token used to obtain new access tokens
        expires_in: Access token lifetime in seconds, if the server sends it
        user: Signed-in user's profile
    """

    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    expires_in: Optional[int] = Field(default=None, gt=0)
    user: Optional[UserInfo] = None


AuthResponse = APIResponse[AuthData]


class RegisterRequest(CamelModel):
    display_name: str
    email: str
    password: str
    phone_number: str


class LoginRequest(CamelModel):
    email: str
    password: str


class TwoFactorLoginRequest(CamelModel):
    email: str
    password: str
    two_factor_code: str


class ForgotPasswordRequest(CamelModel):
    email: str


class ResetPasswordRequest(CamelModel):
    user_id: str
    token: str
    new_password: str
    confirm_password: str


class ConfirmEmailRequest(CamelModel):
    user_id: str
    token: str


class RefreshTokenRequest(CamelModel):
    refresh_token: str


AuthRequest = Union[
    RegisterRequest,
    LoginRequest,
    TwoFactorLoginRequest,
    ForgotPasswordRequest,
    ResetPasswordRequest,
    ConfirmEmailRequest,
    RefreshTokenRequest,
]
