"""
Authentication service for the Project Thunder API.

AuthService is the main interface applications use for authentication. It
exposes one method per use case (register, login, two-factor login, password
reset, email confirmation, token refresh, logout) and keeps the credential
store up to date: successful login, two-factor login and refresh responses
have their tokens persisted; logout clears them.
"""

import logging
from typing import Optional

from src.network.endpoint import Endpoint
from src.network.errors import APIError
from src.network.response import ResponseOutcome
from src.network.service import NetworkService
from src.network.transport import TransportClient

from .config import ThunderConfig
from .endpoints import auth_endpoint
from .models import (
    AuthRequest,
    AuthResponse,
    ConfirmEmailRequest,
    ForgotPasswordRequest,
    LoginRequest,
    RefreshTokenRequest,
    RegisterRequest,
    ResetPasswordRequest,
    TwoFactorLoginRequest,
)
from .token_storage import CredentialStore

logger = logging.getLogger(__name__)


class AuthService:
    """
    High-level authentication operations.

    Every method returns the decoded response envelope. Callers branch on
    ``response.outcome``: SUCCESS, TWO_FACTOR_REQUIRED (continue with
    ``two_factor_login``) or FAILED (the server answered with any other
    status). Transport and HTTP failures raise APIError.

    Example:
        auth = AuthService()
        response = auth.login("jane@example.com", "secret")
        if response.requires_two_factor:
            response = auth.two_factor_login("jane@example.com", "secret", "123456")
    """

    def __init__(
        self,
        config: Optional[ThunderConfig] = None,
        credential_store: Optional[CredentialStore] = None,
        transport: Optional[TransportClient] = None,
        network: Optional[NetworkService] = None,
    ):
        """
        Initialize auth service.

        Args:
            config: Client configuration (loads from environment if not provided)
            credential_store: Token store (created from config if not provided)
            transport: HTTP transport (created from config if not provided)
            network: Network service to send requests through. When omitted,
                     one is built on ``transport`` that refreshes expired
                     tokens through this service's credential store.
        """
        self.config = config or ThunderConfig.from_env()
        self.credential_store = credential_store or CredentialStore.from_config(self.config)
        self.network = network or NetworkService(
            transport=transport or TransportClient(timeout=self.config.timeout),
            refresher_factory=self._create_refresher,
        )
        # Refresh requests never trigger another refresh.
        if self.network.is_auth_service:
            self.auth_network = self.network
        else:
            self.auth_network = NetworkService(
                transport=self.network.transport, is_auth_service=True
            )

    def _create_refresher(self, auth_network: NetworkService) -> "AuthService":
        """Build the service that performs token refreshes for ``self.network``."""
        return AuthService(
            config=self.config,
            credential_store=self.credential_store,
            network=auth_network,
        )

    def register(
        self, display_name: str, email: str, password: str, phone_number: str
    ) -> AuthResponse:
        """Create a new account."""
        request = RegisterRequest(
            display_name=display_name,
            email=email,
            password=password,
            phone_number=phone_number,
        )
        return self._send(request)

    def login(self, email: str, password: str) -> AuthResponse:
        """
        Sign in with email and password.

        Tokens are persisted only when the server answers "Success". A
        "TwoFactorRequired" answer persists nothing; finish signing in with
        ``two_factor_login``.

        Args:
            email: Account email
            password: Account password

        Returns:
            Response envelope

        Raises:
            APIError: If the request fails
        """
        response = self._send(LoginRequest(email=email, password=password))
        self._save_tokens(response)
        return response

    def two_factor_login(self, email: str, password: str, two_factor_code: str) -> AuthResponse:
        """
        Complete a sign-in that requires a two-factor code.

        Raises:
            APIError: If the request fails
        """
        request = TwoFactorLoginRequest(
            email=email, password=password, two_factor_code=two_factor_code
        )
        response = self._send(request)
        self._save_tokens(response)
        return response

    def forgot_password(self, email: str) -> AuthResponse:
        """Ask the server to send a password reset email."""
        return self._send(ForgotPasswordRequest(email=email))

    def reset_password(
        self, user_id: str, token: str, new_password: str, confirm_password: str
    ) -> AuthResponse:
        """Set a new password using the token from a reset email."""
        request = ResetPasswordRequest(
            user_id=user_id,
            token=token,
            new_password=new_password,
            confirm_password=confirm_password,
        )
        return self._send(request)

    def confirm_email(self, user_id: str, token: str) -> AuthResponse:
        """Confirm an email address using the token from a confirmation email."""
        return self._send(ConfirmEmailRequest(user_id=user_id, token=token))

    def refresh_token(self) -> AuthResponse:
        """
        Exchange the stored refresh token for new tokens.

        The request goes through ``auth_network``, so a 401 from the refresh
        endpoint is returned as is.

        Returns:
            Response envelope; on "Success" the new tokens are persisted

        Raises:
            APIError: UNAUTHORIZED("Refresh token not found") if no refresh
                      token is stored (no request is sent), or the failure of
                      the refresh request
        """
        refresh_token = self.credential_store.get_refresh()
        if refresh_token is None:
            logger.warning("Cannot refresh: no refresh token stored")
            raise APIError.unauthorized("Refresh token not found")

        logger.info("Refreshing access token")
        request = RefreshTokenRequest(refresh_token=refresh_token)
        response = self._send(request, network=self.auth_network)
        self._save_tokens(response)
        return response

    def logout(self) -> None:
        """Forget all stored credentials. Does not contact the server."""
        self.credential_store.clear()
        logger.info("Logged out")

    def is_authenticated(self) -> bool:
        """True if a usable (not soon-to-expire) access token is stored."""
        return self.credential_store.is_access_valid()

    def authorized(self, endpoint: Endpoint) -> Endpoint:
        """
        Attach the stored access token to an endpoint.

        Args:
            endpoint: Endpoint to authorize

        Returns:
            Copy of the endpoint with an Authorization: Bearer header

        Raises:
            APIError: UNAUTHORIZED if no access token is stored
        """
        token = self.credential_store.get_access()
        if token is None:
            raise APIError.unauthorized("Access token not found")
        return endpoint.with_authorization(token)

    def _send(
        self, request: AuthRequest, network: Optional[NetworkService] = None
    ) -> AuthResponse:
        endpoint = auth_endpoint(request, base_url=self.config.base_url)
        response = (network or self.network).request(endpoint, AuthResponse)

        if response.outcome is ResponseOutcome.FAILED:
            logger.warning(
                f"{endpoint.path} answered with status {response.status!r}: {response.message}"
            )
        return response

    def _save_tokens(self, response: AuthResponse) -> None:
        """Persist tokens carried by a successful response."""
        if not response.is_success or response.data is None:
            return

        data = response.data
        if data.access_token:
            self.credential_store.save_access(
                data.access_token,
                expires_in=data.expires_in or self.config.default_expires_in,
            )
        if data.refresh_token:
            self.credential_store.save_refresh(data.refresh_token)
