"""
Authentication module for the Project Thunder API.

Public API:
    ThunderConfig: Client configuration
    CredentialStore: Token persistence (secret + settings stores)
    JSONFileStore: File-backed key-value store
    AuthService: Register, login, two-factor login, password reset,
                 email confirmation, token refresh and logout

Exceptions:
    ThunderAuthError: Base exception
    ConfigurationError: Configuration error
    TokenStorageError: Storage operation failed
"""

from .config import ThunderConfig
from .exceptions import ConfigurationError, ThunderAuthError, TokenStorageError
from .models import AuthData, AuthResponse, UserInfo
from .service import AuthService
from .token_storage import CredentialStore, JSONFileStore

__all__ = [
    # Configuration
    "ThunderConfig",
    # Token Storage
    "CredentialStore",
    "JSONFileStore",
    # Service
    "AuthService",
    # Models
    "AuthData",
    "AuthResponse",
    "UserInfo",
    # Exceptions
    "ThunderAuthError",
    "ConfigurationError",
    "TokenStorageError",
]
