"""
Exception classes for Project Thunder authentication.

API failures are reported as ``src.network.errors.APIError``; the classes
here cover local problems (configuration and token persistence).
"""


class ThunderAuthError(Exception):
    """Base exception for local authentication errors."""

    pass


class ConfigurationError(ThunderAuthError):
    """Client configuration error (missing or invalid configuration)."""

    pass


class TokenStorageError(ThunderAuthError):
    """Token storage operation failed (file I/O error)."""

    pass
