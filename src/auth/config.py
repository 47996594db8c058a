"""
Client configuration for the Project Thunder API.

Configuration can be loaded from environment variables or provided
programmatically.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from src.network.endpoint import DEFAULT_BASE_URL

from .exceptions import ConfigurationError


@dataclass
class ThunderConfig:
    """
    Configuration for the Project Thunder API client.

    Attributes:
        base_url: API origin (e.g., http://localhost:5246)
        timeout: Request timeout in seconds (None uses the transport default)
        token_dir: Directory holding the secret and settings stores
        namespace: Prefix for every persisted key
        default_expires_in: Access token lifetime assumed when the server
                            does not send expiresIn
        expiry_margin_seconds: Treat access tokens as expired this long
                               before their actual expiry
    """

    base_url: str = DEFAULT_BASE_URL
    timeout: Optional[float] = None

    # Token storage
    token_dir: str = "~/.project_thunder"
    namespace: str = "com.projectthunder"

    # Token lifetime settings
    default_expires_in: int = 3600
    expiry_margin_seconds: int = 300  # 5 minutes

    def __post_init__(self) -> None:
        """Validate configuration after initialization."""
        parsed = urlparse(self.base_url or "")
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise ConfigurationError(
                f"base_url must be an absolute http(s) URL, got {self.base_url!r}"
            )

        if self.timeout is not None and self.timeout <= 0:
            raise ConfigurationError(f"timeout must be positive, got {self.timeout}")

        if not self.namespace:
            raise ConfigurationError("namespace cannot be empty")

        if self.default_expires_in <= 0:
            raise ConfigurationError("default_expires_in must be positive")

        if self.expiry_margin_seconds < 0:
            raise ConfigurationError("expiry_margin_seconds cannot be negative")

    @property
    def secrets_file(self) -> Path:
        """Path of the secret (token) store."""
        return Path(self.token_dir).expanduser() / "secrets.json"

    @property
    def settings_file(self) -> Path:
        """Path of the plain settings store."""
        return Path(self.token_dir).expanduser() / "settings.json"

    @classmethod
    def from_env(cls) -> "ThunderConfig":
        """
        Load configuration from environment variables.

        Optional environment variables:
            THUNDER_API_BASE_URL: API origin (default: http://localhost:5246)
            THUNDER_API_TIMEOUT: Request timeout in seconds (default: none)
            THUNDER_TOKEN_DIR: Token storage directory (default: ~/.project_thunder)
            THUNDER_TOKEN_NAMESPACE: Storage key prefix (default: com.projectthunder)

        Returns:
            ThunderConfig instance

        Raises:
            ConfigurationError: If a variable holds an invalid value
        """
        timeout_env = os.environ.get("THUNDER_API_TIMEOUT")
        timeout: Optional[float] = None
        if timeout_env:
            try:
                timeout = float(timeout_env)
            except ValueError as e:
                raise ConfigurationError(
                    f"THUNDER_API_TIMEOUT must be a number, got {timeout_env!r}"
                ) from e

        return cls(
            base_url=os.environ.get("THUNDER_API_BASE_URL", DEFAULT_BASE_URL),
            timeout=timeout,
            token_dir=os.environ.get("THUNDER_TOKEN_DIR", "~/.project_thunder"),
            namespace=os.environ.get("THUNDER_TOKEN_NAMESPACE", "com.projectthunder"),
        )
