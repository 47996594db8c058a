"""
Credential storage for Project Thunder authentication.

Access and refresh tokens live in a secret store (a JSON file readable only
by the current user); the access token's expiry timestamp lives in a plain
settings store. Both are simple key-value files under the configured token
directory, with every key prefixed by the configured namespace.
"""

import json
import logging
import os
import tempfile
import threading
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from .config import ThunderConfig
from .exceptions import TokenStorageError

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class JSONFileStore:
    """
    Key-value store persisted as a single JSON object.

    Writes replace the whole file atomically (write to a temporary file,
    then rename over the old one), so an overwritten key is never observed
    half-written. A lock serializes access from multiple threads.
    """

    def __init__(self, path: Union[str, Path], secure: bool = False):
        """
        Initialize file store.

        Args:
            path: Store file path
            secure: Restrict the file to user-only read/write (600)
        """
        self.path = Path(path).expanduser()
        self.secure = secure
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[Any]:
        """
        Read a value.

        Returns:
            Stored value, or None if the key (or the file) does not exist
        """
        with self._lock:
            return self._load().get(key)

    def set(self, key: str, value: Any) -> None:
        """
        Store a value, replacing any existing one.

        Raises:
            TokenStorageError: If the file cannot be written
        """
        with self._lock:
            data = self._load()
            data.pop(key, None)
            data[key] = value
            self._write(data)

    def delete(self, key: str) -> bool:
        """
        Remove a value.

        Returns:
            True if the key existed, False otherwise

        Raises:
            TokenStorageError: If the file cannot be written
        """
        with self._lock:
            data = self._load()
            if key not in data:
                return False
            del data[key]
            self._write(data)
            return True

    def _load(self) -> Dict[str, Any]:
        """
        Load the store contents.

        Returns:
            Stored mapping; empty if the file is missing or corrupted
        """
        if not self.path.exists():
            return {}

        try:
            with open(self.path, "r") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            logger.warning(f"Invalid store file at {self.path}, ignoring it: {e}")
            return {}
        except (IOError, OSError) as e:
            logger.warning(f"Could not read store file {self.path}: {e}")
            return {}

        if not isinstance(data, dict):
            logger.warning(f"Store file {self.path} does not hold an object, ignoring it")
            return {}
        return data

    def _write(self, data: Dict[str, Any]) -> None:
        """
        Atomically replace the store file.

        Raises:
            TokenStorageError: If the write fails
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, prefix=f".{self.path.name}.")
            try:
                with os.fdopen(fd, "w") as f:
                    json.dump(data, f, indent=2)
                os.replace(tmp_path, self.path)
            except BaseException:
                if os.path.exists(tmp_path):
                    os.unlink(tmp_path)
                raise
        except (IOError, OSError) as e:
            logger.error(f"Failed to write {self.path}: {e}")
            raise TokenStorageError(f"Failed to write {self.path}: {e}") from e

        self._set_permissions()

    def _set_permissions(self) -> None:
        """Secret stores are user-only (600); settings are world-readable (644)."""
        mode = 0o600 if self.secure else 0o644
        try:
            self.path.chmod(mode)
        except (OSError, PermissionError) as e:
            logger.warning(f"Could not set permissions on {self.path}: {e}")


class CredentialStore:
    """
    Persists access/refresh tokens and the access token's expiry.

    The access token and its expiry are written and cleared together. The
    store performs no network calls.

    Example:
        store = CredentialStore.from_config(ThunderConfig())
        store.save_access("token", expires_in=3600)
        if store.is_access_valid():
            token = store.get_access()
    """

    def __init__(
        self,
        secrets: JSONFileStore,
        settings: JSONFileStore,
        namespace: str = "com.projectthunder",
        expiry_margin_seconds: int = 300,
        clock: Clock = utc_now,
    ):
        """
        Initialize credential store.

        Args:
            secrets: Store for the tokens themselves
            settings: Store for the (non-secret) expiry timestamp
            namespace: Prefix for every key
            expiry_margin_seconds: Access tokens expiring within this many
                                   seconds are reported as invalid
            clock: Returns the current timezone-aware time
        """
        self.secrets = secrets
        self.settings = settings
        self.expiry_margin_seconds = expiry_margin_seconds
        self.clock = clock
        self.access_token_key = f"{namespace}.accessToken"
        self.refresh_token_key = f"{namespace}.refreshToken"
        self.expiration_key = f"{namespace}.tokenExpiration"
        self._lock = threading.RLock()

    @classmethod
    def from_config(cls, config: ThunderConfig, clock: Clock = utc_now) -> "CredentialStore":
        """Create a store backed by the files named in the configuration."""
        return cls(
            secrets=JSONFileStore(config.secrets_file, secure=True),
            settings=JSONFileStore(config.settings_file),
            namespace=config.namespace,
            expiry_margin_seconds=config.expiry_margin_seconds,
            clock=clock,
        )

    def save_access(self, token: str, expires_in: int = 3600) -> None:
        """
        Save an access token and record when it expires.

        Args:
            token: Access token
            expires_in: Token lifetime in seconds from now
        """
        expires_at = self.clock() + timedelta(seconds=expires_in)
        with self._lock:
            self.secrets.set(self.access_token_key, token)
            self.settings.set(self.expiration_key, expires_at.timestamp())
        logger.debug(f"Access token saved, expires at {expires_at.isoformat()}")

    def save_refresh(self, token: str) -> None:
        """Save a refresh token."""
        with self._lock:
            self.secrets.set(self.refresh_token_key, token)
        logger.debug("Refresh token saved")

    def get_access(self) -> Optional[str]:
        return self.secrets.get(self.access_token_key)

    def get_refresh(self) -> Optional[str]:
        return self.secrets.get(self.refresh_token_key)

    def get_expires_at(self) -> Optional[datetime]:
        """
        When the stored access token expires.

        Returns:
            Timezone-aware UTC datetime, or None if no expiry is recorded
        """
        value = self.settings.get(self.expiration_key)
        if value is None:
            return None
        try:
            return datetime.fromtimestamp(float(value), tz=timezone.utc)
        except (TypeError, ValueError, OverflowError) as e:
            logger.warning(f"Ignoring invalid token expiry {value!r}: {e}")
            return None

    def is_access_valid(self) -> bool:
        """
        Check whether the access token can still be used.

        Returns:
            True only if an access token is stored and it expires more than
            ``expiry_margin_seconds`` from now
        """
        with self._lock:
            if self.get_access() is None:
                return False
            expires_at = self.get_expires_at()

        if expires_at is None:
            return False
        return self.clock() + timedelta(seconds=self.expiry_margin_seconds) < expires_at

    def clear(self) -> None:
        """Delete both tokens and the expiry record."""
        with self._lock:
            self.secrets.delete(self.access_token_key)
            self.secrets.delete(self.refresh_token_key)
            self.settings.delete(self.expiration_key)
        logger.info("Stored credentials cleared")

    def get_token_status(self) -> dict:
        """
        Get current token status for diagnostics.

        Returns:
            Dictionary with token status information:
            - authorized: Whether an access token is stored
            - valid: Whether the access token is usable (outside the margin)
            - has_refresh_token: Whether a refresh token is stored
            - expires_at: When the access token expires (if authorized)
            - expires_in_seconds: Seconds until expiry (if authorized)
        """
        with self._lock:
            access = self.get_access()
            has_refresh = self.get_refresh() is not None
            expires_at = self.get_expires_at()

        if access is None:
            return {
                "authorized": False,
                "has_refresh_token": has_refresh,
                "message": "No access token stored",
            }

        status = {
            "authorized": True,
            "valid": self.is_access_valid(),
            "has_refresh_token": has_refresh,
        }
        if expires_at is not None:
            expires_in = (expires_at - self.clock()).total_seconds()
            status["expires_at"] = expires_at.isoformat()
            status["expires_in_seconds"] = max(0, expires_in)
        return status
