"""Process configuration for GitLab Connections.

Settings are read from environment variables (and a ``.env`` file, loaded
when the package is imported) according to ``ConfigSchema``.

Configuration is organized into focused groups:
- server: host, port, log level
- storage: where connection profiles and credentials are persisted
- client: GitLab API timeouts
- security: optional admin API key for the HTTP surface
"""

import hashlib
import secrets
from pathlib import Path

from glconn.core.config.schema import ConfigSchema
from glconn.core.config.validation import load_env_var


class Config:
    """Validated, read-only view over the environment configuration.

    All values are loaded at initialization time. Build one with
    ``Config.load()`` at bootstrap and hand it to whatever needs it.
    """

    def __init__(self) -> None:
        self._host: str = load_env_var(ConfigSchema.HOST)
        self._port: int = load_env_var(ConfigSchema.PORT)
        self._log_level: str = load_env_var(ConfigSchema.LOG_LEVEL)
        self._home: str = load_env_var(ConfigSchema.GLCONN_HOME)
        self._connections_file: str | None = load_env_var(ConfigSchema.GLCONN_CONNECTIONS_FILE)
        self._credentials_file: str | None = load_env_var(ConfigSchema.GLCONN_CREDENTIALS_FILE)
        self._request_timeout: float = load_env_var(ConfigSchema.REQUEST_TIMEOUT)
        self._connect_timeout: float = load_env_var(ConfigSchema.CONNECT_TIMEOUT)
        self._admin_api_key: str | None = load_env_var(ConfigSchema.ADMIN_API_KEY)

    @classmethod
    def load(cls) -> "Config":
        """Load configuration from the current environment."""
        return cls()

    # Server settings
    @property
    def host(self) -> str:
        return self._host

    @property
    def port(self) -> int:
        return self._port

    @property
    def log_level(self) -> str:
        return self._log_level

    # Storage settings
    @property
    def home_dir(self) -> Path:
        return Path(self._home).expanduser()

    @property
    def connections_file(self) -> Path:
        if self._connections_file:
            return Path(self._connections_file).expanduser()
        return self.home_dir / "connections.json"

    @property
    def credentials_file(self) -> Path:
        if self._credentials_file:
            return Path(self._credentials_file).expanduser()
        return self.home_dir / "credentials.json"

    # Client settings
    @property
    def request_timeout(self) -> float:
        return self._request_timeout

    @property
    def connect_timeout(self) -> float:
        return self._connect_timeout

    # Security settings
    @property
    def admin_api_key(self) -> str | None:
        return self._admin_api_key

    def validate_admin_api_key(self, client_api_key: str | None) -> bool:
        """Check a client-supplied key against ``ADMIN_API_KEY``.

        Access is open when no admin key is configured.
        """
        if not self._admin_api_key:
            return True
        if not client_api_key:
            return False
        return secrets.compare_digest(client_api_key, self._admin_api_key)

    @property
    def admin_api_key_hash(self) -> str:
        return (
            "<not-set>"
            if not self._admin_api_key
            else "sha256:" + hashlib.sha256(self._admin_api_key.encode()).hexdigest()[:16] + "..."
        )
