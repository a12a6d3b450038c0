# src/fipcontroller/core/config.py

import logging
import os

from dotenv import load_dotenv

from .exceptions import ConfigError

# Load environment variables from a .env file located in the project root
dotenv_path = os.path.join(os.path.dirname(__file__), "..", "..", "..", ".env")
load_dotenv(dotenv_path=dotenv_path)

SECRETS_DIR = "/etc/fipcontroller/secrets"


class Config:
    """
    Handles the controller's configuration by loading values from environment variables.

    An instance is built once at startup and handed to the components that
    need it; nothing in the package reads the environment on its own.
    """

    def __init__(self):
        # --- Hetzner Cloud variables ---
        self.HCLOUD_TOKEN = self._get_secret("HCLOUD_TOKEN")
        self.HCLOUD_API_URL = os.getenv("HCLOUD_API_URL", "https://api.hetzner.cloud/v1").rstrip("/")
        self.HCLOUD_TIMEOUT = os.getenv("HCLOUD_TIMEOUT")
        self.FLOATING_IP_PAGE_SIZE = os.getenv("FLOATING_IP_PAGE_SIZE", "50")

        # --- Kubernetes variables ---
        self.PROVIDER_ID_SCHEME = os.getenv("PROVIDER_ID_SCHEME", "hcloud")

        # --- Logging variables ---
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

    @staticmethod
    def _get_secret(key: str, default: str = None) -> str:
        """
        Retrieves a secret from a file (Kubernetes secret volume) or falls back to environment variable.

        Raises:
            PermissionError: If the secret file exists but cannot be read due to permissions.
            IOError: If the secret file exists but cannot be read due to I/O errors.
        """
        secret_file = f"{SECRETS_DIR}/{key}"
        if os.path.exists(secret_file):
            try:
                with open(secret_file, "r") as f:
                    value = f.read().strip()
                    logging.getLogger(__name__).debug(f"Loaded secret '{key}' from {secret_file}")
                    return value
            except PermissionError as e:
                raise PermissionError(
                    f"Secret file '{secret_file}' exists but cannot be read due to permission denied. "
                    f"Please check file permissions or run with appropriate privileges."
                ) from e
            except (IOError, OSError) as e:
                raise IOError(
                    f"Secret file '{secret_file}' exists but cannot be read: {e}. "
                    f"Please check the file integrity and system resources."
                ) from e
        return os.getenv(key, default)

    @property
    def timeout(self) -> float | None:
        """Timeout in seconds for Hetzner Cloud calls, or None to wait indefinitely."""
        if not self.HCLOUD_TIMEOUT:
            return None
        return float(self.HCLOUD_TIMEOUT)

    @property
    def page_size(self) -> int:
        return int(self.FLOATING_IP_PAGE_SIZE)

    def validate_instance(self):
        if not self.HCLOUD_TOKEN:
            raise ConfigError("Missing environment variable HCLOUD_TOKEN")
        if not self.HCLOUD_API_URL.startswith(("http://", "https://")):
            raise ConfigError("HCLOUD_API_URL must be an http(s) URL")
        try:
            timeout = self.timeout
        except ValueError as e:
            raise ConfigError("HCLOUD_TIMEOUT must be a number of seconds") from e
        if timeout is not None and timeout <= 0:
            raise ConfigError("HCLOUD_TIMEOUT must be positive")
        try:
            page_size = self.page_size
        except ValueError as e:
            raise ConfigError("FLOATING_IP_PAGE_SIZE must be an integer") from e
        if not 1 <= page_size <= 50:
            raise ConfigError("FLOATING_IP_PAGE_SIZE must be between 1 and 50")
        if not self.PROVIDER_ID_SCHEME:
            raise ConfigError("PROVIDER_ID_SCHEME must not be empty")
