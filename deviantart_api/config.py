"""
Configuration management for the browse client.

Settings come from environment variables, optionally seeded from a .env file.
Environment variables win over the .env file, which wins over the defaults.
"""

import os
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from .transport.auth import TOKEN_URL
from .transport.fetch import API_VERSION, BASE_API_URL, AuthenticatedFetch

logger = logging.getLogger(__name__)


@dataclass
class ClientConfig:
    """
    Everything needed to build an authenticated client.

    Attributes:
        client_id: OAuth2 application id
        client_secret: OAuth2 application secret
        api_base_url: Root of the versioned API
        token_url: Client-credentials token endpoint
        api_version: Value of the dA-minor-version header
        timeout: Total per-request timeout in seconds
        mature_content: Whether mature deviations are included
        max_token_resets: Token resets allowed per fetch before giving up
        retry_delay: First backoff delay in seconds (doubled per retry)
    """
    client_id: Optional[str] = None
    client_secret: Optional[str] = None
    api_base_url: str = BASE_API_URL
    token_url: str = TOKEN_URL
    api_version: str = API_VERSION
    timeout: int = 30
    mature_content: bool = False
    max_token_resets: int = AuthenticatedFetch.MAX_TOKEN_RESETS
    retry_delay: float = AuthenticatedFetch.INITIAL_RETRY_DELAY

    @property
    def has_credentials(self) -> bool:
        return bool(self.client_id and self.client_secret)

    def to_dict(self) -> Dict[str, Any]:
        """Serializable view with the secret masked."""
        return {
            "client_id": self.client_id,
            "client_secret": "***" if self.client_secret else None,
            "api_base_url": self.api_base_url,
            "token_url": self.token_url,
            "api_version": self.api_version,
            "timeout": self.timeout,
            "mature_content": self.mature_content,
            "max_token_resets": self.max_token_resets,
            "retry_delay": self.retry_delay,
        }


class ClientConfigLoader:
    """
    Load ClientConfig from the environment.

    Example:
        >>> config = ClientConfigLoader().load()
        >>> config.api_base_url
        'https://www.deviantart.com/api/v1/oauth2'
    """

    def __init__(self, env_file: Optional[str] = None):
        """
        Initialize config loader.

        Args:
            env_file: Path to .env file (default: .env in working directory)
        """
        env_path = Path(env_file) if env_file else Path.cwd() / ".env"
        if env_path.exists():
            load_dotenv(env_path)
            logger.info(f"Loaded configuration from {env_path}")

    def load(self) -> ClientConfig:
        """
        Build a ClientConfig from environment variables.

        Environment variables:
        - DA_CLIENT_ID / DA_CLIENT_SECRET: Application credentials
        - DA_API_BASE_URL: API root (default: the public v1 OAuth2 API)
        - DA_TOKEN_URL: Token endpoint
        - DA_API_VERSION: dA-minor-version header (default: 20210526)
        - DA_TIMEOUT: Request timeout seconds (default: 30)
        - DA_MATURE_CONTENT: Include mature content (default: false)
        - DA_MAX_TOKEN_RESETS: Token resets per fetch (default: 3)
        - DA_RETRY_DELAY: First backoff delay seconds (default: 1.0)
        """
        config = ClientConfig(
            client_id=os.getenv("DA_CLIENT_ID"),
            client_secret=os.getenv("DA_CLIENT_SECRET"),
            api_base_url=os.getenv("DA_API_BASE_URL", BASE_API_URL),
            token_url=os.getenv("DA_TOKEN_URL", TOKEN_URL),
            api_version=os.getenv("DA_API_VERSION", API_VERSION),
            timeout=int(os.getenv("DA_TIMEOUT", "30")),
            mature_content=os.getenv("DA_MATURE_CONTENT", "false").lower() == "true",
            max_token_resets=int(
                os.getenv("DA_MAX_TOKEN_RESETS", str(AuthenticatedFetch.MAX_TOKEN_RESETS))
            ),
            retry_delay=float(
                os.getenv("DA_RETRY_DELAY", str(AuthenticatedFetch.INITIAL_RETRY_DELAY))
            ),
        )

        if not config.client_id:
            logger.warning("DA_CLIENT_ID not set")
        if not config.client_secret:
            logger.warning("DA_CLIENT_SECRET not set")

        logger.info(
            f"Loaded ClientConfig: base_url={config.api_base_url}, "
            f"timeout={config.timeout}, mature_content={config.mature_content}"
        )
        return config
