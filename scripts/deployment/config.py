"""
Environment configuration for contract deployment
"""

import os
import sys
import logging
from dataclasses import dataclass
from typing import Optional
from dotenv import load_dotenv

from .errors import ConfigurationError

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def _int_env(name: str, default: Optional[int]) -> Optional[int]:
    """Read a positive integer; unset or empty falls back to default"""
    value = os.getenv(name, "").strip()
    if value == "":
        return default
    try:
        number = int(value)
    except ValueError:
        raise ConfigurationError(f"{name} must be an integer, got {value!r}")
    if number <= 0:
        raise ConfigurationError(f"{name} must be positive, got {number}")
    return number


@dataclass(frozen=True)
class DeploySettings:
    """Deployment settings loaded from the environment"""
    rpc_url: str = "http://localhost:8545"
    private_key: Optional[str] = None
    chain_id: int = 31337
    artifacts_dir: str = os.path.join("artifacts", "contracts")
    confirmation_timeout: int = 120
    gas_limit: Optional[int] = None
    slack_webhook: Optional[str] = None
    log_file: str = "deploy.log"

    @classmethod
    def from_env(cls, dotenv: bool = True) -> "DeploySettings":
        """
        Build settings from environment variables

        Args:
            dotenv: Load a .env file first (default: True)

        Returns:
            DeploySettings instance
        """
        if dotenv:
            load_dotenv()

        return cls(
            rpc_url=os.getenv("RPC_URL", cls.rpc_url),
            private_key=os.getenv("PRIVATE_KEY") or None,
            chain_id=_int_env("CHAIN_ID", cls.chain_id),
            artifacts_dir=os.getenv("ARTIFACTS_DIR", cls.artifacts_dir),
            confirmation_timeout=_int_env("CONFIRMATION_TIMEOUT", cls.confirmation_timeout),
            gas_limit=_int_env("GAS_LIMIT", None),
            slack_webhook=os.getenv("SLACK_WEBHOOK") or None,
            log_file=os.getenv("DEPLOY_LOG_FILE", cls.log_file),
        )


def setup_logging(log_file: str = "deploy.log", level: int = logging.INFO):
    """Configure root logging with a file and a console handler"""
    logging.basicConfig(
        level=level,
        format=LOG_FORMAT,
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler(sys.stderr)
        ]
    )
