"""Configuration management for elkalert."""

import logging
import os
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from elkalert.errors import ConfigError

logger = logging.getLogger(__name__)


# Default paths
CONFIG_FILE = Path("test.yaml")
CONFIG_ENV_VAR = "ELKALERT_CONFIG"

# Webhook URLs this short are treated as placeholders
MIN_WEBHOOK_LENGTH = 4


class AlertConfig(BaseModel):
    """Alert configuration, loaded once per run."""

    model_config = ConfigDict(frozen=True)

    elk_host: str
    elk_username: str = ""
    elk_password: str = ""
    elk_index: str
    elk_threshold: int = Field(ge=0)
    elk_query: str
    whitelist: tuple[str, ...] = ()
    slack_webhook: Optional[str] = None
    slack_message_title: Optional[str] = None
    log_level: str = "INFO"
    request_timeout: float = Field(default=30.0, gt=0)

    @field_validator("whitelist", mode="before")
    @classmethod
    def _empty_whitelist(cls, value):
        # "whitelist:" with no entries loads as None
        return () if value is None else value

    @property
    def has_webhook(self) -> bool:
        return bool(self.slack_webhook) and len(self.slack_webhook) > MIN_WEBHOOK_LENGTH

    @property
    def title(self) -> Optional[str]:
        return self.slack_message_title or None


def default_config_path() -> Path:
    """Config path from the environment, or the default."""
    env_path = os.environ.get(CONFIG_ENV_VAR)
    return Path(env_path) if env_path else CONFIG_FILE


def load_config(path: Optional[Union[str, Path]] = None) -> AlertConfig:
    """Load configuration from a YAML file.

    Args:
        path: Config file path. Defaults to $ELKALERT_CONFIG or test.yaml

    Returns:
        AlertConfig object

    Raises:
        ConfigError: File missing, unreadable, not YAML or invalid
    """
    config_path = Path(path) if path is not None else default_config_path()

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = yaml.safe_load(f)
    except OSError as e:
        raise ConfigError(f"Error reading file: {config_path}. Error: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if config_data is None:
        config_data = {}
    if not isinstance(config_data, dict):
        raise ConfigError(f"Config {config_path} must be a mapping, got {type(config_data).__name__}")

    try:
        config = AlertConfig(**config_data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config {config_path}: {e}") from e

    logger.info(f"Config loaded from {config_path}")
    return config


def setup_logging(config: Optional[AlertConfig] = None) -> logging.Logger:
    """Configure logging.

    Args:
        config: Optional config object

    Returns:
        Logger instance
    """
    level_name = config.log_level if config is not None else "INFO"
    level = getattr(logging, level_name.upper(), logging.INFO)

    logging.basicConfig(
        level=level,
        format='%(asctime)s [%(levelname)s] %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S',
        handlers=[logging.StreamHandler()],
        force=True
    )

    return logging.getLogger('elkalert')
