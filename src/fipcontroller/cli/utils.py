import logging
from typing import Optional

import typer

from ..core.config import Config
from ..core.exceptions import ConfigError

logger = logging.getLogger(__name__)


def load_config(log_level: Optional[str] = None) -> Config:
    """
    Builds and validates the configuration, configuring logging on the way.

    Exits with status 1 when the configuration is unusable.
    """
    config = Config()
    if log_level:
        config.LOG_LEVEL = log_level
    logging.basicConfig(
        level=config.LOG_LEVEL.upper(),
        format="%(asctime)s - %(levelname)s - %(message)s",
    )
    try:
        config.validate_instance()
    except ConfigError as e:
        logger.error("Invalid configuration: %s", e)
        raise typer.Exit(code=1)
    return config
