"""gitstage library settings.

Settings for the library itself (not the repository configuration read
through ``gitstage.repository``), loaded from ``GITSTAGE_*`` environment
variables and validated with Pydantic.

Example:
    >>> from gitstage.config import load_logging_config
    >>> config = load_logging_config({"GITSTAGE_LOGGING__LEVEL": "debug"})
    >>> config.level
    <LogLevel.DEBUG: 'debug'>
"""

from gitstage.config._loader import (
    DEBUG_ENV_VAR,
    ENV_PREFIX,
    load_logging_config,
    parse_env_vars,
)
from gitstage.config._models import LoggingConfig

__all__ = [
    "DEBUG_ENV_VAR",
    "ENV_PREFIX",
    "LoggingConfig",
    "load_logging_config",
    "parse_env_vars",
]
