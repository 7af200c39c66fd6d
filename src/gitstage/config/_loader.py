"""Library settings loading from environment variables."""

import os
from collections.abc import Mapping
from typing import Final

from pydantic import ValidationError

from gitstage.config._models import LoggingConfig
from gitstage.enums import LogLevel
from gitstage.exceptions import ConfigValidationError

ENV_PREFIX: Final = "GITSTAGE_"
DEBUG_ENV_VAR: Final = "GITSTAGE_DEBUG"


def parse_env_vars(
    environ: Mapping[str, str] | None = None,
    prefix: str = ENV_PREFIX,
) -> dict[str, dict[str, str]]:
    """Parse prefixed environment variables into a nested settings dictionary.

    Args:
        environ: Environment mapping to read. Defaults to ``os.environ``.
        prefix: Environment variable prefix (default: "GITSTAGE_").

    Returns:
        Dictionary of raw string values keyed by section, then setting.

    Environment variable naming:
        - Add prefix (GITSTAGE_)
        - Convert to uppercase
        - Replace dots with double underscores
        - Example: logging.level -> GITSTAGE_LOGGING__LEVEL

    Variables without a section separator (such as GITSTAGE_DEBUG) are
    not settings and are skipped.
    """
    if environ is None:
        environ = os.environ

    result: dict[str, dict[str, str]] = {}
    for key, value in environ.items():
        if not key.startswith(prefix):
            continue

        config_key = key[len(prefix) :]
        section, sep, name = config_key.lower().partition("__")
        if not sep or not section or not name:
            continue

        result.setdefault(section, {})[name] = value.strip()

    return result


def load_logging_config(environ: Mapping[str, str] | None = None) -> LoggingConfig:
    """Load logging settings from the environment.

    GITSTAGE_DEBUG (any non-empty value) overrides the level to debug.

    Args:
        environ: Environment mapping to read. Defaults to ``os.environ``.

    Returns:
        Validated, frozen LoggingConfig.

    Raises:
        ConfigValidationError: If a logging setting has an invalid value.
    """
    if environ is None:
        environ = os.environ

    values: dict[str, str] = dict(parse_env_vars(environ).get("logging", {}))
    if "level" in values:
        values["level"] = values["level"].lower()
    if "format" in values:
        values["format"] = values["format"].lower()
    if environ.get(DEBUG_ENV_VAR, ""):
        values["level"] = LogLevel.DEBUG.value

    try:
        return LoggingConfig.model_validate(values)
    except ValidationError as e:
        error = e.errors()[0]
        key = "logging." + ".".join(str(part) for part in error.get("loc", ()))
        msg = f"Invalid value for {key}: {error.get('msg', 'validation error')}"
        raise ConfigValidationError(
            msg,
            key=key,
            value=error.get("input"),
            expected=str(error.get("msg", "")),
        ) from e
