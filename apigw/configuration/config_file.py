"""YAML configuration file loader for the gateway.

Loads a route configuration file, performs ${ENV_VAR} substitution for
secret or environment-specific values and binds the result to
:class:`~apigw.configuration.file_models.FileConfiguration`.
"""

import logging
import os
import re
from typing import Any

import yaml
from pydantic import ValidationError as PydanticValidationError

from .exceptions import ConfigurationError
from .file_models import FileConfiguration

logger = logging.getLogger("apigw.configuration.config_file")

# Pattern to match ${VAR_NAME} placeholders
_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")

# Known top-level keys in a gateway configuration file
_KNOWN_TOP_KEYS = {"routes", "global_configuration"}


def _auto_load_dotenv() -> bool:
    """Load a .env file from the working directory if python-dotenv finds one.

    Returns:
        True if a .env file was loaded, False otherwise.
    """
    from dotenv import find_dotenv, load_dotenv

    dotenv_path = find_dotenv(usecwd=True)
    if not dotenv_path:
        logger.debug("No .env file found in current directory")
        return False
    load_dotenv(dotenv_path)
    logger.debug(f"Auto-loaded .env file: {dotenv_path}")
    return True


def read_config_file(path: str) -> dict:
    """Read a YAML file and return its mapping with env var substitution applied.

    Raises:
        ConfigurationError: If the file cannot be read or parsed, is not a
            mapping, or references an undefined environment variable.
    """
    try:
        with open(path, "r", encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except FileNotFoundError:
        raise ConfigurationError(f"Configuration file not found: {path}")
    except UnicodeDecodeError as e:
        raise ConfigurationError(f"Configuration file {path} is not valid UTF-8: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Unable to read configuration file {path}: {e}") from e
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in configuration file {path}: {e}")

    if raw is None:
        return {}

    if not isinstance(raw, dict):
        raise ConfigurationError(
            f"Configuration file {path} must contain a YAML mapping, "
            f"got {type(raw).__name__}"
        )

    # Warn about unknown top-level keys (helps catch typos)
    for key in raw:
        if key not in _KNOWN_TOP_KEYS:
            logger.warning(
                "Unknown top-level key '%s' in %s. "
                "Known keys: %s. Check for typos.",
                key, path, ", ".join(sorted(_KNOWN_TOP_KEYS)),
            )

    return _resolve_env_vars(raw)


def parse_file_configuration(raw: dict, source: str = "<dict>") -> FileConfiguration:
    """Bind a raw mapping to :class:`FileConfiguration`.

    Every structural problem is reported, one line each.

    Raises:
        ConfigurationError: If the mapping does not fit the configuration shape.
    """
    try:
        return FileConfiguration.model_validate(raw)
    except PydanticValidationError as e:
        lines = []
        for error in e.errors():
            location = ".".join(str(part) for part in error["loc"])
            lines.append(f"{location}: {error['msg']}")
        raise ConfigurationError(
            f"Invalid configuration in {source}:\n" + "\n".join(lines)
        ) from e


def load_config_file(path: str) -> FileConfiguration:
    """Load a gateway YAML file into a :class:`FileConfiguration`.

    Args:
        path: Path to the YAML configuration file.

    Raises:
        ConfigurationError: If the file cannot be read, parsed or bound, or
            contains references to undefined environment variables.
    """
    return parse_file_configuration(read_config_file(path), source=path)


class FileConfigurationSource:
    """A configuration source bound to a YAML file.

    Calling the source re-reads the file, so every configuration build
    (startup or reload) sees the file's current content.
    """

    def __init__(self, path: str, auto_dotenv: bool = True) -> None:
        self.path = path
        self.auto_dotenv = auto_dotenv

    @classmethod
    def from_env(cls) -> "FileConfigurationSource":
        """Create a source from APIGW_CONFIG_FILE / APIGW_AUTO_DOTENV."""
        from .config import load_env_config

        env = load_env_config()
        return cls(env["config_file"], auto_dotenv=env["auto_dotenv"])

    def __call__(self) -> FileConfiguration:
        if self.auto_dotenv:
            _auto_load_dotenv()
        return load_config_file(self.path)

    def __repr__(self) -> str:
        return f"FileConfigurationSource(path={self.path!r})"


def _resolve_env_vars(value: Any) -> Any:
    """Recursively replace ${VAR_NAME} placeholders with environment variable values.

    Raises:
        ConfigurationError: If a referenced environment variable is not set.
    """
    if isinstance(value, dict):
        return {k: _resolve_env_vars(v) for k, v in value.items()}
    elif isinstance(value, list):
        return [_resolve_env_vars(item) for item in value]
    elif isinstance(value, str):
        return _substitute_env_string(value)
    else:
        # int, float, bool, None -- pass through unchanged
        return value


def _substitute_env_string(s: str) -> str:
    """Replace ${VAR_NAME} patterns in a string with env var values.

    Raises:
        ConfigurationError: If a referenced environment variable is not set.
    """

    def _replace_match(match: re.Match) -> str:
        var_name = match.group(1)
        value = os.environ.get(var_name)
        if value is None:
            raise ConfigurationError(
                f"Environment variable ${{{var_name}}} referenced in "
                f"configuration but not set. Add it to your .env file "
                f"or set it in the environment."
            )
        return value

    return _ENV_VAR_PATTERN.sub(_replace_match, s)
