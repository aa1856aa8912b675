"""Environment settings for the configuration pipeline."""

import os
from typing import Any, Dict, Optional

DEFAULT_CONFIG_FILE = "gateway.yaml"


def _parse_bool_env(value: Optional[str], default: bool) -> bool:
    """Parse boolean from environment variable string."""
    if value is None:
        return default
    return value.lower() in ("true", "1", "yes", "on")


def load_env_config() -> Dict[str, Any]:
    """
    Load pipeline settings from environment variables.

    Returns:
        Dictionary with loaded environment variable values (None for unset vars)

    Environment Variables:
        APIGW_CONFIG_FILE: Path of the YAML route configuration (default: gateway.yaml)
        APIGW_AUTO_DOTENV: Load a .env file before reading the configuration (true/false, default: true)
        APIGW_LOG_LEVEL: Log level (DEBUG/INFO/WARNING/ERROR)
        APIGW_LOG_FORMAT: Log format (text/json)
        APIGW_LOG_FILE: Optional log file path
    """
    return {
        "config_file": os.environ.get("APIGW_CONFIG_FILE") or DEFAULT_CONFIG_FILE,
        "auto_dotenv": _parse_bool_env(os.environ.get("APIGW_AUTO_DOTENV"), True),
        "log_level": os.environ.get("APIGW_LOG_LEVEL"),
        "log_format": os.environ.get("APIGW_LOG_FORMAT"),
        "log_file": os.environ.get("APIGW_LOG_FILE"),
    }
