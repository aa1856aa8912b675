# Copyright 2025 Cisco Systems, Inc. and its affiliates
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""Logging for the configuration pipeline.

Every pipeline module logs under the ``apigw.configuration`` logger tree.
:func:`setup_logging` gives the root of that tree a stderr handler (and
optionally a file handler). A configuration build logs through a
:class:`BuildLogAdapter`, so each record carries the build's context, such
as the route count, the source and the outcome, as structured fields.

Example:
    setup_logging(level="INFO", format_type="json")
    logger = get_build_logger(route_count=2)
    logger.with_fields(outcome="ok").info("Gateway configuration built")
    # {"timestamp": "...", "level": "INFO", ..., "route_count": 2, "outcome": "ok"}
"""

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Tuple

from .config import load_env_config

LOGGER_NAME = "apigw.configuration"

VALID_LOG_LEVELS = {"DEBUG", "INFO", "WARNING", "ERROR"}
VALID_LOG_FORMATS = {"text", "json"}

DEFAULT_LOG_LEVEL = "WARNING"
DEFAULT_LOG_FORMAT = "text"

# LogRecord attribute holding a build's structured fields
FIELDS_ATTR = "build_fields"


def _record_fields(record: logging.LogRecord) -> Dict[str, Any]:
    return getattr(record, FIELDS_ATTR, None) or {}


class JSONFormatter(logging.Formatter):
    """One JSON object per record; build fields become top-level keys."""

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        entry.update(_record_fields(record))
        if record.exc_info:
            entry["exception"] = self.formatException(record.exc_info)
        return json.dumps(entry, default=str)


class TextFormatter(logging.Formatter):
    """``LEVEL logger: message [key=value ...]``"""

    def format(self, record: logging.LogRecord) -> str:
        line = f"{record.levelname} {record.name}: {record.getMessage()}"
        fields = _record_fields(record)
        if fields:
            line += " [" + " ".join(f"{k}={v}" for k, v in fields.items()) + "]"
        if record.exc_info:
            line += "\n" + self.formatException(record.exc_info)
        return line


_FORMATTERS = {"text": TextFormatter, "json": JSONFormatter}


def setup_logging(
    level: Optional[str] = None,
    format_type: Optional[str] = None,
    log_file: Optional[str] = None,
) -> logging.Logger:
    """
    Attach handlers to the pipeline logger.

    Arguments win over the ``APIGW_LOG_LEVEL``, ``APIGW_LOG_FORMAT`` and
    ``APIGW_LOG_FILE`` settings read by :func:`~apigw.configuration.config.load_env_config`.
    An unknown level or format is reported once at WARNING and replaced by
    the default. Calling again once handlers are attached changes nothing.

    Args:
        level: DEBUG, INFO, WARNING or ERROR (default WARNING).
        format_type: text or json (default text).
        log_file: Also write records to this file.

    Returns:
        The ``apigw.configuration`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    if logger.handlers:
        return logger

    env = load_env_config()
    rejected: List[Tuple[str, str, set, str]] = []

    level_name = (level or env["log_level"] or DEFAULT_LOG_LEVEL).upper()
    if level_name not in VALID_LOG_LEVELS:
        rejected.append(("level", level_name, VALID_LOG_LEVELS, DEFAULT_LOG_LEVEL))
        level_name = DEFAULT_LOG_LEVEL

    format_name = (format_type or env["log_format"] or DEFAULT_LOG_FORMAT).lower()
    if format_name not in VALID_LOG_FORMATS:
        rejected.append(("format", format_name, VALID_LOG_FORMATS, DEFAULT_LOG_FORMAT))
        format_name = DEFAULT_LOG_FORMAT

    formatter = _FORMATTERS[format_name]()
    handlers: List[logging.Handler] = [logging.StreamHandler()]
    file_path = log_file or env["log_file"]
    if file_path:
        handlers.append(logging.FileHandler(file_path, encoding="utf-8"))
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.setLevel(level_name)
    logger.propagate = False

    # Reported only now so the warning goes through the new handlers
    for kind, value, valid, fallback in rejected:
        logger.warning(
            "Unknown log %s '%s'. Valid values: %s. Using %s.",
            kind, value, ", ".join(sorted(valid)), fallback,
        )
    return logger


def get_logger() -> logging.Logger:
    """Return the pipeline logger, setting it up from the environment on first use."""
    logger = logging.getLogger(LOGGER_NAME)
    if not logger.handlers:
        setup_logging()
    return logger


class BuildLogAdapter(logging.LoggerAdapter):
    """Logger adapter that stamps a build's context onto every record.

    Fields given per call through ``extra={"build_fields": {...}}`` override
    the bound ones.
    """

    def process(self, msg: str, kwargs: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
        extra = dict(kwargs.get("extra") or {})
        extra[FIELDS_ATTR] = {**self.extra, **extra.get(FIELDS_ATTR, {})}
        kwargs["extra"] = extra
        return msg, kwargs

    def with_fields(self, **fields: Any) -> "BuildLogAdapter":
        """Return an adapter with ``fields`` added to the bound context."""
        return BuildLogAdapter(self.logger, {**self.extra, **fields})


def get_build_logger(**context: Any) -> BuildLogAdapter:
    """Return an adapter over the pipeline logger bound to ``context``."""
    return BuildLogAdapter(get_logger(), context)


def cleanup_logging() -> None:
    """Close and detach every handler set up by :func:`setup_logging`.

    The pipeline logger goes back to propagating to the root logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
