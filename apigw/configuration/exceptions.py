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

"""Exceptions raised by the gateway configuration pipeline."""

from typing import TYPE_CHECKING, List, Optional

if TYPE_CHECKING:
    from .validator import ValidationMessage


class GatewayConfigError(Exception):
    """
    Base exception for all gateway configuration errors.

    Every exception raised by ``apigw.configuration`` inherits from this
    class, so callers can catch them with a single except clause.

    Example:
        try:
            creator.create().raise_for_errors()
        except GatewayConfigError as e:
            print(f"Configuration error: {e}")
    """
    pass


class ConfigurationError(GatewayConfigError):
    """
    Raised when raw configuration cannot be loaded.

    This covers unreadable or malformed YAML files, values that do not fit
    the raw configuration shape, and references to undefined environment
    variables.

    Example:
        try:
            load_config_file("gateway.yaml")
        except ConfigurationError as e:
            print(f"Configuration error: {e}")
    """
    pass


class ConfigurationValidationError(ConfigurationError):
    """
    Raised when a configuration build is rejected by validation.

    The error is total: it carries every violation found in the input,
    and no route of the failed build is usable.

    Attributes:
        errors: The validation messages, in the order they were found.
    """

    def __init__(
        self,
        errors: List["ValidationMessage"],
        message: Optional[str] = None,
    ):
        self.errors = list(errors)
        self.message = message or self._format_message(self.errors)
        super().__init__(self.message)

    @staticmethod
    def _format_message(errors: List["ValidationMessage"]) -> str:
        """Build the human-readable message, one line per violation."""
        lines = ["Unable to build gateway configuration, errors were:"]
        lines.extend(str(error) for error in errors)
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return f"ConfigurationValidationError(errors={self.errors!r})"


class RouteConstructionError(GatewayConfigError):
    """
    Raised when a route is assembled without one of its mandatory fields.

    Validation runs before assembly, so this signals a programming defect
    in a resolver or in the assembler, never a bad configuration file.

    Attributes:
        field_name: The mandatory field that was missing.
    """

    def __init__(self, field_name: str, message: Optional[str] = None):
        self.field_name = field_name
        super().__init__(message or f"Route is missing mandatory field '{field_name}'")

    def __repr__(self) -> str:
        return f"RouteConstructionError(field_name={self.field_name!r})"
