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

"""Validation gate for raw gateway configuration.

:func:`validate` examines the whole configuration and collects every
violation before returning. A build may only resolve routes when the
returned :class:`ValidationResult` has no errors.
"""

import re
from dataclasses import dataclass, field
from typing import Collection, List, Optional

from .file_models import (
    FileConfiguration,
    FileGlobalConfiguration,
    FileRoute,
)
from .resolvers.upstream_pattern import PLACEHOLDER_PATTERN

VALID_HTTP_METHODS = {"GET", "POST", "PUT", "DELETE", "PATCH", "HEAD", "OPTIONS", "TRACE", "CONNECT"}

_PERIOD_PATTERN = re.compile(r"^\d+(\.\d+)?[smhd]$")
_SCHEMES = ("http://", "https://")


@dataclass(frozen=True)
class ValidationMessage:
    """One violation: where it is and what is wrong."""
    location: str
    message: str

    def __str__(self) -> str:
        return f"{self.location}: {self.message}"


@dataclass
class ValidationResult:
    """Outcome of validating a configuration."""
    errors: List[ValidationMessage] = field(default_factory=list)

    @property
    def is_error(self) -> bool:
        return bool(self.errors)

    def add(self, location: str, message: str) -> None:
        self.errors.append(ValidationMessage(location, message))


def _check_path_template(result: ValidationResult, location: str, template: str) -> None:
    """Check the syntax of a downstream or upstream path template."""
    if not template:
        result.add(location, "is required and must be a non-empty string.")
        return
    if not template.startswith("/"):
        result.add(location, f"Invalid template {template!r}. Must start with '/'.")
    if any(scheme in template for scheme in _SCHEMES):
        result.add(location, f"Invalid template {template!r}. Must not contain a scheme (http:// or https://).")

    # Anything left once well-formed placeholders are removed must be brace-free
    remainder = PLACEHOLDER_PATTERN.sub("", template)
    if "{" in remainder or "}" in remainder:
        result.add(location, f"Invalid template {template!r}. Placeholders must be written as {{name}}.")

    names = PLACEHOLDER_PATTERN.findall(template)
    if any(not name.strip() for name in names):
        result.add(location, f"Invalid template {template!r}. Placeholder names must not be empty.")
    elif any(re.search(r"\s", name) for name in names):
        result.add(location, f"Invalid template {template!r}. Placeholder names must not contain whitespace.")
    duplicates = sorted({name for name in names if name and names.count(name) > 1})
    for name in duplicates:
        result.add(location, f"Invalid template {template!r}. Placeholder {{{name}}} is used more than once.")


def _check_port(result: ValidationResult, location: str, port: Optional[int]) -> None:
    if port is not None and not 1 <= port <= 65535:
        result.add(location, f"Invalid port: {port}. Must be between 1 and 65535.")


def _check_non_negative(result: ValidationResult, location: str, value: Optional[float]) -> None:
    if value is not None and value < 0:
        result.add(location, f"Invalid value: {value}. Must be >= 0.")


def _resolved_rate_limit_flag(route: FileRoute, global_configuration: FileGlobalConfiguration) -> bool:
    flag = route.rate_limit_options.enable_rate_limiting
    if flag is None:
        flag = global_configuration.rate_limit_options.enable_rate_limiting
    return bool(flag)


def _validate_route(
    result: ValidationResult,
    index: int,
    route: FileRoute,
    global_configuration: FileGlobalConfiguration,
    authentication_provider_keys: Optional[Collection[str]],
) -> None:
    prefix = f"routes[{index}]"

    _check_path_template(result, f"{prefix}.downstream_path_template", route.downstream_path_template)
    _check_path_template(result, f"{prefix}.upstream_path_template", route.upstream_path_template)

    for i, method in enumerate(route.upstream_http_method):
        if method.upper() not in VALID_HTTP_METHODS:
            result.add(
                f"{prefix}.upstream_http_method[{i}]",
                f"Invalid HTTP method {method!r}. Must be one of: {', '.join(sorted(VALID_HTTP_METHODS))}.",
            )

    if route.use_service_discovery:
        if not route.service_name:
            result.add(f"{prefix}.service_name", "is required when use_service_discovery is true.")
    elif not route.downstream_host:
        result.add(f"{prefix}.downstream_host", "is required when use_service_discovery is false.")
    _check_port(result, f"{prefix}.downstream_port", route.downstream_port)

    provider_key = route.authentication_options.authentication_provider_key
    if (
        provider_key
        and authentication_provider_keys is not None
        and provider_key not in authentication_provider_keys
    ):
        result.add(
            f"{prefix}.authentication_options.authentication_provider_key",
            f"Authentication provider {provider_key!r} is not registered. "
            f"Registered providers: {', '.join(sorted(authentication_provider_keys)) or 'none'}.",
        )

    _check_non_negative(result, f"{prefix}.file_cache_options.ttl_seconds", route.file_cache_options.ttl_seconds)

    qos = route.qos_options
    _check_non_negative(
        result, f"{prefix}.qos_options.exceptions_allowed_before_breaking",
        qos.exceptions_allowed_before_breaking,
    )
    _check_non_negative(result, f"{prefix}.qos_options.duration_of_break", qos.duration_of_break)
    _check_non_negative(result, f"{prefix}.qos_options.timeout_value", qos.timeout_value)

    if _resolved_rate_limit_flag(route, global_configuration):
        rate = route.rate_limit_options
        global_rate = global_configuration.rate_limit_options
        period = rate.period or global_rate.period
        if period is not None and not _PERIOD_PATTERN.match(period):
            result.add(
                f"{prefix}.rate_limit_options.period",
                f"Invalid period {period!r}. Must be a number followed by s, m, h or d (e.g. '1s', '5m').",
            )
        limit = rate.limit if rate.limit is not None else global_rate.limit
        if limit is not None and limit <= 0:
            result.add(f"{prefix}.rate_limit_options.limit", f"Invalid limit: {limit}. Must be > 0.")
        _check_non_negative(result, f"{prefix}.rate_limit_options.period_timespan", rate.period_timespan)


def _methods_overlap(first: FileRoute, second: FileRoute) -> bool:
    """Whether two routes can answer the same request method.

    A route without methods answers every method.
    """
    first_methods = {m.upper() for m in first.upstream_http_method}
    second_methods = {m.upper() for m in second.upstream_http_method}
    if not first_methods or not second_methods:
        return True
    return bool(first_methods & second_methods)


def _validate_duplicates(result: ValidationResult, routes: List[FileRoute]) -> None:
    """Reject routes that share an upstream entry point.

    Such routes would also share a route key and therefore load-balancer
    and session state, whatever their downstream targets.
    """
    for i, route in enumerate(routes):
        for j in range(i):
            other = routes[j]
            if (
                route.upstream_path_template
                and route.upstream_path_template == other.upstream_path_template
                and _methods_overlap(route, other)
            ):
                result.add(
                    f"routes[{i}].upstream_path_template",
                    f"Route {route.upstream_path_template!r} duplicates the entry point of routes[{j}] "
                    f"(same upstream template and overlapping methods).",
                )
                break


def _validate_global(result: ValidationResult, global_configuration: FileGlobalConfiguration) -> None:
    prefix = "global_configuration"

    admin_path = global_configuration.administration_path
    if admin_path is not None and not admin_path.startswith("/"):
        result.add(f"{prefix}.administration_path", f"Invalid path {admin_path!r}. Must start with '/'.")

    _check_port(
        result, f"{prefix}.service_discovery_provider.port",
        global_configuration.service_discovery_provider.port,
    )

    rate = global_configuration.rate_limit_options
    if rate.http_status_code is not None and not 100 <= rate.http_status_code <= 599:
        result.add(
            f"{prefix}.rate_limit_options.http_status_code",
            f"Invalid status code: {rate.http_status_code}. Must be a valid HTTP status code (100-599).",
        )
    if rate.period is not None and not _PERIOD_PATTERN.match(rate.period):
        result.add(
            f"{prefix}.rate_limit_options.period",
            f"Invalid period {rate.period!r}. Must be a number followed by s, m, h or d (e.g. '1s', '5m').",
        )
    _check_non_negative(result, f"{prefix}.rate_limit_options.period_timespan", rate.period_timespan)

    qos = global_configuration.qos_options
    _check_non_negative(
        result, f"{prefix}.qos_options.exceptions_allowed_before_breaking",
        qos.exceptions_allowed_before_breaking,
    )
    _check_non_negative(result, f"{prefix}.qos_options.duration_of_break", qos.duration_of_break)
    _check_non_negative(result, f"{prefix}.qos_options.timeout_value", qos.timeout_value)


def validate(
    file_configuration: FileConfiguration,
    *,
    authentication_provider_keys: Optional[Collection[str]] = None,
) -> ValidationResult:
    """Validate a whole configuration, collecting every violation.

    Args:
        file_configuration: The raw configuration to check.
        authentication_provider_keys: Registered authentication providers.
            When given, routes may only reference these keys; when None,
            provider keys are not checked.

    Returns:
        A ValidationResult; ``is_error`` is True when any rule failed.
    """
    result = ValidationResult()
    global_configuration = file_configuration.global_configuration

    _validate_global(result, global_configuration)
    for index, route in enumerate(file_configuration.routes):
        _validate_route(result, index, route, global_configuration, authentication_provider_keys)
    _validate_duplicates(result, file_configuration.routes)

    return result
