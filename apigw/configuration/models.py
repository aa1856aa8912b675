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

"""Resolved, immutable runtime configuration.

Everything in this module is produced by the configuration pipeline and
consumed by request dispatch. Instances are frozen dataclasses whose
sequences are tuples and whose mappings are read-only views, so a
published :class:`RuntimeConfiguration` can be shared between request
handlers without locking.
"""

import re
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .exceptions import RouteConstructionError


@dataclass(frozen=True)
class UpstreamPathTemplate:
    """Compiled matcher for a route's upstream path template.

    Attributes:
        template: The template as written, e.g. ``/users/{id}``.
        regex: Source of the compiled regular expression.
        placeholders: Placeholder names in order of appearance.
        pattern: The compiled expression (not part of equality).
    """

    template: str
    regex: str
    placeholders: Tuple[str, ...] = ()
    pattern: re.Pattern = field(default=None, compare=False, repr=False)

    def __post_init__(self) -> None:
        if self.pattern is None:
            object.__setattr__(self, "pattern", re.compile(self.regex))

    def match(self, path: str) -> Optional[Mapping[str, str]]:
        """Match a request path, returning placeholder values or None."""
        m = self.pattern.match(path)
        if m is None:
            return None
        return MappingProxyType(dict(zip(self.placeholders, m.groups())))


@dataclass(frozen=True)
class AuthenticationOptions:
    """Which authentication provider protects a route and with which scopes."""
    authentication_provider_key: str
    allowed_scopes: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ClaimToThing:
    """Copy a claim value (or one delimited part of it) onto the request.

    Attributes:
        target_key: Header, claim or query parameter name to set.
        claim_key: Name of the claim to read.
        delimiter: Split the claim value on this string when non-empty.
        index: Which part to take after splitting.
    """
    target_key: str
    claim_key: str
    delimiter: str = ""
    index: int = 0


@dataclass(frozen=True)
class CacheOptions:
    ttl_seconds: int = 0
    region: str = ""


@dataclass(frozen=True)
class QoSOptions:
    """Circuit breaker settings, durations in milliseconds."""
    exceptions_allowed_before_breaking: int = 0
    duration_of_break: int = 0
    timeout_value: int = 0


@dataclass(frozen=True)
class RateLimitRule:
    """A quota: ``limit`` requests per ``period`` (e.g. ``"1s"``, ``"5m"``).

    ``period_timespan`` is the number of seconds a client must wait once
    the quota is exhausted.
    """
    period: str
    period_timespan: float
    limit: int


@dataclass(frozen=True)
class RateLimitOptions:
    enable_rate_limiting: bool
    client_id_header: str
    client_whitelist: Tuple[str, ...]
    disable_rate_limit_headers: bool
    quota_exceeded_message: Optional[str]
    rate_limit_counter_prefix: str
    rate_limit_rule: RateLimitRule
    http_status_code: int


@dataclass(frozen=True)
class HttpHandlerOptions:
    allow_auto_redirect: bool = False
    use_cookie_container: bool = False
    use_tracing: bool = False


@dataclass(frozen=True)
class ServiceProviderConfiguration:
    """Gateway-wide service discovery settings, shared by all routes."""
    type: Optional[str] = None
    host: Optional[str] = None
    port: int = 0


@dataclass(frozen=True)
class Route:
    """A fully resolved route.

    The first five fields are mandatory and have no defaults, so a route
    cannot be constructed without them. Every other field defaults to its
    disabled or empty value.

    Routes compare by value but are not hashable: the claims requirement
    is a read-only mapping.
    """

    __hash__ = None

    downstream_path_template: str
    upstream_path_template: str
    upstream_template_pattern: UpstreamPathTemplate
    upstream_http_method: Tuple[str, ...]
    route_key: str

    is_authenticated: bool = False
    authentication_options: Optional[AuthenticationOptions] = None
    claims_to_headers: Tuple[ClaimToThing, ...] = ()
    claims_to_claims: Tuple[ClaimToThing, ...] = ()
    claims_to_queries: Tuple[ClaimToThing, ...] = ()
    route_claims_requirement: Mapping[str, str] = field(default_factory=lambda: MappingProxyType({}))
    is_authorised: bool = False
    request_id_key: Optional[str] = None
    is_cached: bool = False
    cache_options: CacheOptions = CacheOptions()
    downstream_scheme: Optional[str] = None
    downstream_host: Optional[str] = None
    downstream_port: Optional[int] = None
    load_balancer: Optional[str] = None
    is_qos: bool = False
    qos_options: QoSOptions = QoSOptions()
    enable_rate_limiting: bool = False
    rate_limit_options: Optional[RateLimitOptions] = None
    http_handler_options: HttpHandlerOptions = HttpHandlerOptions()
    service_name: Optional[str] = None
    use_service_discovery: bool = False

    def __post_init__(self) -> None:
        for name in (
            "downstream_path_template",
            "upstream_path_template",
            "upstream_template_pattern",
            "upstream_http_method",
            "route_key",
        ):
            if getattr(self, name) is None:
                raise RouteConstructionError(name)
        # Freeze containers handed in by callers
        object.__setattr__(self, "upstream_http_method", tuple(self.upstream_http_method))
        if not isinstance(self.route_claims_requirement, MappingProxyType):
            object.__setattr__(
                self,
                "route_claims_requirement",
                MappingProxyType(dict(self.route_claims_requirement)),
            )


@dataclass(frozen=True)
class RuntimeConfiguration:
    """The published snapshot: ordered routes plus gateway-wide settings.

    Route order is the order of the input and decides matching precedence
    when upstream templates overlap.
    """

    __hash__ = None

    routes: Tuple[Route, ...]
    administration_path: Optional[str]
    service_provider_configuration: ServiceProviderConfiguration

    def __post_init__(self) -> None:
        object.__setattr__(self, "routes", tuple(self.routes))
