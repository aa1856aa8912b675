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

"""Raw, file-sourced gateway configuration.

These models mirror the YAML document one to one. They only check the
*shape* of the input (types and nesting); whether the values make sense
together is decided by :mod:`apigw.configuration.validator`.

All models are frozen: the pipeline never edits raw input, it only
reads it.
"""

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class FileModel(BaseModel):
    """Base for all raw configuration models."""

    model_config = ConfigDict(frozen=True, extra="ignore")


# --------------------
# Per-route option blocks
# --------------------

class FileAuthenticationOptions(FileModel):
    """Authentication block of a route."""
    authentication_provider_key: Optional[str] = None
    allowed_scopes: List[str] = Field(default_factory=list)


class FileCacheOptions(FileModel):
    """Response caching block of a route. A TTL of 0 disables caching."""
    ttl_seconds: int = 0
    region: Optional[str] = None


class FileQoSOptions(FileModel):
    """Circuit breaker settings. Durations are in milliseconds."""
    exceptions_allowed_before_breaking: Optional[int] = None
    duration_of_break: Optional[int] = None
    timeout_value: Optional[int] = None


class FileRateLimitOptions(FileModel):
    """Rate limiting block of a route.

    ``enable_rate_limiting`` left unset means "inherit the global default".
    """
    enable_rate_limiting: Optional[bool] = None
    client_whitelist: List[str] = Field(default_factory=list)
    client_id_header: Optional[str] = None
    period: Optional[str] = None
    period_timespan: Optional[float] = None
    limit: Optional[int] = None


class FileHttpHandlerOptions(FileModel):
    """Options for the HTTP client used to call the downstream service."""
    allow_auto_redirect: Optional[bool] = None
    use_cookie_container: Optional[bool] = None
    use_tracing: Optional[bool] = None


class FileRoute(FileModel):
    """One route entry: upstream entry point, downstream target and options."""

    downstream_path_template: str = ""
    upstream_path_template: str = ""
    upstream_http_method: List[str] = Field(default_factory=list)

    downstream_scheme: Optional[str] = None
    downstream_host: Optional[str] = None
    downstream_port: Optional[int] = None

    authentication_options: FileAuthenticationOptions = Field(
        default_factory=FileAuthenticationOptions
    )
    add_headers_to_request: Dict[str, str] = Field(default_factory=dict)
    add_claims_to_request: Dict[str, str] = Field(default_factory=dict)
    add_queries_to_request: Dict[str, str] = Field(default_factory=dict)
    route_claims_requirement: Dict[str, str] = Field(default_factory=dict)

    request_id_key: Optional[str] = None
    route_is_case_sensitive: bool = False

    file_cache_options: FileCacheOptions = Field(default_factory=FileCacheOptions)
    qos_options: FileQoSOptions = Field(default_factory=FileQoSOptions)
    rate_limit_options: FileRateLimitOptions = Field(default_factory=FileRateLimitOptions)
    http_handler_options: Optional[FileHttpHandlerOptions] = None

    load_balancer: Optional[str] = None
    service_name: Optional[str] = None
    use_service_discovery: bool = False


# --------------------
# Global block
# --------------------

class FileGlobalRateLimitOptions(FileModel):
    """Gateway-wide rate limiting defaults and response settings."""
    enable_rate_limiting: Optional[bool] = None
    client_id_header: Optional[str] = None
    quota_exceeded_message: Optional[str] = None
    rate_limit_counter_prefix: Optional[str] = None
    disable_rate_limit_headers: bool = False
    http_status_code: Optional[int] = None
    period: Optional[str] = None
    period_timespan: Optional[float] = None
    limit: Optional[int] = None


class FileServiceDiscoveryProvider(FileModel):
    """Where the gateway finds service discovery (e.g. a Consul agent)."""
    type: Optional[str] = None
    host: Optional[str] = None
    port: Optional[int] = None


class FileGlobalConfiguration(FileModel):
    """Gateway-wide defaults applied to every route that does not override them."""

    administration_path: Optional[str] = None
    request_id_key: Optional[str] = None
    load_balancer: Optional[str] = None
    rate_limit_options: FileGlobalRateLimitOptions = Field(
        default_factory=FileGlobalRateLimitOptions
    )
    qos_options: FileQoSOptions = Field(default_factory=FileQoSOptions)
    http_handler_options: Optional[FileHttpHandlerOptions] = None
    service_discovery_provider: FileServiceDiscoveryProvider = Field(
        default_factory=FileServiceDiscoveryProvider
    )


class FileConfiguration(FileModel):
    """The whole configuration document: global defaults plus ordered routes."""

    routes: List[FileRoute] = Field(default_factory=list)
    global_configuration: FileGlobalConfiguration = Field(
        default_factory=FileGlobalConfiguration
    )
