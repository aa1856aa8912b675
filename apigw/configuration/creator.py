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

"""Build runtime gateway configuration from raw file configuration.

:class:`ConfigurationCreator` is the entry point of the pipeline. A build
validates the whole input, resolves the gateway-wide service provider
settings once, resolves every route in input order and packages the
result into an immutable :class:`RuntimeConfiguration`.

A build either succeeds completely or fails completely: when validation
fails no route is resolved, and when resolving any route raises, the
routes already built are discarded with the local list that held them.
"""

from typing import Callable, Collection, List, Optional

from ._logging import get_build_logger
from .exceptions import ConfigurationError, ConfigurationValidationError
from .file_models import FileConfiguration, FileGlobalConfiguration
from .models import Route, RuntimeConfiguration, ServiceProviderConfiguration
from .resolvers import RouteResolvers, create_service_provider_configuration
from .route_builder import build_route
from .validator import ValidationMessage, ValidationResult, validate

ConfigurationSource = Callable[[], FileConfiguration]


class ConfigurationResult:
    """
    Outcome of a configuration build.

    Exactly one of ``configuration`` and ``errors`` is meaningful: a
    successful build has a configuration and no errors, a failed build has
    errors and no configuration.

    Attributes:
        configuration: The built snapshot, or None when the build failed.
        errors: Every validation message of a failed build.
    """
    __slots__ = ("configuration", "errors")

    def __init__(
        self,
        configuration: Optional[RuntimeConfiguration] = None,
        errors: Optional[List[ValidationMessage]] = None,
    ) -> None:
        self.configuration = configuration
        self.errors = list(errors or [])

    @classmethod
    def ok(cls, configuration: RuntimeConfiguration) -> "ConfigurationResult":
        return cls(configuration=configuration)

    @classmethod
    def failed(cls, errors: List[ValidationMessage]) -> "ConfigurationResult":
        return cls(errors=errors)

    @property
    def is_error(self) -> bool:
        return bool(self.errors) or self.configuration is None

    def raise_for_errors(self) -> RuntimeConfiguration:
        """Return the configuration, or raise if the build failed.

        Raises:
            ConfigurationValidationError: With every message of the failed build.
        """
        if self.is_error:
            raise ConfigurationValidationError(self.errors)
        return self.configuration

    def __repr__(self) -> str:
        if self.is_error:
            return f"ConfigurationResult(errors={self.errors!r})"
        return f"ConfigurationResult(routes={len(self.configuration.routes)})"


class ConfigurationCreator:
    """
    Creates :class:`RuntimeConfiguration` snapshots.

    The creator keeps no state between builds; all collaborators are given
    to the constructor, so one instance may serve concurrent builds of
    different inputs.

    Args:
        source: Callable returning the currently bound raw configuration,
            used by ``create()`` when no configuration is passed in (e.g. a
            :class:`~apigw.configuration.config_file.FileConfigurationSource`).
        resolvers: Option resolvers used for each route.
        validator: Validation function run before any route is resolved.
        service_provider_creator: Resolves the service discovery settings.
        authentication_provider_keys: Registered authentication providers,
            forwarded to the validator.

    Example:
        creator = ConfigurationCreator(FileConfigurationSource("gateway.yaml"))
        result = creator.create()
        if not result.is_error:
            holder.set(result.configuration)
    """

    def __init__(
        self,
        source: Optional[ConfigurationSource] = None,
        *,
        resolvers: Optional[RouteResolvers] = None,
        validator: Callable[..., ValidationResult] = validate,
        service_provider_creator: Callable[
            [FileGlobalConfiguration], ServiceProviderConfiguration
        ] = create_service_provider_configuration,
        authentication_provider_keys: Optional[Collection[str]] = None,
    ) -> None:
        self._source = source
        self._resolvers = resolvers or RouteResolvers()
        self._validator = validator
        self._service_provider_creator = service_provider_creator
        self._authentication_provider_keys = (
            frozenset(authentication_provider_keys)
            if authentication_provider_keys is not None else None
        )

    def create(self, file_configuration: Optional[FileConfiguration] = None) -> ConfigurationResult:
        """Build a runtime configuration.

        Args:
            file_configuration: Raw configuration to build from. When None,
                the bound source is read.

        Returns:
            A ConfigurationResult holding either the new snapshot or every
            validation message.

        Raises:
            ValueError: If no configuration is passed and no source is bound.
        """
        if file_configuration is None:
            if self._source is None:
                raise ValueError("No configuration given and no configuration source bound")
            try:
                file_configuration = self._source()
            except ConfigurationError as e:
                logger = get_build_logger(source=repr(self._source), outcome="failed")
                logger.error("Unable to load gateway configuration: %s", e)
                return ConfigurationResult.failed([ValidationMessage("source", str(e))])

        return self._set_up_configuration(file_configuration)

    def _set_up_configuration(self, file_configuration: FileConfiguration) -> ConfigurationResult:
        logger = get_build_logger(route_count=len(file_configuration.routes))
        logger.info("Building gateway configuration")

        validation = self._validator(
            file_configuration,
            authentication_provider_keys=self._authentication_provider_keys,
        )
        if validation.is_error:
            logger.with_fields(outcome="failed", error_count=len(validation.errors)).error(
                "Unable to build gateway configuration, %d error(s):\n%s",
                len(validation.errors),
                "\n".join(str(error) for error in validation.errors),
            )
            return ConfigurationResult.failed(validation.errors)

        global_configuration = file_configuration.global_configuration
        service_provider_configuration = self._service_provider_creator(global_configuration)

        routes: List[Route] = []
        for file_route in file_configuration.routes:
            route = build_route(file_route, global_configuration, self._resolvers)
            logger.with_fields(route_key=route.route_key).debug(
                "Resolved route %s -> %s", route.route_key, route.downstream_path_template
            )
            routes.append(route)

        configuration = RuntimeConfiguration(
            routes=tuple(routes),
            administration_path=global_configuration.administration_path,
            service_provider_configuration=service_provider_configuration,
        )
        logger.with_fields(outcome="ok").info(
            "Gateway configuration built with %d route(s)", len(configuration.routes)
        )
        return ConfigurationResult.ok(configuration)


def create_configuration(
    file_configuration: FileConfiguration,
    **kwargs,
) -> ConfigurationResult:
    """Build a configuration with a one-off :class:`ConfigurationCreator`.

    Keyword arguments are passed to the creator's constructor.
    """
    return ConfigurationCreator(**kwargs).create(file_configuration)
