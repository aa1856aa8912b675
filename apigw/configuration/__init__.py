"""
apigw.configuration - gateway route configuration pipeline

Turns a declarative route file (global defaults plus an ordered list of
routes) into an immutable, fully resolved RuntimeConfiguration for request
dispatch.

Usage (YAML file):
    from apigw.configuration import (
        ConfigurationCreator, ConfigurationHolder, FileConfigurationSource,
    )

    holder = ConfigurationHolder()
    creator = ConfigurationCreator(FileConfigurationSource("gateway.yaml"))
    holder.set(creator.create().raise_for_errors())

    # On a file change signal; a failed build keeps the current snapshot
    holder.apply(creator.create())

Usage (Programmatic):
    from apigw.configuration import FileConfiguration, create_configuration

    result = create_configuration(FileConfiguration.model_validate({
        "global_configuration": {"rate_limit_options": {"enable_rate_limiting": True}},
        "routes": [
            {
                "upstream_path_template": "/users/{id}",
                "upstream_http_method": ["GET"],
                "downstream_path_template": "/api/users/{id}",
                "downstream_host": "users",
            },
        ],
    }))
"""


from ._logging import setup_logging, get_build_logger, cleanup_logging
from .config_file import FileConfigurationSource, load_config_file
from .creator import ConfigurationCreator, ConfigurationResult, create_configuration
from .exceptions import (
    GatewayConfigError,
    ConfigurationError,
    ConfigurationValidationError,
    RouteConstructionError,
)
from .file_models import FileConfiguration, FileGlobalConfiguration, FileRoute
from .holder import ConfigurationHolder
from .models import (
    AuthenticationOptions,
    CacheOptions,
    ClaimToThing,
    HttpHandlerOptions,
    QoSOptions,
    RateLimitOptions,
    RateLimitRule,
    Route,
    RuntimeConfiguration,
    ServiceProviderConfiguration,
    UpstreamPathTemplate,
)
from .resolvers import RouteResolvers
from .route_builder import build_route
from .route_key import create_route_key
from .validator import ValidationMessage, ValidationResult, validate

__all__ = [
    # Pipeline
    "ConfigurationCreator",
    "ConfigurationResult",
    "ConfigurationHolder",
    "create_configuration",
    "build_route",
    "create_route_key",
    "validate",
    "RouteResolvers",
    "ValidationMessage",
    "ValidationResult",
    # Loading
    "FileConfigurationSource",
    "load_config_file",
    "FileConfiguration",
    "FileGlobalConfiguration",
    "FileRoute",
    # Resolved model
    "RuntimeConfiguration",
    "Route",
    "UpstreamPathTemplate",
    "AuthenticationOptions",
    "ClaimToThing",
    "CacheOptions",
    "QoSOptions",
    "RateLimitOptions",
    "RateLimitRule",
    "HttpHandlerOptions",
    "ServiceProviderConfiguration",
    # Logging
    "setup_logging",
    "get_build_logger",
    "cleanup_logging",
    # Exceptions
    "GatewayConfigError",
    "ConfigurationError",
    "ConfigurationValidationError",
    "RouteConstructionError",
]

__version__ = "0.1.0"
