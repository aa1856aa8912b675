"""Option resolvers for the configuration pipeline.

Each resolver is a pure function from raw input (a route, and where the
option has a gateway-wide counterpart, the global block) to one resolved
option value. Values cascade: an explicit route value wins over the global
default, which wins over the built-in default.

:class:`RouteResolvers` bundles the resolvers so the orchestrator receives
them explicitly and tests can swap any one of them.
"""

from dataclasses import dataclass
from typing import Callable, Mapping, Optional, Tuple

from ..file_models import FileGlobalConfiguration, FileRoute
from ..models import (
    AuthenticationOptions,
    ClaimToThing,
    HttpHandlerOptions,
    QoSOptions,
    RateLimitOptions,
    UpstreamPathTemplate,
)
from .authentication import create_authentication_options
from .claims import create_claims_to_things, parse_claim_to_thing
from .http_handler import create_http_handler_options
from .qos import create_qos_options
from .rate_limit import create_rate_limit_options
from .region import create_region
from .request_id import create_request_id_key
from .route_options import RouteOptions, create_route_options
from .service_provider import create_service_provider_configuration
from .upstream_pattern import create_upstream_template_pattern

__all__ = [
    "RouteResolvers",
    "RouteOptions",
    "create_authentication_options",
    "create_claims_to_things",
    "create_http_handler_options",
    "create_qos_options",
    "create_rate_limit_options",
    "create_region",
    "create_request_id_key",
    "create_route_options",
    "create_service_provider_configuration",
    "create_upstream_template_pattern",
    "parse_claim_to_thing",
]


@dataclass(frozen=True)
class RouteResolvers:
    """The resolver functions used to build one route."""

    route_options: Callable[[FileRoute, FileGlobalConfiguration], RouteOptions] = create_route_options
    authentication: Callable[[FileRoute], Optional[AuthenticationOptions]] = create_authentication_options
    claims_to_things: Callable[[Mapping[str, str]], Tuple[ClaimToThing, ...]] = create_claims_to_things
    request_id_key: Callable[[FileRoute, FileGlobalConfiguration], Optional[str]] = create_request_id_key
    upstream_template_pattern: Callable[[FileRoute], UpstreamPathTemplate] = create_upstream_template_pattern
    qos: Callable[[FileRoute, FileGlobalConfiguration], QoSOptions] = create_qos_options
    rate_limit: Callable[
        [FileRoute, FileGlobalConfiguration, bool], Optional[RateLimitOptions]
    ] = create_rate_limit_options
    region: Callable[[FileRoute], str] = create_region
    http_handler: Callable[[FileRoute, FileGlobalConfiguration], HttpHandlerOptions] = create_http_handler_options
