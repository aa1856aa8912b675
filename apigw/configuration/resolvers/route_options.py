"""Per-route capability flags."""

from dataclasses import dataclass

from ..file_models import FileGlobalConfiguration, FileRoute
from .qos import create_qos_options


@dataclass(frozen=True)
class RouteOptions:
    """Which cross-cutting features are switched on for a route."""
    is_authenticated: bool
    is_authorised: bool
    is_cached: bool
    is_qos: bool
    enable_rate_limiting: bool


def create_route_options(
    route: FileRoute,
    global_configuration: FileGlobalConfiguration,
) -> RouteOptions:
    """Resolve the capability flags of a route.

    Authentication, authorisation and caching are switched on by the
    presence of their option blocks. QoS is on when the resolved breaker
    has both a failure threshold and a timeout. Rate limiting follows the
    route's explicit flag, then the global default, then off.
    """
    qos = create_qos_options(route, global_configuration)

    enable_rate_limiting = route.rate_limit_options.enable_rate_limiting
    if enable_rate_limiting is None:
        enable_rate_limiting = global_configuration.rate_limit_options.enable_rate_limiting
    if enable_rate_limiting is None:
        enable_rate_limiting = False

    return RouteOptions(
        is_authenticated=bool(route.authentication_options.authentication_provider_key),
        is_authorised=bool(route.route_claims_requirement),
        is_cached=route.file_cache_options.ttl_seconds > 0,
        is_qos=qos.exceptions_allowed_before_breaking > 0 and qos.timeout_value > 0,
        enable_rate_limiting=enable_rate_limiting,
    )
