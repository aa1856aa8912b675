"""Rate limiting options."""

from typing import Optional

from ..file_models import FileGlobalConfiguration, FileRoute
from ..models import RateLimitOptions, RateLimitRule

DEFAULT_CLIENT_ID_HEADER = "ClientId"
DEFAULT_COUNTER_PREFIX = "apigw"
DEFAULT_HTTP_STATUS_CODE = 429
DEFAULT_PERIOD = "1s"


def create_rate_limit_options(
    route: FileRoute,
    global_configuration: FileGlobalConfiguration,
    enable_rate_limiting: bool,
) -> Optional[RateLimitOptions]:
    """Resolve a route's rate limiting options.

    Returns None unless the resolved rate-limit flag is on. The rule
    (period, period timespan, limit) and the client id header cascade
    route > global > built-in; the response settings (quota message,
    counter prefix, header switch, status code) are gateway-wide.
    """
    if not enable_rate_limiting:
        return None

    route_options = route.rate_limit_options
    global_options = global_configuration.rate_limit_options

    def first(*values):
        return next((v for v in values if v is not None), None)

    rule = RateLimitRule(
        period=route_options.period or global_options.period or DEFAULT_PERIOD,
        period_timespan=first(route_options.period_timespan, global_options.period_timespan, 0),
        limit=first(route_options.limit, global_options.limit, 0),
    )

    return RateLimitOptions(
        enable_rate_limiting=True,
        client_id_header=(
            route_options.client_id_header
            or global_options.client_id_header
            or DEFAULT_CLIENT_ID_HEADER
        ),
        client_whitelist=tuple(route_options.client_whitelist),
        disable_rate_limit_headers=global_options.disable_rate_limit_headers,
        quota_exceeded_message=global_options.quota_exceeded_message,
        rate_limit_counter_prefix=global_options.rate_limit_counter_prefix or DEFAULT_COUNTER_PREFIX,
        rate_limit_rule=rule,
        http_status_code=global_options.http_status_code or DEFAULT_HTTP_STATUS_CODE,
    )
