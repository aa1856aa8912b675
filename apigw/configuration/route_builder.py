"""Assemble one resolved route from a raw route entry."""

from typing import Optional

from .file_models import FileGlobalConfiguration, FileRoute
from .models import CacheOptions, Route
from .resolvers import RouteResolvers
from .route_key import create_route_key

_DEFAULT_RESOLVERS = RouteResolvers()


def build_route(
    file_route: FileRoute,
    global_configuration: FileGlobalConfiguration,
    resolvers: Optional[RouteResolvers] = None,
) -> Route:
    """Resolve every option of a route and construct the :class:`Route`.

    All resolvers run first; the route is then created by a single
    constructor call, so no caller ever sees a half-built route.

    Args:
        file_route: The raw route entry. It must already have passed
            validation.
        global_configuration: Gateway-wide defaults.
        resolvers: Resolver functions to use (defaults to the built-ins).

    Raises:
        RouteConstructionError: If a resolver produced None for a
            mandatory field.
    """
    r = resolvers or _DEFAULT_RESOLVERS

    options = r.route_options(file_route, global_configuration)
    request_id_key = r.request_id_key(file_route, global_configuration)
    route_key = create_route_key(file_route.upstream_path_template, file_route.upstream_http_method)
    upstream_template_pattern = r.upstream_template_pattern(file_route)
    authentication_options = r.authentication(file_route) if options.is_authenticated else None
    claims_to_headers = r.claims_to_things(file_route.add_headers_to_request)
    claims_to_claims = r.claims_to_things(file_route.add_claims_to_request)
    claims_to_queries = r.claims_to_things(file_route.add_queries_to_request)
    qos_options = r.qos(file_route, global_configuration)
    rate_limit_options = r.rate_limit(file_route, global_configuration, options.enable_rate_limiting)
    region = r.region(file_route)
    http_handler_options = r.http_handler(file_route, global_configuration)

    return Route(
        downstream_path_template=file_route.downstream_path_template,
        upstream_path_template=file_route.upstream_path_template,
        upstream_template_pattern=upstream_template_pattern,
        upstream_http_method=tuple(file_route.upstream_http_method),
        route_key=route_key,
        is_authenticated=options.is_authenticated,
        authentication_options=authentication_options,
        claims_to_headers=claims_to_headers,
        claims_to_claims=claims_to_claims,
        claims_to_queries=claims_to_queries,
        route_claims_requirement=file_route.route_claims_requirement,
        is_authorised=options.is_authorised,
        request_id_key=request_id_key,
        is_cached=options.is_cached,
        cache_options=CacheOptions(ttl_seconds=file_route.file_cache_options.ttl_seconds, region=region),
        downstream_scheme=file_route.downstream_scheme,
        downstream_host=file_route.downstream_host,
        downstream_port=file_route.downstream_port,
        load_balancer=file_route.load_balancer or global_configuration.load_balancer,
        is_qos=options.is_qos,
        qos_options=qos_options,
        enable_rate_limiting=options.enable_rate_limiting,
        rate_limit_options=rate_limit_options,
        http_handler_options=http_handler_options,
        service_name=file_route.service_name,
        use_service_discovery=file_route.use_service_discovery,
    )
