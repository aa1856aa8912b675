"""Tests for route assembly."""

import dataclasses

import pytest

from apigw.configuration.exceptions import RouteConstructionError
from apigw.configuration.file_models import FileGlobalConfiguration, FileRoute
from apigw.configuration.models import (
    AuthenticationOptions,
    CacheOptions,
    ClaimToThing,
    Route,
    UpstreamPathTemplate,
)
from apigw.configuration.resolvers import RouteResolvers
from apigw.configuration.route_builder import build_route


def _file_route(**overrides):
    data = {
        "downstream_path_template": "/api/users/{id}",
        "upstream_path_template": "/users/{id}",
        "upstream_http_method": ["GET"],
        "downstream_scheme": "https",
        "downstream_host": "users.internal",
        "downstream_port": 443,
    }
    data.update(overrides)
    return FileRoute.model_validate(data)


class TestBuildRoute:
    """Tests for build_route()."""

    def test_minimal_route(self):
        route = build_route(_file_route(), FileGlobalConfiguration())
        assert route.downstream_path_template == "/api/users/{id}"
        assert route.upstream_path_template == "/users/{id}"
        assert route.upstream_http_method == ("GET",)
        assert route.route_key == "/users/{id}|GET"
        assert route.upstream_template_pattern.match("/users/3") == {"id": "3"}
        assert route.downstream_scheme == "https"
        assert route.downstream_host == "users.internal"
        assert route.downstream_port == 443
        assert route.is_authenticated is False
        assert route.authentication_options is None
        assert route.enable_rate_limiting is False
        assert route.rate_limit_options is None
        assert route.cache_options == CacheOptions(ttl_seconds=0, region="GETusers{id}")

    def test_fully_configured_route(self):
        file_route = _file_route(
            authentication_options={"authentication_provider_key": "jwt", "allowed_scopes": ["api"]},
            add_headers_to_request={"CustomerId": "Claims[sub] > value[1] > |"},
            add_claims_to_request={"UserType": "Claims[sub] > value[0] > |"},
            add_queries_to_request={"LocationId": "Claims[LocationId] > value"},
            route_claims_requirement={"UserType": "registered"},
            request_id_key="X-Correlation-Id",
            file_cache_options={"ttl_seconds": 30},
            qos_options={"exceptions_allowed_before_breaking": 3, "duration_of_break": 5000, "timeout_value": 2000},
            rate_limit_options={"enable_rate_limiting": True, "period": "1m", "limit": 60},
            load_balancer="RoundRobin",
            service_name="users",
        )
        route = build_route(file_route, FileGlobalConfiguration())

        assert route.is_authenticated is True
        assert route.authentication_options == AuthenticationOptions("jwt", ("api",))
        assert route.claims_to_headers == (ClaimToThing("CustomerId", "sub", "|", 1),)
        assert route.claims_to_claims == (ClaimToThing("UserType", "sub", "|", 0),)
        assert route.claims_to_queries == (ClaimToThing("LocationId", "LocationId"),)
        assert route.route_claims_requirement == {"UserType": "registered"}
        assert route.is_authorised is True
        assert route.request_id_key == "X-Correlation-Id"
        assert route.is_cached is True
        assert route.cache_options.ttl_seconds == 30
        assert route.is_qos is True
        assert route.qos_options.duration_of_break == 5000
        assert route.enable_rate_limiting is True
        assert route.rate_limit_options.rate_limit_rule.limit == 60
        assert route.load_balancer == "RoundRobin"
        assert route.service_name == "users"

    def test_load_balancer_falls_back_to_global(self):
        route = build_route(_file_route(), FileGlobalConfiguration(load_balancer="LeastConnection"))
        assert route.load_balancer == "LeastConnection"

    def test_route_is_frozen(self):
        route = build_route(_file_route(), FileGlobalConfiguration())
        with pytest.raises(dataclasses.FrozenInstanceError):
            route.downstream_host = "elsewhere"

    def test_claims_requirement_is_read_only(self):
        route = build_route(_file_route(route_claims_requirement={"a": "b"}), FileGlobalConfiguration())
        with pytest.raises(TypeError):
            route.route_claims_requirement["a"] = "c"

    def test_custom_resolver_used(self):
        resolvers = RouteResolvers(region=lambda file_route: "custom-region")
        route = build_route(_file_route(), FileGlobalConfiguration(), resolvers)
        assert route.cache_options.region == "custom-region"

    def test_authentication_resolver_skipped_when_not_authenticated(self):
        def fail(file_route):
            raise AssertionError("should not be called")

        route = build_route(_file_route(), FileGlobalConfiguration(), RouteResolvers(authentication=fail))
        assert route.authentication_options is None

    def test_resolver_returning_none_for_mandatory_field(self):
        resolvers = RouteResolvers(upstream_template_pattern=lambda file_route: None)
        with pytest.raises(RouteConstructionError, match="upstream_template_pattern"):
            build_route(_file_route(), FileGlobalConfiguration(), resolvers)


class TestRouteConstruction:
    """The Route type itself refuses to exist without mandatory fields."""

    def test_missing_mandatory_argument(self):
        with pytest.raises(TypeError):
            Route(
                downstream_path_template="/a",
                upstream_path_template="/a",
                upstream_http_method=("GET",),
                route_key="/a|GET",
            )

    def test_methods_become_tuple(self):
        route = Route(
            downstream_path_template="/a",
            upstream_path_template="/a",
            upstream_template_pattern=UpstreamPathTemplate("/a", "^/a$"),
            upstream_http_method=["GET"],
            route_key="/a|GET",
        )
        assert route.upstream_http_method == ("GET",)
