"""Tests for the resolved configuration types."""

import dataclasses
from types import MappingProxyType

import pytest

from apigw.configuration.exceptions import RouteConstructionError
from apigw.configuration.models import (
    Route,
    RuntimeConfiguration,
    ServiceProviderConfiguration,
    UpstreamPathTemplate,
)


def _pattern():
    return UpstreamPathTemplate("/users/{id}", "(?i)^/users/([^/]+)$", ("id",))


def _route(**overrides):
    fields = dict(
        downstream_path_template="/api/users/{id}",
        upstream_path_template="/users/{id}",
        upstream_template_pattern=_pattern(),
        upstream_http_method=["GET"],
        route_key="/users/{id}|GET",
    )
    fields.update(overrides)
    return Route(**fields)


class TestUpstreamPathTemplate:

    def test_match_returns_placeholders(self):
        assert dict(_pattern().match("/USERS/42")) == {"id": "42"}

    def test_no_match(self):
        assert _pattern().match("/users/42/orders") is None

    def test_equality_ignores_compiled_pattern(self):
        assert _pattern() == _pattern()


class TestRoute:

    def test_defaults_are_disabled(self):
        route = _route()
        assert route.is_authenticated is False
        assert route.authentication_options is None
        assert route.is_cached is False
        assert route.is_qos is False
        assert route.enable_rate_limiting is False
        assert route.rate_limit_options is None
        assert route.claims_to_headers == ()
        assert dict(route.route_claims_requirement) == {}

    @pytest.mark.parametrize("name", ["downstream_path_template", "upstream_template_pattern", "route_key"])
    def test_mandatory_fields(self, name):
        with pytest.raises(RouteConstructionError) as exc_info:
            _route(**{name: None})
        assert exc_info.value.field_name == name

    def test_frozen(self):
        route = _route()
        with pytest.raises(dataclasses.FrozenInstanceError):
            route.route_key = "/other|GET"

    def test_equal_by_value_but_unhashable(self):
        assert _route() == _route()
        with pytest.raises(TypeError, match="unhashable"):
            hash(_route())

    def test_containers_frozen(self):
        methods = ["GET"]
        claims = {"role": "admin"}
        route = _route(upstream_http_method=methods, route_claims_requirement=claims)
        methods.append("POST")
        claims["role"] = "user"
        assert route.upstream_http_method == ("GET",)
        assert isinstance(route.route_claims_requirement, MappingProxyType)
        assert route.route_claims_requirement["role"] == "admin"


class TestRuntimeConfiguration:

    def test_routes_become_tuple(self):
        configuration = RuntimeConfiguration(
            routes=[_route()],
            administration_path="/admin",
            service_provider_configuration=ServiceProviderConfiguration(),
        )
        assert isinstance(configuration.routes, tuple)
        assert configuration.routes[0].route_key == "/users/{id}|GET"
