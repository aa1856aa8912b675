"""Tests for the per-route option resolvers and their default cascade."""

import pytest

from apigw.configuration.file_models import FileGlobalConfiguration, FileRoute
from apigw.configuration.models import (
    AuthenticationOptions,
    HttpHandlerOptions,
    QoSOptions,
    RateLimitRule,
    ServiceProviderConfiguration,
)
from apigw.configuration.resolvers import (
    create_authentication_options,
    create_http_handler_options,
    create_qos_options,
    create_rate_limit_options,
    create_region,
    create_request_id_key,
    create_route_options,
    create_service_provider_configuration,
)

EMPTY_GLOBAL = FileGlobalConfiguration()


class TestRouteOptions:
    """Tests for create_route_options()."""

    def test_all_off_by_default(self):
        options = create_route_options(FileRoute(), EMPTY_GLOBAL)
        assert options.is_authenticated is False
        assert options.is_authorised is False
        assert options.is_cached is False
        assert options.is_qos is False
        assert options.enable_rate_limiting is False

    def test_authenticated_when_provider_key_set(self):
        route = FileRoute(authentication_options={"authentication_provider_key": "jwt"})
        assert create_route_options(route, EMPTY_GLOBAL).is_authenticated is True

    def test_authorised_when_claims_required(self):
        route = FileRoute(route_claims_requirement={"role": "admin"})
        assert create_route_options(route, EMPTY_GLOBAL).is_authorised is True

    def test_cached_when_ttl_positive(self):
        route = FileRoute(file_cache_options={"ttl_seconds": 15})
        assert create_route_options(route, EMPTY_GLOBAL).is_cached is True

    def test_qos_needs_threshold_and_timeout(self):
        only_threshold = FileRoute(qos_options={"exceptions_allowed_before_breaking": 3})
        both = FileRoute(qos_options={"exceptions_allowed_before_breaking": 3, "timeout_value": 5000})
        assert create_route_options(only_threshold, EMPTY_GLOBAL).is_qos is False
        assert create_route_options(both, EMPTY_GLOBAL).is_qos is True

    def test_qos_enabled_by_global_defaults(self):
        global_cfg = FileGlobalConfiguration(
            qos_options={"exceptions_allowed_before_breaking": 2, "timeout_value": 1000}
        )
        assert create_route_options(FileRoute(), global_cfg).is_qos is True

    @pytest.mark.parametrize("global_flag,expected", [(True, True), (False, False), (None, False)])
    def test_rate_limit_inherits_global_default(self, global_flag, expected):
        global_cfg = FileGlobalConfiguration(rate_limit_options={"enable_rate_limiting": global_flag})
        assert create_route_options(FileRoute(), global_cfg).enable_rate_limiting is expected

    @pytest.mark.parametrize("route_flag", [True, False])
    @pytest.mark.parametrize("global_flag", [True, False, None])
    def test_explicit_rate_limit_flag_wins(self, route_flag, global_flag):
        route = FileRoute(rate_limit_options={"enable_rate_limiting": route_flag})
        global_cfg = FileGlobalConfiguration(rate_limit_options={"enable_rate_limiting": global_flag})
        assert create_route_options(route, global_cfg).enable_rate_limiting is route_flag


class TestAuthenticationOptions:
    """Tests for create_authentication_options()."""

    def test_none_when_not_authenticated(self):
        assert create_authentication_options(FileRoute()) is None

    def test_materialised_when_authenticated(self):
        route = FileRoute(authentication_options={
            "authentication_provider_key": "jwt",
            "allowed_scopes": ["read", "write"],
        })
        assert create_authentication_options(route) == AuthenticationOptions(
            authentication_provider_key="jwt",
            allowed_scopes=("read", "write"),
        )


class TestRequestIdKey:
    """Tests for create_request_id_key()."""

    def test_route_value_wins(self):
        route = FileRoute(request_id_key="X-Route-Id")
        global_cfg = FileGlobalConfiguration(request_id_key="X-Request-Id")
        assert create_request_id_key(route, global_cfg) == "X-Route-Id"

    def test_falls_back_to_global(self):
        global_cfg = FileGlobalConfiguration(request_id_key="X-Request-Id")
        assert create_request_id_key(FileRoute(), global_cfg) == "X-Request-Id"

    def test_none_without_any_value(self):
        assert create_request_id_key(FileRoute(), EMPTY_GLOBAL) is None

    def test_empty_route_value_falls_back(self):
        global_cfg = FileGlobalConfiguration(request_id_key="X-Request-Id")
        assert create_request_id_key(FileRoute(request_id_key=""), global_cfg) == "X-Request-Id"


class TestQoSOptions:
    """Tests for create_qos_options()."""

    def test_built_in_zero(self):
        assert create_qos_options(FileRoute(), EMPTY_GLOBAL) == QoSOptions(0, 0, 0)

    def test_each_value_cascades_independently(self):
        route = FileRoute(qos_options={"timeout_value": 2500})
        global_cfg = FileGlobalConfiguration(qos_options={
            "exceptions_allowed_before_breaking": 4,
            "duration_of_break": 10000,
            "timeout_value": 5000,
        })
        assert create_qos_options(route, global_cfg) == QoSOptions(
            exceptions_allowed_before_breaking=4,
            duration_of_break=10000,
            timeout_value=2500,
        )

    def test_explicit_zero_overrides_global(self):
        route = FileRoute(qos_options={"exceptions_allowed_before_breaking": 0})
        global_cfg = FileGlobalConfiguration(qos_options={"exceptions_allowed_before_breaking": 4})
        assert create_qos_options(route, global_cfg).exceptions_allowed_before_breaking == 0


class TestRateLimitOptions:
    """Tests for create_rate_limit_options()."""

    def test_none_when_disabled(self):
        route = FileRoute(rate_limit_options={"period": "1m", "limit": 5})
        assert create_rate_limit_options(route, EMPTY_GLOBAL, False) is None

    def test_built_in_defaults(self):
        options = create_rate_limit_options(FileRoute(), EMPTY_GLOBAL, True)
        assert options.enable_rate_limiting is True
        assert options.client_id_header == "ClientId"
        assert options.rate_limit_counter_prefix == "apigw"
        assert options.http_status_code == 429
        assert options.quota_exceeded_message is None
        assert options.disable_rate_limit_headers is False
        assert options.rate_limit_rule == RateLimitRule(period="1s", period_timespan=0, limit=0)

    def test_route_overrides_global_rule(self):
        route = FileRoute(rate_limit_options={
            "period": "5m",
            "limit": 100,
            "client_id_header": "X-Client",
            "client_whitelist": ["internal"],
        })
        global_cfg = FileGlobalConfiguration(rate_limit_options={
            "period": "1s",
            "period_timespan": 2,
            "limit": 10,
            "client_id_header": "X-Global-Client",
            "quota_exceeded_message": "Slow down",
            "rate_limit_counter_prefix": "gw",
            "http_status_code": 503,
            "disable_rate_limit_headers": True,
        })
        options = create_rate_limit_options(route, global_cfg, True)
        assert options.rate_limit_rule == RateLimitRule(period="5m", period_timespan=2, limit=100)
        assert options.client_id_header == "X-Client"
        assert options.client_whitelist == ("internal",)
        assert options.quota_exceeded_message == "Slow down"
        assert options.rate_limit_counter_prefix == "gw"
        assert options.http_status_code == 503
        assert options.disable_rate_limit_headers is True


class TestRegion:
    """Tests for create_region()."""

    def test_derived_from_methods_and_template(self):
        route = FileRoute(upstream_path_template="/users/{id}", upstream_http_method=["GET", "HEAD"])
        assert create_region(route) == "GETHEADusers{id}"

    def test_explicit_region_wins(self):
        route = FileRoute(
            upstream_path_template="/users/{id}",
            upstream_http_method=["GET"],
            file_cache_options={"ttl_seconds": 10, "region": "users"},
        )
        assert create_region(route) == "users"


class TestHttpHandlerOptions:
    """Tests for create_http_handler_options()."""

    def test_built_in_defaults(self):
        assert create_http_handler_options(FileRoute(), EMPTY_GLOBAL) == HttpHandlerOptions(False, False, False)

    def test_global_then_route(self):
        global_cfg = FileGlobalConfiguration(http_handler_options={
            "allow_auto_redirect": True,
            "use_cookie_container": True,
        })
        route = FileRoute(http_handler_options={"use_cookie_container": False, "use_tracing": True})
        assert create_http_handler_options(route, global_cfg) == HttpHandlerOptions(
            allow_auto_redirect=True,
            use_cookie_container=False,
            use_tracing=True,
        )


class TestServiceProviderConfiguration:
    """Tests for create_service_provider_configuration()."""

    def test_defaults(self):
        assert create_service_provider_configuration(EMPTY_GLOBAL) == ServiceProviderConfiguration(None, None, 0)

    def test_values_copied(self):
        global_cfg = FileGlobalConfiguration(service_discovery_provider={
            "type": "consul",
            "host": "consul.local",
            "port": 8500,
        })
        assert create_service_provider_configuration(global_cfg) == ServiceProviderConfiguration(
            type="consul", host="consul.local", port=8500,
        )
