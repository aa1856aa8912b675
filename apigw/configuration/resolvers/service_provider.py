"""Gateway-wide service discovery settings."""

from ..file_models import FileGlobalConfiguration
from ..models import ServiceProviderConfiguration


def create_service_provider_configuration(
    global_configuration: FileGlobalConfiguration,
) -> ServiceProviderConfiguration:
    """Resolve the service discovery provider once per configuration build."""
    provider = global_configuration.service_discovery_provider
    return ServiceProviderConfiguration(
        type=provider.type,
        host=provider.host,
        port=provider.port or 0,
    )
