"""Request id header resolution."""

from typing import Optional

from ..file_models import FileGlobalConfiguration, FileRoute


def create_request_id_key(
    route: FileRoute,
    global_configuration: FileGlobalConfiguration,
) -> Optional[str]:
    """Header carrying the request id: route value, else global default, else None."""
    return route.request_id_key or global_configuration.request_id_key or None
