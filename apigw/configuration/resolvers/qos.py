"""Circuit breaker (QoS) options."""

from typing import Optional

from ..file_models import FileGlobalConfiguration, FileRoute
from ..models import QoSOptions


def _first_set(*values: Optional[int]) -> int:
    for value in values:
        if value is not None:
            return value
    return 0


def create_qos_options(
    route: FileRoute,
    global_configuration: FileGlobalConfiguration,
) -> QoSOptions:
    """Resolve QoS options; each value cascades route > global > 0 on its own."""
    route_qos = route.qos_options
    global_qos = global_configuration.qos_options
    return QoSOptions(
        exceptions_allowed_before_breaking=_first_set(
            route_qos.exceptions_allowed_before_breaking,
            global_qos.exceptions_allowed_before_breaking,
        ),
        duration_of_break=_first_set(route_qos.duration_of_break, global_qos.duration_of_break),
        timeout_value=_first_set(route_qos.timeout_value, global_qos.timeout_value),
    )
