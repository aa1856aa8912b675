"""HTTP handler options for downstream calls."""

from typing import Optional

from ..file_models import FileGlobalConfiguration, FileHttpHandlerOptions, FileRoute
from ..models import HttpHandlerOptions

_DEFAULTS = HttpHandlerOptions()


def _pick(
    name: str,
    route_options: Optional[FileHttpHandlerOptions],
    global_options: Optional[FileHttpHandlerOptions],
) -> bool:
    for options in (route_options, global_options):
        if options is not None and getattr(options, name) is not None:
            return getattr(options, name)
    return getattr(_DEFAULTS, name)


def create_http_handler_options(
    route: FileRoute,
    global_configuration: FileGlobalConfiguration,
) -> HttpHandlerOptions:
    """Resolve handler flags; each cascades route > global > built-in (off)."""
    route_options = route.http_handler_options
    global_options = global_configuration.http_handler_options
    return HttpHandlerOptions(
        allow_auto_redirect=_pick("allow_auto_redirect", route_options, global_options),
        use_cookie_container=_pick("use_cookie_container", route_options, global_options),
        use_tracing=_pick("use_tracing", route_options, global_options),
    )
