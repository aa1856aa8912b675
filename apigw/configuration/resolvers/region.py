"""Cache region naming."""

from ..file_models import FileRoute


def create_region(route: FileRoute) -> str:
    """Name of the cache region a route's responses are stored under.

    An explicit ``file_cache_options.region`` wins. Otherwise the region is
    derived from the methods (joined with nothing) followed by the upstream
    template with its slashes removed, e.g. ``GETusers{id}``.
    """
    if route.file_cache_options.region:
        return route.file_cache_options.region
    methods = "".join(route.upstream_http_method)
    return f"{methods}{route.upstream_path_template.replace('/', '')}"
