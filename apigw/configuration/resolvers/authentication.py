"""Authentication options."""

from typing import Optional

from ..file_models import FileRoute
from ..models import AuthenticationOptions


def create_authentication_options(route: FileRoute) -> Optional[AuthenticationOptions]:
    """Return the route's authentication options, or None when it is not authenticated."""
    options = route.authentication_options
    if not options.authentication_provider_key:
        return None
    return AuthenticationOptions(
        authentication_provider_key=options.authentication_provider_key,
        allowed_scopes=tuple(options.allowed_scopes),
    )
