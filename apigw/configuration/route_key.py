"""Route key derivation for load-balancer and sticky-session grouping."""

from typing import Sequence

KEY_DELIMITER = "|"
METHOD_SEPARATOR = ","


def create_route_key(upstream_path_template: str, upstream_http_method: Sequence[str]) -> str:
    """Derive the grouping key for a route's entry point.

    The key is the upstream template, ``|``, then the methods joined by
    ``,`` in the order given, e.g. ``/orders|POST,GET``.

    Two routes with the same template and methods get the same key even
    when their downstream targets differ. The validator rejects such
    duplicates so the collision never reaches a published configuration.
    """
    return f"{upstream_path_template}{KEY_DELIMITER}{METHOD_SEPARATOR.join(upstream_http_method)}"
