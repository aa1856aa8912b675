"""Compile upstream path templates into matchers."""

import re
from typing import List, Tuple

from ..file_models import FileRoute
from ..models import UpstreamPathTemplate

# ``{name}`` placeholders; names may not contain braces or slashes
PLACEHOLDER_PATTERN = re.compile(r"\{([^{}/]+)\}")

_SEGMENT = "([^/]+)"
_ROOT_ONLY = "^/$"
_OPTIONAL_TRAILING_SLASH = "(/|)"
_IGNORE_CASE = "(?i)"


def _split_template(template: str) -> Tuple[List[str], List[str]]:
    """Split a template into literal chunks and placeholder names."""
    literals: List[str] = []
    placeholders: List[str] = []
    position = 0
    for match in PLACEHOLDER_PATTERN.finditer(template):
        literals.append(template[position:match.start()])
        placeholders.append(match.group(1).strip())
        position = match.end()
    literals.append(template[position:])
    return literals, placeholders


def create_upstream_template_pattern(route: FileRoute) -> UpstreamPathTemplate:
    """Build the matcher for a route's upstream path template.

    Each ``{name}`` placeholder matches exactly one path segment, literal
    text is matched verbatim, a trailing ``/`` is optional and the bare
    template ``/`` matches only the root. Matching ignores case unless the
    route sets ``route_is_case_sensitive``.
    """
    template = route.upstream_path_template
    if template == "/":
        return UpstreamPathTemplate(template=template, regex=_ROOT_ONLY)

    literals, placeholders = _split_template(template)

    trailing_slash = literals[-1].endswith("/")
    if trailing_slash:
        literals[-1] = literals[-1][:-1]

    parts: List[str] = []
    for i, literal in enumerate(literals):
        parts.append(re.escape(literal))
        if i < len(placeholders):
            parts.append(_SEGMENT)
    body = "".join(parts)
    if trailing_slash:
        body += _OPTIONAL_TRAILING_SLASH

    flags = "" if route.route_is_case_sensitive else _IGNORE_CASE
    return UpstreamPathTemplate(
        template=template,
        regex=f"{flags}^{body}$",
        placeholders=tuple(placeholders),
    )
