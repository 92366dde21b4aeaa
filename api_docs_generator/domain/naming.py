"""
Naming convention utilities for the API docs generator.

Converts service route paths into OpenAPI path templates and derives model
and tag names from them.
"""

import re
from typing import List, Tuple
import inflect


# Initialize inflect engine for pluralization
p = inflect.engine()

ROUTE_PARAM_PATTERN = re.compile(r"^:(\w+)$")


def singularize(word: str) -> str:
    """Return the singular form of ``word``, or ``word`` itself if already singular."""
    try:
        singular = p.singular_noun(word)
    except Exception:
        return word
    return singular or word


def pluralize(word: str) -> str:
    """Safe pluralization helper."""
    try:
        return p.plural(word)
    except Exception:
        return f"{word}s"


def split_route(path: str) -> Tuple[str, List[str]]:
    """
    Convert a service route into an OpenAPI path template.

    Route placeholders written as ``:name`` become ``{name}``.

    Returns:
        The path template (leading slash, no trailing slash) and the names of
        the route parameters in order.

    Example:
        >>> split_route("users/:userId/posts")
        ('/users/{userId}/posts', ['userId'])
    """
    segments = []
    params = []
    for segment in path.strip("/").split("/"):
        if not segment:
            continue
        match = ROUTE_PARAM_PATTERN.match(segment)
        if match:
            params.append(match.group(1))
            segments.append(f"{{{match.group(1)}}}")
        else:
            segments.append(segment)
    return "/" + "/".join(segments), params


def last_static_segment(path: str) -> str:
    """Return the last path segment that is not a route parameter."""
    for segment in reversed(path.strip("/").split("/")):
        if segment and not ROUTE_PARAM_PATTERN.match(segment):
            return segment
    return path.strip("/")


def item_path(base_path: str, id_names: List[str], separator: str) -> str:
    """Build the item path for a service, e.g. ``/users/{id}`` or ``/pairs/{a},{b}``."""
    placeholders = separator.join(f"{{{name}}}" for name in id_names)
    return f"{base_path.rstrip('/')}/{placeholders}"
