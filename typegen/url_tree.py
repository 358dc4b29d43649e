"""Nested endpoint-name -> URL-template tree, and URL building.

The tree mirrors the endpoint folder hierarchy:

    {"auth": {"auth_login": "/api/v1/auth/login"}, "health": "/api/v1/health"}

When a folder segment lands on a key that already holds a URL, the URL is
moved under SELF_KEY and the key becomes a folder. Nothing is overwritten.
"""

from __future__ import annotations

import json
import re
from typing import Any, Iterable, Mapping, Union

from .errors import MissingPathParameterError
from .models import EndpointDescriptor

SELF_KEY = "_self"

UrlTree = dict[str, Union[str, "UrlTree"]]

_PLACEHOLDER_RE = re.compile(r"\{([^}]+)\}")


def _folder(tree: UrlTree, segment: str) -> UrlTree:
    """Descend into `segment`, turning a leaf there into a folder."""
    current = tree.get(segment)
    if isinstance(current, dict):
        return current
    folder: UrlTree = {}
    if isinstance(current, str):
        folder[SELF_KEY] = current
    tree[segment] = folder
    return folder


def build_url_tree(endpoints: Iterable[EndpointDescriptor]) -> UrlTree:
    """Organize endpoint URLs by folder path."""
    tree: UrlTree = {}
    for endpoint in endpoints:
        current = tree
        for segment in filter(None, endpoint.folder.split("/")):
            current = _folder(current, segment)

        existing = current.get(endpoint.name)
        if isinstance(existing, dict):
            existing[SELF_KEY] = endpoint.path
        else:
            current[endpoint.name] = endpoint.path
    return tree


def render_url_tree(tree: UrlTree, indent: int = 0) -> str:
    """Render the tree as the body of a TypeScript object literal."""
    pad = "  " * (indent + 1)
    lines: list[str] = []
    entries = sorted(tree.items())
    for i, (key, value) in enumerate(entries):
        comma = "" if i == len(entries) - 1 else ","
        if isinstance(value, str):
            lines.append(f"{pad}{key}: {json.dumps(value)}{comma}")
        else:
            lines.append(f"{pad}{key}: {{")
            lines.append(render_url_tree(value, indent + 1))
            lines.append(f"{pad}}}{comma}")
    return "\n".join(lines)


def _url_value(value: Any) -> str:
    # Same text as String(value) in the emitted TypeScript helper
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_url(template: str, params: Mapping[str, Any]) -> str:
    """Replace {key} placeholders in a URL template with parameter values.

    Raises MissingPathParameterError if any placeholder is left over.
    """
    url = template
    for key, value in params.items():
        url = url.replace("{" + key + "}", _url_value(value))

    missing = _PLACEHOLDER_RE.findall(url)
    if missing:
        raise MissingPathParameterError(missing, list(params))
    return url
