"""Convert API paths to endpoint names and folder paths.

Pattern: drop {param} segments, skip `2 * path_prefix_skip` leading
segments, join the rest with underscores.

Examples (path_prefix_skip=1):
  /api/v1/auth/login        -> auth_login      (folder: auth)
  /api/v1/users/{id}        -> users           (folder: "")
  /api/v1/dynamic-fields/x  -> dynamic_fields_x (folder: dynamic_fields)
  /api/v1                   -> root

The same name is used for the endpoint's type declarations and for its
key in the URL-constant tree, so both must come from this module.
"""

from __future__ import annotations

import re

ROOT_NAME = "root"

_PARAM_RE = re.compile(r"\{([^}]*)\}")


def _path_segments(path: str, path_prefix_skip: int = 0) -> list[str]:
    """Extract meaningful path segments, stripping {params} and the prefix."""
    segments = [s for s in path.strip("/").split("/") if s]
    segments = [s for s in segments if "{" not in s and "}" not in s]
    skip = path_prefix_skip * 2 if path_prefix_skip > 0 else 0
    return segments[skip:]


def _clean(segment: str) -> str:
    return segment.replace("-", "_")


def path_to_endpoint_name(path: str, path_prefix_skip: int = 0) -> str:
    """Build a snake_case endpoint name from an API path.

    Returns 'root' when nothing is left after filtering.
    """
    segments = _path_segments(path, path_prefix_skip)
    if not segments:
        return ROOT_NAME
    return "_".join(_clean(s) for s in segments).lower()


def endpoint_folder_path(path: str, path_prefix_skip: int = 0) -> str:
    """Folder for an endpoint: every kept segment except the last one."""
    segments = _path_segments(path, path_prefix_skip)
    if len(segments) <= 1:
        return ""
    return "/".join(_clean(s) for s in segments[:-1]).lower()


def path_parameter_names(path: str) -> list[str]:
    """Return {param} names in the order they appear in the path."""
    return _PARAM_RE.findall(path)


def _sanitize_param(name: str) -> str:
    name = re.sub(r"[^a-z0-9_]", "_", name.lower())
    return re.sub(r"_+", "_", name).strip("_")


def parameter_suffix(names: list[str]) -> str:
    """Build 'by_<p>' or 'by_<p1>_and_<p2>...' from path parameter names."""
    cleaned = [_sanitize_param(n) for n in names]
    cleaned = [n for n in cleaned if n]
    if not cleaned:
        return ""
    return "by_" + "_and_".join(cleaned)
