"""Resolve $ref pointers inside a normalized document.

Only in-document pointers are supported:
  #/components/schemas/<key>
  #/components/parameters/<key>
  #/components/responses/<key>
  #/definitions/<key>        (Swagger 2.0, looked up in schemas)
  #/parameters/<key>         (Swagger 2.0, looked up in components.parameters)
  #/responses/<key>          (Swagger 2.0, looked up in components.responses)

Resolution is a single hop. Callers that need to follow a chain of
references recurse explicitly.
"""

from __future__ import annotations

import logging
from typing import Any

from .errors import ReferenceResolutionError

logger = logging.getLogger(__name__)

_COMPONENT_SECTIONS = ("schemas", "parameters", "responses")

# Swagger 2.0 top-level sections and the components section they live in
_LEGACY_SECTIONS: dict[str, str] = {
    "definitions": "schemas",
    "parameters": "parameters",
    "responses": "responses",
}


def is_ref(node: Any) -> bool:
    """Check if a node is a reference object."""
    return isinstance(node, dict) and isinstance(node.get("$ref"), str)


def ref_name(ref: str) -> str:
    """Return the trailing segment of a reference, used as the type name."""
    return ref.split("/")[-1]


def get_components(spec: dict[str, Any], section: str) -> dict[str, Any]:
    """Extract one components section (schemas, parameters, responses)."""
    return (spec.get("components") or {}).get(section) or {}


def resolve_ref(ref: str, spec: dict[str, Any]) -> dict[str, Any] | None:
    """Resolve a $ref pointer in the spec, or return None if not found."""
    if not ref.startswith("#/"):
        logger.debug("External reference not supported: %s", ref)
        return None

    parts = ref[2:].split("/")
    if len(parts) < 2:
        return None

    section = parts[0]
    if section == "components":
        if len(parts) < 3 or parts[1] not in _COMPONENT_SECTIONS:
            return None
        target = get_components(spec, parts[1]).get("/".join(parts[2:]))
    elif section in _LEGACY_SECTIONS:
        target = get_components(spec, _LEGACY_SECTIONS[section]).get("/".join(parts[1:]))
    else:
        return None

    return target if isinstance(target, dict) else None


def require_ref(ref: str, spec: dict[str, Any]) -> dict[str, Any]:
    """Resolve a $ref pointer, raising if it points nowhere."""
    target = resolve_ref(ref, spec)
    if target is None:
        raise ReferenceResolutionError(ref)
    return target


def resolve_schema(node: dict[str, Any], spec: dict[str, Any]) -> dict[str, Any]:
    """Follow a schema reference one hop; the target must carry a type."""
    if not is_ref(node):
        return node
    target = require_ref(node["$ref"], spec)
    if "type" not in target:
        raise ReferenceResolutionError(node["$ref"])
    return target
