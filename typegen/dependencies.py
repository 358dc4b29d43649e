"""Collect the named types a schema or endpoint depends on.

Used to build `import type` lines for generated files. Every $ref found
contributes its trailing name, no matter how deep; referenced bodies are
walked too so transitive dependencies are included.
"""

from __future__ import annotations

from typing import Any

from .models import EndpointDescriptor
from .refs import is_ref, ref_name, resolve_ref

_BRANCH_KEYS = ("oneOf", "anyOf", "allOf")


def extract_dependencies(node: Any, spec: dict[str, Any]) -> frozenset[str]:
    """Return the set of type names a schema transitively references."""
    deps: set[str] = set()
    # Names already entered in this call; a cycle stops here
    visited: set[str] = set()

    def traverse(schema: Any) -> None:
        if not isinstance(schema, dict):
            return

        if is_ref(schema):
            name = ref_name(schema["$ref"])
            deps.add(name)
            if name in visited:
                return
            visited.add(name)
            target = resolve_ref(schema["$ref"], spec)
            if target is not None:
                traverse(target)
            return

        properties = schema.get("properties")
        if isinstance(properties, dict):
            for prop in properties.values():
                traverse(prop)

        traverse(schema.get("items"))

        for key in _BRANCH_KEYS:
            branches = schema.get(key)
            if isinstance(branches, list):
                for branch in branches:
                    traverse(branch)

        additional = schema.get("additionalProperties")
        if isinstance(additional, dict):
            traverse(additional)

    traverse(node)
    return frozenset(deps)


def extract_endpoint_dependencies(endpoint: EndpointDescriptor) -> frozenset[str]:
    """Union of dependencies of an endpoint's params, body and responses."""
    deps: set[str] = set()
    for declaration in endpoint.parameters.values():
        deps.update(declaration.dependencies)
    if endpoint.request_body is not None:
        deps.update(endpoint.request_body.dependencies)
    for declaration in endpoint.responses.values():
        deps.update(declaration.dependencies)
    return frozenset(deps)
