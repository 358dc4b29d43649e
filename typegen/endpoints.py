"""Build endpoint descriptors from the paths table.

For every (path, method) pair this produces:
- <name>_PathParams / <name>_QueryParams / <name>_HeaderParams
- <name>_RequestBody            (application/json only)
- <name>_<status>Response       (one per status code with a JSON schema)

Names come from naming.path_to_endpoint_name and are then made unique
per folder by resolve_endpoint_names.
"""

from __future__ import annotations

import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, Callable

from .dependencies import extract_dependencies
from .models import EndpointDescriptor, TypeDeclaration
from .naming import (
    endpoint_folder_path,
    parameter_suffix,
    path_parameter_names,
    path_to_endpoint_name,
)
from .refs import is_ref, resolve_ref
from .schema_compiler import SchemaCompiler, jsdoc, safe_key

logger = logging.getLogger(__name__)

HTTP_METHODS = ("get", "post", "put", "patch", "delete", "head", "options")

_PARAM_LOCATIONS: dict[str, str] = {
    "path": "PathParams",
    "query": "QueryParams",
    "header": "HeaderParams",
}

_JSON = "application/json"


@dataclass(frozen=True)
class EndpointKey:
    """Naming inputs for one operation."""

    base_name: str
    folder: str
    method: str
    path: str


# ---------------------------------------------------------------------------
# Collision resolution
# ---------------------------------------------------------------------------

def _suffix_colliding(
    names: list[str], indices: list[int], suffix_for: Callable[[int], str],
) -> None:
    """Append a suffix to every name in `indices` that is not unique."""
    counts = Counter(names[i] for i in indices)
    for i in indices:
        if counts[names[i]] > 1:
            names[i] = f"{names[i]}_{suffix_for(i)}"


def _number_duplicates(names: list[str], indices: list[int]) -> None:
    """Last resort: keep the first occurrence, number the rest _2, _3..."""
    taken = {names[i] for i in indices}
    seen: dict[str, int] = {}
    for i in indices:
        name = names[i]
        if name not in seen:
            seen[name] = 1
            continue
        seen[name] += 1
        candidate = f"{name}_{seen[name]}"
        while candidate in taken:
            seen[name] += 1
            candidate = f"{name}_{seen[name]}"
        taken.add(candidate)
        names[i] = candidate


def resolve_endpoint_names(entries: list[EndpointKey]) -> list[str]:
    """Make endpoint names unique, returning them in input order.

    Per (folder, base_name) group:
      one endpoint            -> base name
      same path, other method -> base_<method>
      different paths         -> base_by_<params>, then _<method>, then a counter
    """
    names = [e.base_name for e in entries]
    groups: dict[tuple[str, str], list[int]] = {}
    for i, entry in enumerate(entries):
        groups.setdefault((entry.folder, entry.base_name), []).append(i)

    for indices in groups.values():
        if len(indices) == 1:
            continue

        if len({entries[i].path for i in indices}) == 1:
            for i in indices:
                names[i] = f"{entries[i].base_name}_{entries[i].method}"
            continue

        for i in indices:
            suffix = parameter_suffix(path_parameter_names(entries[i].path))
            if suffix:
                names[i] = f"{entries[i].base_name}_{suffix}"
        _suffix_colliding(names, indices, lambda i: entries[i].method)
        _number_duplicates(names, indices)

    # Names from different folders share one flat declaration namespace
    _number_duplicates(names, list(range(len(names))))
    return names


# ---------------------------------------------------------------------------
# Parameters
# ---------------------------------------------------------------------------

def _collect_parameters(
    spec: dict[str, Any], path_item: dict[str, Any], operation: dict[str, Any],
) -> list[dict[str, Any]]:
    """Merge path-level and operation-level parameters, resolving $refs.

    Operation parameters override path-level ones with the same name and location.
    """
    merged: dict[tuple[str, str], dict[str, Any]] = {}
    for param in [*(path_item.get("parameters") or []), *(operation.get("parameters") or [])]:
        if is_ref(param):
            resolved = resolve_ref(param["$ref"], spec)
            if resolved is None:
                logger.warning("Skipping unresolvable parameter %s", param["$ref"])
                continue
            param = resolved
        if not isinstance(param, dict) or "name" not in param:
            continue
        merged[(param["name"], param.get("in", "query"))] = param
    return list(merged.values())


def _parameter_type(
    compiler: SchemaCompiler, param: dict[str, Any], matches: set[str],
) -> str:
    """Determine the TypeScript type for a parameter."""
    schema = param.get("schema")
    if isinstance(schema, dict):
        return compiler.compile_named(schema, matches=matches)

    # Swagger 2.0 style parameters carry type/items directly
    param_type = param.get("type")
    items = param.get("items")
    if param_type == "array" and isinstance(items, dict):
        return f"{compiler.compile_named(items, matches=matches)}[]"
    if param_type in ("integer", "number"):
        return "number"
    if param_type == "boolean":
        return "boolean"
    return "string"


def generate_parameter_type(
    compiler: SchemaCompiler, params: list[dict[str, Any]], type_name: str,
) -> TypeDeclaration:
    """Build an object type with one property per parameter."""
    lines: list[str] = []
    deps: set[str] = set()
    for param in params:
        is_required = param.get("required") is not False or param.get("in") == "path"
        if param.get("description"):
            lines.append(f"  /** {param['description']} */")
        optional = "" if is_required else "?"
        lines.append(f"  {safe_key(param['name'])}{optional}: {_parameter_type(compiler, param, deps)};")
        deps |= extract_dependencies(param.get("schema") or param.get("items"), compiler.spec)

    expression = "{\n" + "\n".join(lines) + "\n}"
    return TypeDeclaration(
        name=type_name,
        code=f"export type {type_name} = {expression};",
        dependencies=frozenset(deps),
        type_expression=expression,
    )


# ---------------------------------------------------------------------------
# Request body and responses
# ---------------------------------------------------------------------------

def _json_schema(container: dict[str, Any]) -> dict[str, Any] | None:
    content = container.get("content") or {}
    schema = (content.get(_JSON) or {}).get("schema")
    return schema if isinstance(schema, dict) else None


def _schema_declaration(
    compiler: SchemaCompiler, schema: dict[str, Any], type_name: str, description: str | None,
) -> TypeDeclaration:
    matches: set[str] = set()
    expression = compiler.compile_named(schema, matches=matches)
    return TypeDeclaration(
        name=type_name,
        code=f"{jsdoc(description)}export type {type_name} = {expression};",
        dependencies=extract_dependencies(schema, compiler.spec) | matches,
        type_expression=expression,
    )


def generate_request_body_type(
    compiler: SchemaCompiler, operation: dict[str, Any], name: str,
) -> TypeDeclaration | None:
    """Build <name>_RequestBody from the JSON request body, if any."""
    request_body = operation.get("requestBody")
    if not isinstance(request_body, dict):
        return None
    if is_ref(request_body):
        logger.debug("Request body reference not followed: %s", request_body["$ref"])
        return None
    schema = _json_schema(request_body)
    if schema is None:
        return None
    return _schema_declaration(
        compiler, schema, f"{name}_RequestBody", request_body.get("description"),
    )


def generate_response_types(
    compiler: SchemaCompiler, operation: dict[str, Any], name: str,
) -> dict[str, TypeDeclaration]:
    """Build <name>_<status>Response for every JSON response."""
    responses: dict[str, TypeDeclaration] = {}
    for status, response in (operation.get("responses") or {}).items():
        if is_ref(response):
            response = resolve_ref(response["$ref"], compiler.spec)
        if not isinstance(response, dict):
            continue
        schema = _json_schema(response)
        if schema is None:
            continue
        status = str(status)
        responses[status] = _schema_declaration(
            compiler, schema, f"{name}_{status}Response", response.get("description"),
        )
    return responses


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------

def _iter_operations(spec: dict[str, Any]):
    for path, path_item in (spec.get("paths") or {}).items():
        if not isinstance(path_item, dict):
            continue
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if isinstance(operation, dict):
                yield path, method, path_item, operation


def generate_endpoint_types(
    spec: dict[str, Any],
    path_prefix_skip: int = 0,
    compiler: SchemaCompiler | None = None,
) -> list[EndpointDescriptor]:
    """Build one descriptor per (path, method) pair, in document order."""
    compiler = compiler or SchemaCompiler(spec)
    operations = list(_iter_operations(spec))
    keys = [
        EndpointKey(
            base_name=path_to_endpoint_name(path, path_prefix_skip),
            folder=endpoint_folder_path(path, path_prefix_skip),
            method=method,
            path=path,
        )
        for path, method, _, _ in operations
    ]
    names = resolve_endpoint_names(keys)

    endpoints: list[EndpointDescriptor] = []
    for key, name, (path, method, path_item, operation) in zip(keys, names, operations):
        params = _collect_parameters(spec, path_item, operation)
        parameters: dict[str, TypeDeclaration] = {}
        for location, suffix in _PARAM_LOCATIONS.items():
            located = [p for p in params if p.get("in") == location]
            if located:
                parameters[location] = generate_parameter_type(
                    compiler, located, f"{name}_{suffix}",
                )

        tags = operation.get("tags") or []
        endpoints.append(
            EndpointDescriptor(
                name=name,
                base_name=key.base_name,
                method=method,
                path=path,
                folder=key.folder,
                tag=tags[0] if tags else "default",
                summary=operation.get("description") or operation.get("summary") or "",
                parameters=parameters,
                request_body=generate_request_body_type(compiler, operation, name),
                responses=generate_response_types(compiler, operation, name),
            )
        )
    return endpoints


def generate_endpoint_type_code(endpoint: EndpointDescriptor) -> str:
    """Render the combined file body for one endpoint."""
    header = [endpoint.summary] if endpoint.summary else []
    header.append(f"Endpoint: {endpoint.method.upper()} {endpoint.path}")
    blocks = [jsdoc("\n".join(header)).rstrip("\n")]

    blocks.extend(d.code for d in endpoint.parameters.values())
    if endpoint.request_body is not None:
        blocks.append(endpoint.request_body.code)
    blocks.extend(d.code for d in endpoint.responses.values())
    return "\n\n".join(blocks)
