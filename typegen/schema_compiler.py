"""Compile OpenAPI schemas to TypeScript type expressions.

Precedence, checked in this order for every node:
  $ref -> nullable -> oneOf -> anyOf -> allOf -> enum -> array -> object -> primitive

Handles:
- One-hop $ref resolution with a cycle guard (names on the current path)
- Collapsing of "optional reference" unions such as anyOf: [$ref, {}]
- Inline objects matched to named schemas by property names
- Quoting of property names that are not bare identifiers
- additionalProperties as index signatures

The compiler never raises on odd input. Unknown shapes become `unknown`.
"""

from __future__ import annotations

import json
import re
from typing import Any

from .refs import is_ref, ref_name, resolve_ref, resolve_schema
from .shapes import ShapeIndex

UNKNOWN = "unknown"

_IDENTIFIER = re.compile(r"^[a-zA-Z_$][a-zA-Z0-9_$]*$")

# Presence of any of these, even with an empty value, gives a schema a shape
_SHAPE_KEYS = ("properties", "items", "enum", "oneOf", "anyOf", "allOf", "additionalProperties")

_PRIMITIVES: dict[str, str] = {
    "string": "string",
    "number": "number",
    "integer": "number",
    "boolean": "boolean",
    "null": "null",
}


def jsdoc(description: str | None, indent: str = "") -> str:
    """Render a multi-line JSDoc block, or an empty string."""
    if not description:
        return ""
    body = f"\n{indent} * ".join(description.split("\n"))
    return f"{indent}/**\n{indent} * {body}\n{indent} */\n"


def safe_key(key: str) -> str:
    """Quote a property name unless it is a valid bare identifier."""
    if _IDENTIFIER.match(key):
        return key
    return "'" + key.replace("'", "\\'") + "'"


def _enum_literal(value: Any) -> str:
    if isinstance(value, str):
        return "'" + value.replace("'", "\\'") + "'"
    # JSON literal text: true/false/null and numbers
    return json.dumps(value)


def is_empty_schema(schema: Any) -> bool:
    """Check if a schema describes no concrete shape.

    An explicit {"type": "null"} counts as empty too, which loses the
    distinction between "absent" and "null" when a union is collapsed.
    """
    if is_ref(schema) or not isinstance(schema, dict):
        return False
    return (
        schema.get("type") in (None, "null")
        and not any(key in schema for key in _SHAPE_KEYS)
    )


def single_ref_name(branches: list[Any]) -> str | None:
    """Return the one referenced name if every other branch is empty."""
    name: str | None = None
    for branch in branches:
        if is_ref(branch):
            candidate = ref_name(branch["$ref"])
            if name is not None and name != candidate:
                return None
            name = candidate
        elif not is_empty_schema(branch):
            return None
    return name


class SchemaCompiler:
    """Turn schema nodes of one document into type-expression strings."""

    def __init__(self, spec: dict[str, Any], shapes: ShapeIndex | None = None) -> None:
        self.spec = spec
        if shapes is None:
            shapes = ShapeIndex.from_schemas(
                (spec.get("components") or {}).get("schemas") or {}
            )
        self.shapes = shapes

    def compile(
        self,
        node: Any,
        visiting: frozenset[str] = frozenset(),
        matches: set[str] | None = None,
    ) -> str:
        """Compile a schema node to a type expression.

        Names substituted by the shape matcher are added to `matches` when given.
        """
        if not isinstance(node, dict):
            return UNKNOWN

        if is_ref(node):
            return self._compile_ref(node["$ref"], visiting, matches)

        if node.get("nullable"):
            base = self.compile({**node, "nullable": False}, visiting, matches)
            return f"{base} | null"

        for key, operator in (("oneOf", " | "), ("anyOf", " | "), ("allOf", " & ")):
            branches = node.get(key)
            if isinstance(branches, list) and branches:
                collapsed = single_ref_name(branches)
                if collapsed:
                    return collapsed
                types = [self.compile(branch, visiting, matches) for branch in branches]
                return "(" + operator.join(types) + ")"

        enum = node.get("enum")
        if isinstance(enum, list) and enum:
            return " | ".join(_enum_literal(v) for v in enum)

        schema_type = node.get("type")
        if schema_type == "array":
            items = node.get("items")
            if not isinstance(items, dict):
                return f"{UNKNOWN}[]"
            return f"{self.compile_named(items, visiting, matches)}[]"

        if schema_type == "object" or (schema_type is None and node.get("properties")):
            return self._compile_object(node, visiting, matches)

        if isinstance(schema_type, str):
            return _PRIMITIVES.get(schema_type, UNKNOWN)
        return UNKNOWN

    def compile_named(
        self,
        node: Any,
        visiting: frozenset[str] = frozenset(),
        matches: set[str] | None = None,
    ) -> str:
        """Compile a node in a position where references stay by name."""
        if is_ref(node):
            return ref_name(node["$ref"])
        return self.compile(node, visiting, matches)

    def _compile_ref(
        self, ref: str, visiting: frozenset[str], matches: set[str] | None,
    ) -> str:
        name = ref_name(ref)
        if name in visiting:
            return name
        target = resolve_ref(ref, self.spec)
        if target is not None and "type" in target:
            return self.compile(target, visiting | {name}, matches)
        # Dangling or shapeless target: best-effort bare name
        return name

    def _compile_object(
        self, node: dict[str, Any], visiting: frozenset[str], matches: set[str] | None,
    ) -> str:
        properties = node.get("properties")
        additional = node.get("additionalProperties")

        if not isinstance(properties, dict) or not properties:
            if additional is False:
                return "Record<string, never>"
            if isinstance(additional, dict):
                return f"Record<string, {self.compile_named(additional, visiting, matches)}>"
            return f"Record<string, {UNKNOWN}>"

        required = set(node.get("required") or [])
        lines: list[str] = []
        for key, value in properties.items():
            if is_ref(value):
                prop_type = ref_name(value["$ref"])
            else:
                matched = self.shapes.match(value)
                if matched is not None and matches is not None:
                    matches.add(matched)
                prop_type = matched or self.compile(value, visiting, matches)
                if isinstance(value, dict) and value.get("description"):
                    lines.append(f"  /** {value['description']} */")
            optional = "" if key in required else "?"
            lines.append(f"  {safe_key(key)}{optional}: {prop_type};")

        if additional is True:
            lines.append(f"  [key: string]: {UNKNOWN};")
        elif isinstance(additional, dict):
            lines.append(f"  [key: string]: {self.compile_named(additional, visiting, matches)};")

        return "{\n" + "\n".join(lines) + "\n}"

    def generate_schema_type(
        self, name: str, schema: dict[str, Any], matches: set[str] | None = None,
    ) -> tuple[str, str]:
        """Build `export type <name> = ...;` for a named component schema.

        Returns (type_expression, code); shape-matched names go to `matches`.
        Raises ReferenceResolutionError when the schema is a reference to a
        missing or shapeless target.
        """
        resolved = resolve_schema(schema, self.spec)
        expression = self.compile(resolved, frozenset({name}), matches)
        code = f"{jsdoc(resolved.get('description'))}export type {name} = {expression};"
        return expression, code
