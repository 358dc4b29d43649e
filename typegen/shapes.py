"""Match inline object schemas to named component schemas by shape.

A "shape" is the set of top-level property names. Property types are not
compared, so differently-typed schemas with the same names still match.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .refs import is_ref


def _shape(schema: dict[str, Any]) -> frozenset[str] | None:
    properties = schema.get("properties")
    if not isinstance(properties, dict) or not properties:
        return None
    return frozenset(properties)


@dataclass(frozen=True)
class ShapeIndex:
    """Read-only table of property-name sets to component schema names."""

    by_shape: dict[frozenset[str], str] = field(default_factory=dict)

    @classmethod
    def from_schemas(cls, schemas: dict[str, Any]) -> ShapeIndex:
        by_shape: dict[frozenset[str], str] = {}
        for name, candidate in schemas.items():
            if not isinstance(candidate, dict) or is_ref(candidate):
                continue
            shape = _shape(candidate)
            # First schema in document order wins
            if shape is not None and shape not in by_shape:
                by_shape[shape] = name
        return cls(by_shape)

    def match(self, schema: dict[str, Any]) -> str | None:
        """Return the named schema with the same property names, if any."""
        if not isinstance(schema, dict) or is_ref(schema):
            return None
        shape = _shape(schema)
        if shape is None:
            return None
        return self.by_shape.get(shape)
