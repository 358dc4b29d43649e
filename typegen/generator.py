"""Generate all declarations for one normalized document.

Output keys:
  <SchemaName>        one per components.schemas entry
  endpoint:<name>     one per (path, method) pair

A failure in one schema is logged and recorded in `errors`; it never
stops the rest of the document from being generated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from .config import Config
from .dependencies import extract_dependencies, extract_endpoint_dependencies
from .endpoints import generate_endpoint_type_code, generate_endpoint_types
from .errors import TypeGenError
from .models import EndpointDescriptor, TypeDeclaration
from .refs import get_components
from .schema_compiler import SchemaCompiler
from .url_tree import UrlTree, build_url_tree

logger = logging.getLogger(__name__)

ENDPOINT_PREFIX = "endpoint:"


@dataclass
class GenerationResult:
    declarations: dict[str, TypeDeclaration] = field(default_factory=dict)
    endpoints: list[EndpointDescriptor] = field(default_factory=list)
    url_tree: UrlTree = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)

    def schema_declarations(self) -> dict[str, TypeDeclaration]:
        return {
            k: v for k, v in self.declarations.items() if not k.startswith(ENDPOINT_PREFIX)
        }

    def endpoint_declarations(self) -> dict[str, TypeDeclaration]:
        return {
            k[len(ENDPOINT_PREFIX):]: v
            for k, v in self.declarations.items()
            if k.startswith(ENDPOINT_PREFIX)
        }


def generate_types(spec: dict[str, Any], config: Config | None = None) -> GenerationResult:
    """Generate schema and endpoint declarations from a normalized spec."""
    config = config or Config()
    compiler = SchemaCompiler(spec)
    result = GenerationResult()

    schemas = get_components(spec, "schemas")
    for name, schema in schemas.items():
        matches: set[str] = set()
        try:
            expression, code = compiler.generate_schema_type(name, schema, matches)
        except TypeGenError as e:
            logger.warning("Skipping schema %s: %s", name, e)
            result.errors[name] = str(e)
            continue
        result.declarations[name] = TypeDeclaration(
            name=name,
            code=code,
            dependencies=extract_dependencies(schema, spec) | matches,
            type_expression=expression,
        )
    logger.debug("Generated %d schema types", len(result.declarations))

    result.endpoints = generate_endpoint_types(spec, config.path_prefix_skip, compiler)
    for endpoint in result.endpoints:
        result.declarations[f"{ENDPOINT_PREFIX}{endpoint.name}"] = TypeDeclaration(
            name=endpoint.name,
            code=generate_endpoint_type_code(endpoint),
            dependencies=extract_endpoint_dependencies(endpoint),
        )
    logger.debug("Generated %d endpoint types", len(result.endpoints))

    result.url_tree = build_url_tree(result.endpoints)
    return result
