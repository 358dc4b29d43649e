"""Records produced by one generation run."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class TypeDeclaration:
    """A named, dependency-tracked unit of generated code."""

    name: str
    code: str
    dependencies: frozenset[str] = frozenset()
    type_expression: str | None = None


@dataclass(frozen=True)
class EndpointDescriptor:
    """Everything generated for one (path, method) pair."""

    name: str
    base_name: str
    method: str
    path: str
    folder: str
    tag: str = "default"
    summary: str = ""
    parameters: dict[str, TypeDeclaration] = field(default_factory=dict)
    request_body: TypeDeclaration | None = None
    responses: dict[str, TypeDeclaration] = field(default_factory=dict)
