"""Generate TypeScript type declarations from OpenAPI / Swagger documents."""

from __future__ import annotations

from .generator import GenerationResult, generate_types
from .url_tree import build_url

__all__ = ["GenerationResult", "build_url", "generate_types"]
