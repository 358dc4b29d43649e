"""Render templates and write generated TypeScript files.

Layout under the output directory:
  common/Http.ts
  schemas/<Name>.ts
  endpoints/<folder>/<name>.ts
  api.ts              (only with generate_api_endpoints)
  index.ts
"""

from __future__ import annotations

import logging
import posixpath
import shutil
from pathlib import Path
from typing import Any

import jinja2

from .generator import GenerationResult
from .models import TypeDeclaration
from .url_tree import render_url_tree

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"


def _environment() -> jinja2.Environment:
    return jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
    )


def relative_import(from_module: str, to_module: str) -> str:
    """Relative import path between two output-root-relative module paths."""
    path = posixpath.relpath(to_module, posixpath.dirname(from_module) or ".")
    if not path.startswith("."):
        path = f"./{path}"
    return path


def endpoint_module(name: str, folder: str) -> str:
    return posixpath.join("endpoints", folder, name) if folder else f"endpoints/{name}"


def _render_type_file(
    env: jinja2.Environment,
    module: str,
    declaration: TypeDeclaration,
    schema_names: set[str],
) -> str:
    imports = [
        (dep, relative_import(module, f"schemas/{dep}"))
        for dep in sorted(declaration.dependencies)
        if dep in schema_names and f"schemas/{dep}" != module
    ]
    return env.get_template("type_file.ts.j2").render(imports=imports, code=declaration.code)


def _write(output_dir: Path, module: str, content: str, written: list[Path]) -> None:
    path = output_dir / f"{module}.ts"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    logger.debug("Generated: %s", path)
    written.append(path)


def write_types(
    output_dir: Path,
    result: GenerationResult,
    spec: dict[str, Any] | None = None,
    clean: bool = False,
    generate_api_endpoints: bool = False,
) -> list[Path]:
    """Write every declaration of `result` below `output_dir`."""
    if clean and output_dir.exists():
        logger.info("Cleaning output directory: %s", output_dir)
        shutil.rmtree(output_dir)

    env = _environment()
    written: list[Path] = []
    schemas = result.schema_declarations()
    schema_names = set(schemas)

    _write(output_dir, "common/Http", env.get_template("http.ts.j2").render(), written)

    for name, declaration in schemas.items():
        module = f"schemas/{name}"
        _write(output_dir, module, _render_type_file(env, module, declaration, schema_names), written)

    endpoint_decls = result.endpoint_declarations()
    endpoint_modules: list[str] = []
    for endpoint in result.endpoints:
        module = endpoint_module(endpoint.name, endpoint.folder)
        declaration = endpoint_decls[endpoint.name]
        _write(output_dir, module, _render_type_file(env, module, declaration, schema_names), written)
        endpoint_modules.append(module)

    if generate_api_endpoints:
        title = ((spec or {}).get("info") or {}).get("title") or "the API specification"
        content = env.get_template("api.ts.j2").render(
            tree=render_url_tree(result.url_tree), title=title,
        )
        _write(output_dir, "api", content, written)

    index = env.get_template("index.ts.j2").render(
        schemas=list(schemas),
        endpoint_modules=endpoint_modules,
        api_endpoints=generate_api_endpoints,
    )
    _write(output_dir, "index", index, written)

    logger.info("Wrote %d files to %s", len(written), output_dir)
    return written
