"""Command line entry point for typegen."""

from __future__ import annotations

import logging
from pathlib import Path

import click
from click.core import ParameterSource

from .codegen import write_types
from .config import merge_config, validate_config
from .errors import TypeGenError
from .generator import generate_types
from .loader import load_spec
from .log import configure_logging
from .normalizer import normalize_spec, spec_version

logger = logging.getLogger(__name__)

# CLI parameter name -> Config field
_CONFIG_PARAMS: dict[str, str] = {
    "input_": "input",
    "output": "output",
    "clean": "clean",
    "verbose": "verbose",
    "path_prefix_skip": "path_prefix_skip",
    "generate_api_endpoints": "generate_api_endpoints",
}


def _given_options(ctx: click.Context) -> dict[str, object]:
    """Options the user actually passed; defaults never override the config file."""
    return {
        field: ctx.params[param]
        for param, field in _CONFIG_PARAMS.items()
        if ctx.get_parameter_source(param) != ParameterSource.DEFAULT
    }


@click.command()
@click.option("-i", "--input", "input_", default=None, help="URL or path to OpenAPI/Swagger JSON.")
@click.option("-o", "--output", default=None, help="Output directory for generated TypeScript files.")
@click.option("-c", "--config", "config_path", default=None, type=click.Path(path_type=Path), help="Path to config file (default: swagger-type-parser.config.json).")
@click.option("--clean", is_flag=True, help="Clean output directory before generation.")
@click.option("--verbose", is_flag=True, help="Log verbose debug information.")
@click.option("--path-prefix-skip", type=click.IntRange(min=0), default=0, help="Number of path segment pairs to skip (1: '/api/v1/auth/login' -> 'auth_login').")
@click.option("--generate-api-endpoints", is_flag=True, help="Also generate API endpoint URL constants.")
@click.pass_context
def main(ctx: click.Context, config_path: Path | None, **_options):
    """Generate TypeScript types from OpenAPI/Swagger specifications."""
    try:
        config = merge_config(_given_options(ctx), config_path)
        validate_config(config)
        configure_logging(config.verbose)
        logger.debug("Configuration: %s", config)

        raw = load_spec(config.input)
        logger.debug("Specification version: %s", spec_version(raw))
        spec = normalize_spec(raw)
        logger.debug(
            "Found %d schemas and %d paths",
            len(spec["components"]["schemas"]),
            len(spec["paths"]),
        )

        result = generate_types(spec, config)
        written = write_types(
            Path(config.output),
            result,
            spec,
            clean=config.clean,
            generate_api_endpoints=config.generate_api_endpoints,
        )
    except TypeGenError as e:
        raise click.ClickException(str(e)) from e

    for name, message in result.errors.items():
        click.echo(f"Warning: {name}: {message}", err=True)
    click.echo(f"Generated {len(result.declarations)} types in {len(written)} files under {config.output}")
