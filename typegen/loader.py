"""Load an OpenAPI / Swagger JSON document from a file or URL."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import httpx

from .errors import SpecLoadError
from .normalizer import is_openapi, is_swagger

logger = logging.getLogger(__name__)

FETCH_TIMEOUT_SECONDS = 30


def is_url(source: str) -> bool:
    parsed = urlparse(source)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _fetch(url: str, client: httpx.Client | None) -> str:
    try:
        if client is not None:
            response = client.get(url)
        else:
            with httpx.Client(timeout=FETCH_TIMEOUT_SECONDS, follow_redirects=True) as c:
                response = c.get(url)
    except httpx.HTTPError as e:
        raise SpecLoadError(f"Failed to fetch OpenAPI spec from {url}: {e}") from e

    if response.status_code != 200:
        raise SpecLoadError(
            f"Failed to fetch {url}: {response.status_code} {response.reason_phrase}"
        )
    return response.text


def _read(path: Path) -> str:
    if not path.exists():
        raise SpecLoadError(f"File not found: {path}")
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        raise SpecLoadError(f"Failed to read file {path}: {e}") from e


def load_spec(source: str | Path, client: httpx.Client | None = None) -> dict[str, Any]:
    """Load the spec from a URL or a local path.

    Raises SpecLoadError if the content is not an OpenAPI/Swagger document.
    """
    if isinstance(source, str) and is_url(source):
        logger.debug("Fetching spec from %s", source)
        content = _fetch(source, client)
    else:
        logger.debug("Reading spec from %s", source)
        content = _read(Path(source))

    try:
        spec = json.loads(content)
    except json.JSONDecodeError as e:
        raise SpecLoadError(f"Invalid JSON in {source}: {e}") from e

    if not is_openapi(spec) and not is_swagger(spec):
        raise SpecLoadError(
            'Invalid OpenAPI/Swagger specification. Missing "openapi" or "swagger" field.'
        )
    return spec
