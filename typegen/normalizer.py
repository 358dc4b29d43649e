"""Normalize OpenAPI 3.x and Swagger 2.0 documents to one shape.

The result always has `paths`, `components.{schemas,parameters,responses}`
and `tags`. Swagger 2.0 documents are remapped:
- definitions            -> components.schemas
- in: body parameter     -> requestBody.content["application/json"].schema
- response schema        -> response content["application/json"].schema

The input document is never modified.
"""

from __future__ import annotations

import copy
from typing import Any

from .errors import UnsupportedDocumentError

_SWAGGER_METHODS = ("get", "post", "put", "patch", "delete", "head", "options")

_JSON = "application/json"


def is_openapi(doc: Any) -> bool:
    return isinstance(doc, dict) and isinstance(doc.get("openapi"), str)


def is_swagger(doc: Any) -> bool:
    return isinstance(doc, dict) and isinstance(doc.get("swagger"), str)


def spec_version(doc: dict[str, Any]) -> str:
    """Return the dialect version string, or 'unknown'."""
    return doc.get("openapi") or doc.get("swagger") or "unknown"


def normalize_spec(doc: dict[str, Any]) -> dict[str, Any]:
    """Normalize an OpenAPI or Swagger document."""
    if is_openapi(doc):
        return _normalize_openapi(copy.deepcopy(doc))
    if is_swagger(doc):
        return _normalize_swagger(copy.deepcopy(doc))
    raise UnsupportedDocumentError(
        "Unsupported specification format: missing 'openapi' or 'swagger' field"
    )


def _normalize_openapi(doc: dict[str, Any]) -> dict[str, Any]:
    components = doc.get("components") or {}
    return {
        "openapi": doc["openapi"],
        "info": doc.get("info") or {},
        "paths": doc.get("paths") or {},
        "components": {
            "schemas": components.get("schemas") or {},
            "parameters": components.get("parameters") or {},
            "responses": components.get("responses") or {},
        },
        "tags": doc.get("tags") or [],
    }


def _convert_response(response: Any) -> Any:
    if not isinstance(response, dict) or "$ref" in response or "schema" not in response:
        return response
    converted = {k: v for k, v in response.items() if k != "schema"}
    converted["content"] = {_JSON: {"schema": response["schema"]}}
    return converted


def _convert_operation(operation: dict[str, Any]) -> dict[str, Any]:
    params = operation.get("parameters") or []
    body = next(
        (p for p in params if isinstance(p, dict) and p.get("in") == "body"),
        None,
    )
    converted = dict(operation)
    if body is not None and isinstance(body.get("schema"), dict):
        converted["parameters"] = [p for p in params if p is not body]
        request_body: dict[str, Any] = {
            "required": bool(body.get("required", False)),
            "content": {_JSON: {"schema": body["schema"]}},
        }
        if body.get("description"):
            request_body["description"] = body["description"]
        converted["requestBody"] = request_body

    if isinstance(operation.get("responses"), dict):
        converted["responses"] = {
            status: _convert_response(response)
            for status, response in operation["responses"].items()
        }
    return converted


def _normalize_swagger(doc: dict[str, Any]) -> dict[str, Any]:
    paths: dict[str, Any] = {}
    for path, path_item in (doc.get("paths") or {}).items():
        if not isinstance(path_item, dict):
            continue
        item = dict(path_item)
        for method in _SWAGGER_METHODS:
            if isinstance(item.get(method), dict):
                item[method] = _convert_operation(item[method])
        paths[path] = item

    return {
        "openapi": "3.0.0",
        "info": doc.get("info") or {},
        "paths": paths,
        "components": {
            "schemas": doc.get("definitions") or {},
            "parameters": doc.get("parameters") or {},
            "responses": {
                name: _convert_response(response)
                for name, response in (doc.get("responses") or {}).items()
            },
        },
        "tags": doc.get("tags") or [],
    }
