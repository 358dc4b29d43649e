"""Shared fixtures for typegen tests.

`petstore` is a small but realistic OpenAPI 3 document with a /api/v1
prefix, a folder-level endpoint, method collisions and nested $refs.
"""

from __future__ import annotations

import copy
import json
from pathlib import Path
from typing import Any

import pytest


# ---------------------------------------------------------------------------
# Documents
# ---------------------------------------------------------------------------

PETSTORE: dict[str, Any] = {
    "openapi": "3.0.3",
    "info": {"title": "Petstore", "version": "1.0.0"},
    "paths": {
        "/api/v1/pets": {
            "get": {
                "tags": ["pets"],
                "summary": "List pets",
                "parameters": [
                    {"name": "limit", "in": "query", "required": False, "schema": {"type": "integer"}},
                ],
                "responses": {
                    "200": {
                        "description": "A list of pets",
                        "content": {
                            "application/json": {
                                "schema": {"type": "array", "items": {"$ref": "#/components/schemas/Pet"}},
                            },
                        },
                    },
                },
            },
            "post": {
                "tags": ["pets"],
                "requestBody": {
                    "content": {
                        "application/json": {"schema": {"$ref": "#/components/schemas/NewPet"}},
                    },
                },
                "responses": {
                    "201": {
                        "description": "Created",
                        "content": {
                            "application/json": {"schema": {"$ref": "#/components/schemas/Pet"}},
                        },
                    },
                },
            },
        },
        "/api/v1/pets/{petId}": {
            "parameters": [
                {"name": "petId", "in": "path", "required": True, "schema": {"type": "string"}},
            ],
            "get": {
                "responses": {
                    "200": {
                        "description": "One pet",
                        "content": {
                            "application/json": {"schema": {"$ref": "#/components/schemas/Pet"}},
                        },
                    },
                    "404": {"$ref": "#/components/responses/NotFound"},
                },
            },
            "delete": {"responses": {"204": {"description": "Deleted"}}},
        },
        "/api/v1/auth/login": {
            "post": {
                "description": "Log in with a password",
                "requestBody": {
                    "content": {
                        "application/json": {
                            "schema": {
                                "type": "object",
                                "properties": {
                                    "username": {"type": "string"},
                                    "password": {"type": "string"},
                                },
                                "required": ["username", "password"],
                            },
                        },
                    },
                },
                "responses": {
                    "200": {
                        "description": "Token",
                        "content": {
                            "application/json": {
                                "schema": {
                                    "type": "object",
                                    "properties": {"token": {"type": "string"}},
                                    "required": ["token"],
                                },
                            },
                        },
                    },
                },
            },
        },
        "/api/v1/health": {
            "get": {"responses": {"200": {"description": "OK"}}},
        },
    },
    "components": {
        "schemas": {
            "Category": {
                "type": "object",
                "properties": {"id": {"type": "integer"}, "name": {"type": "string"}},
            },
            "Pet": {
                "type": "object",
                "description": "A pet in the store",
                "properties": {
                    "id": {"type": "integer"},
                    "name": {"type": "string"},
                    "category": {"$ref": "#/components/schemas/Category"},
                    "tag": {"type": "string", "nullable": True},
                },
                "required": ["id", "name"],
            },
            "NewPet": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "tag": {"type": "string"},
                },
                "required": ["name"],
            },
            "Error": {
                "type": "object",
                "properties": {"code": {"type": "integer"}, "message": {"type": "string"}},
                "required": ["code", "message"],
            },
        },
        "parameters": {},
        "responses": {
            "NotFound": {
                "description": "Not found",
                "content": {
                    "application/json": {"schema": {"$ref": "#/components/schemas/Error"}},
                },
            },
        },
    },
    "tags": [],
}


@pytest.fixture
def petstore() -> dict[str, Any]:
    """A fresh copy of the petstore document for each test."""
    return copy.deepcopy(PETSTORE)


@pytest.fixture
def petstore_file(tmp_path: Path, petstore: dict[str, Any]) -> Path:
    """The petstore document written to a JSON file."""
    path = tmp_path / "openapi.json"
    path.write_text(json.dumps(petstore), encoding="utf-8")
    return path
