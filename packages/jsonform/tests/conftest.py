"""Pytest configuration and fixtures for jsonform package tests."""

import json

import pytest
import yaml


@pytest.fixture
def person_schema():
    """Object schema with references, composition and nested arrays."""
    return {
        "type": "object",
        "title": "Person",
        "definitions": {
            "name": {"type": "string", "minLength": 1, "title": "Name"},
            "age": {"type": "integer", "minimum": 0},
        },
        "properties": {
            "name": {"$ref": "#/definitions/name"},
            "age": {"$ref": "#/definitions/age"},
            "nickname": {
                "allOf": [{"$ref": "#/definitions/name"}, {"maxLength": 10}],
                "title": "Nickname",
            },
            "bio": {"type": "string", "display": "text"},
            "role": {"type": "string", "enum": ["parent", "child"]},
            "children": {"type": "array", "items": {"type": "string"}},
            "tags": {"type": "object", "additionalProperties": {"type": "string"}},
        },
        "required": ["name", "age"],
    }


@pytest.fixture
def homer():
    """Data document valid against person_schema."""
    return {
        "name": "Homer",
        "age": 39,
        "role": "parent",
        "children": ["Bart", "Lisa", "Maggie"],
    }


@pytest.fixture
def tree_schema():
    """Recursive schema: a node with a list of child nodes."""
    return {
        "type": "object",
        "properties": {
            "label": {"type": "string"},
            "children": {"type": "array", "items": {"$ref": "#"}},
        },
        "required": ["label"],
    }


@pytest.fixture
def write_document(tmp_path):
    """Write a document to a JSON or YAML file and return its path."""

    def _write(name, document):
        path = tmp_path / name
        if path.suffix in (".yaml", ".yml"):
            path.write_text(yaml.safe_dump(document))
        else:
            path.write_text(json.dumps(document))
        return path

    return _write
