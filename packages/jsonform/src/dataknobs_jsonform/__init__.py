"""DataKnobs JSON Form Package

Schema-driven validator trees: bind a data value to a JSON-Schema-like
document, inspect errors per node, mutate values and read them back.
"""

__version__ = "0.1.0"

from .binder import SchemaBinder, build
from .exceptions import (
    BrokenReferenceError,
    JsonFormError,
    RegistryError,
    SchemaError,
    SchemaLoadError,
    SchemaRecursionError,
    SettingsError,
    UnclassifiableSchemaError,
)
from .kinds import CANONICAL_KINDS, KindRegistry, ValidatorKind, default_registry
from .loader import SchemaLoader, load_document
from .nodes import (
    UNSET,
    ArrayNode,
    BooleanNode,
    EnumNode,
    NullNode,
    NumberNode,
    ObjectNode,
    StringNode,
    TextNode,
    ValidatorNode,
)
from .pointer import build_pointer, format_path, resolve_pointer
from .resolver import SchemaResolver, merge_schemas, resolve_schema
from .settings import BinderSettings
from .traversal import collect_errors, find_node, iter_errors, iter_nodes

__all__ = [
    "build",
    "SchemaBinder",
    "UNSET",
    # Nodes
    "ValidatorNode",
    "NullNode",
    "BooleanNode",
    "NumberNode",
    "StringNode",
    "TextNode",
    "EnumNode",
    "ArrayNode",
    "ObjectNode",
    # Kinds
    "ValidatorKind",
    "KindRegistry",
    "CANONICAL_KINDS",
    "default_registry",
    # Resolution
    "SchemaResolver",
    "resolve_schema",
    "merge_schemas",
    "resolve_pointer",
    "build_pointer",
    "format_path",
    # Traversal
    "iter_nodes",
    "iter_errors",
    "collect_errors",
    "find_node",
    # Files and settings
    "SchemaLoader",
    "load_document",
    "BinderSettings",
    # Exceptions
    "JsonFormError",
    "SchemaError",
    "BrokenReferenceError",
    "UnclassifiableSchemaError",
    "SchemaRecursionError",
    "RegistryError",
    "SchemaLoadError",
    "SettingsError",
]
