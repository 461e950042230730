"""Validator kind catalogue and schema classification.

A validator kind pairs a node class with a predicate over effective
schemas and an explicit priority. Classification picks the matching kind
with the highest priority; when priorities tie, the kind registered last
wins. This lets a specialized kind (a string displayed as text) pre-empt
a general one (any string), and lets ``enum`` pre-empt every ``type``.

Example:
    ```python
    registry = default_registry()
    registry.classify({"type": "string", "enum": ["a", "b"]}).name
    # 'enum'

    # Override strings with a custom node class
    registry.register(
        ValidatorKind("email", EmailNode, lambda s: s.get("format") == "email", priority=45)
    )
    ```
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any, Dict, List

from .exceptions import RegistryError, UnclassifiableSchemaError
from .nodes import (
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

logger = logging.getLogger(__name__)

SchemaPredicate = Callable[[Mapping[str, Any]], bool]


@dataclass(frozen=True)
class ValidatorKind:
    """A node class and the rule deciding which schemas it handles.

    Attributes:
        name: Unique kind name
        node_class: ValidatorNode subclass instantiated for matching schemas
        predicate: Pure test over an effective schema
        priority: Higher priorities are tried first
    """

    name: str
    node_class: type[ValidatorNode]
    predicate: SchemaPredicate
    priority: int = 0

    def matches(self, schema: Mapping[str, Any]) -> bool:
        """Whether this kind accepts ``schema``."""
        return bool(self.predicate(schema))


def _type_is(*types: str) -> SchemaPredicate:
    return lambda schema: schema.get("type") in types


def _is_text(schema: Mapping[str, Any]) -> bool:
    return schema.get("type") == "string" and schema.get("display") == "text"


def _has_enum(schema: Mapping[str, Any]) -> bool:
    return "enum" in schema


# Lowest to highest priority
CANONICAL_KINDS = (
    ValidatorKind("array", ArrayNode, _type_is("array"), priority=10),
    ValidatorKind("object", ObjectNode, _type_is("object"), priority=20),
    ValidatorKind("string", StringNode, _type_is("string"), priority=30),
    ValidatorKind("text", TextNode, _is_text, priority=40),
    ValidatorKind("boolean", BooleanNode, _type_is("boolean"), priority=50),
    ValidatorKind("null", NullNode, _type_is("null"), priority=60),
    ValidatorKind("number", NumberNode, _type_is("number", "integer"), priority=70),
    ValidatorKind("enum", EnumNode, _has_enum, priority=80),
)


class KindRegistry:
    """Ordered catalogue of validator kinds.

    Args:
        kinds: Initial kinds, registered in the given order
    """

    def __init__(self, kinds: Iterable[ValidatorKind] = ()):
        self._kinds: Dict[str, ValidatorKind] = {}
        for kind in kinds:
            self.register(kind)

    def register(self, kind: ValidatorKind, allow_overwrite: bool = False) -> None:
        """Add a kind to the catalogue.

        An overwritten kind moves to the end of the declaration order.

        Raises:
            RegistryError: If the name is taken and allow_overwrite is False
        """
        if kind.name in self._kinds:
            if not allow_overwrite:
                raise RegistryError(
                    f"Kind '{kind.name}' already registered",
                    context={"kind": kind.name},
                )
            del self._kinds[kind.name]
        self._kinds[kind.name] = kind
        logger.debug(f"Registered validator kind: {kind.name} (priority {kind.priority})")

    def unregister(self, name: str) -> ValidatorKind:
        """Remove and return the kind called ``name``."""
        if name not in self._kinds:
            raise RegistryError(f"Kind not found: {name}", context={"kind": name})
        return self._kinds.pop(name)

    def get(self, name: str) -> ValidatorKind:
        """Return the kind called ``name``."""
        if name not in self._kinds:
            raise RegistryError(
                f"Kind not found: {name}",
                context={"kind": name, "available_kinds": list(self._kinds)},
            )
        return self._kinds[name]

    def has(self, name: str) -> bool:
        return name in self._kinds

    def count(self) -> int:
        return len(self._kinds)

    def list_kinds(self) -> List[ValidatorKind]:
        """Kinds from lowest to highest classification priority."""
        declared = list(self._kinds.values())
        order = {kind.name: i for i, kind in enumerate(declared)}
        return sorted(declared, key=lambda kind: (kind.priority, order[kind.name]))

    def classify(self, schema: Mapping[str, Any]) -> ValidatorKind:
        """Return the highest-priority kind that accepts ``schema``.

        Args:
            schema: Effective schema (no ``$ref``/``allOf``)

        Raises:
            UnclassifiableSchemaError: If no kind matches
        """
        for kind in reversed(self.list_kinds()):
            if kind.matches(schema):
                logger.debug(f"Classified schema as {kind.name}")
                return kind

        raise UnclassifiableSchemaError(
            "No validator kind matches schema",
            context={
                "schema_keys": sorted(schema),
                "type": schema.get("type"),
                "available_kinds": [kind.name for kind in self.list_kinds()],
            },
        )


def default_registry() -> KindRegistry:
    """A fresh registry holding the canonical kinds."""
    return KindRegistry(CANONICAL_KINDS)
