"""Schema resolution: ``$ref`` pointers and ``allOf`` composition.

Resolution turns a schema as written into an *effective* schema, one
that carries neither ``$ref`` nor ``allOf`` and can be handed to kind
classification and validation.

Example:
    ```python
    root = {
        "definitions": {"name": {"type": "string"}},
        "allOf": [{"$ref": "#/definitions/name"}, {"minLength": 3}],
    }
    resolver = SchemaResolver(root)
    resolver.resolve(root)
    # {'type': 'string', 'minLength': 3, 'definitions': {...}}
    ```
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Dict, Tuple

from .exceptions import SchemaError, SchemaRecursionError, UnclassifiableSchemaError
from .pointer import resolve_pointer

logger = logging.getLogger(__name__)

DEFAULT_MAX_REFERENCE_HOPS = 32


def merge_schemas(*schemas: Mapping[str, Any]) -> Dict[str, Any]:
    """Shallow merge of schemas, later keywords overriding earlier ones.

    Args:
        *schemas: Schemas in increasing order of precedence

    Returns:
        New merged dictionary

    Example:
        >>> merge_schemas({"type": "string", "minLength": 1}, {"minLength": 3})
        {'type': 'string', 'minLength': 3}
    """
    result: Dict[str, Any] = {}
    for schema in schemas:
        result.update(schema)
    return result


class SchemaResolver:
    """Resolves schemas against a single root document.

    Args:
        root: Root schema document that ``$ref`` pointers are relative to
        max_reference_hops: Longest ``$ref`` chain followed before giving up
    """

    def __init__(
        self,
        root: Mapping[str, Any],
        max_reference_hops: int = DEFAULT_MAX_REFERENCE_HOPS,
    ) -> None:
        self._root = root
        self._max_hops = max_reference_hops

    @property
    def root(self) -> Mapping[str, Any]:
        """The root schema document."""
        return self._root

    def resolve(self, schema: Any) -> Dict[str, Any]:
        """Resolve a schema into its effective form.

        Args:
            schema: Schema as written (may contain ``$ref``/``allOf``)

        Returns:
            A new dictionary without ``$ref`` or ``allOf``

        Raises:
            BrokenReferenceError: If a pointer cannot be followed
            SchemaRecursionError: If references form a cycle or chain too long
            UnclassifiableSchemaError: If a schema is not a mapping
        """
        return self._resolve(schema, ())

    def _resolve(self, schema: Any, chain: Tuple[str, ...]) -> Dict[str, Any]:
        schema, chain = self._follow_references(schema, chain)

        if "allOf" not in schema:
            return dict(schema)

        members = schema["allOf"]
        if not isinstance(members, Sequence) or isinstance(members, str):
            raise SchemaError(
                "'allOf' must be a list of schemas",
                context={"allOf": members},
            )

        resolved = [self._resolve(member, chain) for member in members]
        outer = {key: value for key, value in schema.items() if key != "allOf"}
        logger.debug(f"Merged {len(resolved)} allOf member(s)")
        return merge_schemas(*resolved, outer)

    def _follow_references(
        self, schema: Any, chain: Tuple[str, ...]
    ) -> Tuple[Mapping[str, Any], Tuple[str, ...]]:
        """Follow ``$ref`` until a concrete schema is reached.

        Returns the concrete schema together with the reference chain that
        led to it, so that ``allOf`` members can detect cycles through it.
        """
        while True:
            if not isinstance(schema, Mapping):
                raise UnclassifiableSchemaError(
                    f"Schema must be a mapping, got {type(schema).__name__}",
                    context={"schema": schema, "references": list(chain)},
                )
            if "$ref" not in schema:
                return schema, chain

            ref = schema["$ref"]
            if ref in chain:
                raise SchemaRecursionError(
                    f"Circular reference detected: {ref}",
                    context={"ref": ref, "references": list(chain)},
                )
            chain = chain + (ref,)
            if len(chain) > self._max_hops:
                raise SchemaRecursionError(
                    f"Schema recursion too deep following {ref}",
                    context={"ref": ref, "max_reference_hops": self._max_hops},
                )
            schema = resolve_pointer(ref, self._root)


def resolve_schema(
    schema: Any,
    root: Mapping[str, Any] | None = None,
    max_reference_hops: int = DEFAULT_MAX_REFERENCE_HOPS,
) -> Dict[str, Any]:
    """Resolve ``schema`` against ``root`` (defaults to the schema itself)."""
    return SchemaResolver(schema if root is None else root, max_reference_hops).resolve(schema)
