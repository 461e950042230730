"""Validator nodes: the mutable tree bound to a schema.

Each node pairs an effective schema with a current value and the list of
validation errors for that value. Scalar nodes store the value directly;
``ArrayNode`` and ``ObjectNode`` store child nodes and rebuild them from
scratch on every ``set_data`` call, so child identity does not survive a
mutation.

Nodes are normally created through ``build()``/``SchemaBinder.bind()``,
which resolve the schema and select the node class. Scalar nodes can also
be constructed directly from an effective schema:

    ```python
    node = StringNode({"type": "string", "minLength": 6}, "Homer")
    node.valid()
    # False
    node.set_data("Maggie").valid()
    # True
    ```
"""

from __future__ import annotations

import copy
import logging
import math
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any, ClassVar, Dict, Iterator, List, Tuple

from .exceptions import SchemaError
from .pointer import format_path
from .validations import ARRAY_CHECKS, NUMBER_CHECKS, STRING_CHECKS, Check, run_checks

if TYPE_CHECKING:
    from .binder import SchemaBinder

logger = logging.getLogger(__name__)


class _Unset:
    """Marker for "no value supplied", distinct from JSON ``null``."""

    _instance: ClassVar[_Unset | None] = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNSET"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> _Unset:
        return self

    def __deepcopy__(self, memo: Dict[int, Any]) -> _Unset:
        return self


UNSET: Any = _Unset()


class ValidatorNode:
    """Base class for all validator nodes.

    Attributes:
        schema: Effective schema ruling this node
        root: Root schema document the tree was built from
        path: Property names and array indices leading to this node
        errors: Validation messages for this node only
        inline: Rendering hint, True for simple controls
    """

    kind: ClassVar[str] = "node"
    inline: ClassVar[bool] = True
    checks: ClassVar[Dict[str, Check]] = {}

    def __init__(
        self,
        schema: Mapping[str, Any],
        data: Any = UNSET,
        root: Mapping[str, Any] | None = None,
        path: Tuple[Any, ...] = (),
        binder: SchemaBinder | None = None,
    ):
        self.schema = schema
        self.path = tuple(path)
        self._binder = binder
        if root is None:
            root = binder.root if binder is not None else schema
        self.root = root
        self.errors: List[str] = []
        self.data: Any = None

        if data is UNSET and "default" in schema:
            data = copy.deepcopy(schema["default"])
        self.set_data(data)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(path={format_path(self.path)!r}, value={self.value()!r})"

    @property
    def binder(self) -> SchemaBinder:
        """Binder used to construct child nodes."""
        if self._binder is None:
            from .binder import SchemaBinder

            self._binder = SchemaBinder(self.root)
        return self._binder

    @property
    def title(self) -> str | None:
        """The schema's ``title``, if any."""
        return self.schema.get("title")

    @property
    def first_error(self) -> str | None:
        """The primary error message shown for this node, if any."""
        return self.errors[0] if self.errors else None

    def children(self) -> Iterator[ValidatorNode]:
        """Iterate over direct child nodes (none for scalars)."""
        return iter(())

    def value(self) -> Any:
        """Reconstruct the plain data value held by this node."""
        return self.data

    def valid(self) -> bool:
        """Whether this node (and, for composites, every child) is valid."""
        return not self.errors

    def set_data(self, data: Any) -> ValidatorNode:
        """Replace the node's value and re-validate.

        Args:
            data: New raw value

        Returns:
            This node, so that calls can be chained

        Raises:
            SchemaError: If the schema is defective; the node keeps its
                previous value and errors
        """
        previous = (self.data, self.errors)
        self.data = self._coerce(data)
        self.errors = []
        try:
            self.validate()
        except Exception:
            self.data, self.errors = previous
            raise
        return self

    def validate(self) -> None:
        """Append the messages of every applicable keyword check."""
        self.errors.extend(run_checks(self.checks, self.schema, self.value()))

    def _coerce(self, data: Any) -> Any:
        return None if data is UNSET else data


class NullNode(ValidatorNode):
    """Node for ``type: null``; always valid, always ``None``."""

    kind = "null"

    def __init__(
        self,
        schema: Mapping[str, Any],
        data: Any = UNSET,
        root: Mapping[str, Any] | None = None,
        path: Tuple[Any, ...] = (),
        binder: SchemaBinder | None = None,
    ):
        super().__init__(schema, None, root=root, path=path, binder=binder)

    def set_data(self, data: Any) -> NullNode:
        return self

    def value(self) -> None:
        return None

    def valid(self) -> bool:
        return True


class BooleanNode(ValidatorNode):
    """Node for ``type: boolean``; absent or falsy input becomes ``False``."""

    kind = "boolean"

    def _coerce(self, data: Any) -> Any:
        return data or False

    def validate(self) -> None:
        if not isinstance(self.data, bool):
            self.errors.append("Must be a boolean")


class NumberNode(ValidatorNode):
    """Node for ``type: number`` and ``type: integer``.

    Numeric strings are parsed; any other string, or an absent value, is
    coerced to ``None``. Type and integrality failures stop the keyword
    checks from running.
    """

    kind = "number"
    checks = NUMBER_CHECKS

    def _coerce(self, data: Any) -> Any:
        if data is UNSET or data is None:
            return None
        if isinstance(data, str):
            text = data.strip()
            try:
                return int(text)
            except ValueError:
                pass
            try:
                number = float(text)
            except ValueError:
                return None
            return number if math.isfinite(number) else None
        return data

    def validate(self) -> None:
        data = self.data
        if not _is_number(data):
            self.errors.append("Must be a number")
        elif self.schema.get("type") == "integer" and isinstance(data, float) and not data.is_integer():
            self.errors.append("Must be an integer")
        else:
            super().validate()


class StringNode(ValidatorNode):
    """Node for ``type: string``; absent or null input becomes ``""``."""

    kind = "string"
    checks = STRING_CHECKS

    def _coerce(self, data: Any) -> Any:
        return "" if data is UNSET or data is None else data

    def validate(self) -> None:
        if not isinstance(self.data, str):
            self.errors.append("Must be a string")
        else:
            super().validate()


class TextNode(StringNode):
    """String rendered as a multi-line block (``display: text``)."""

    kind = "text"
    inline = False


class EnumNode(ValidatorNode):
    """Node for any schema carrying ``enum``, whatever its ``type``."""

    kind = "enum"
    inline = False

    @property
    def options(self) -> List[Any]:
        """The allowed values, in schema order."""
        return list(self.schema.get("enum") or [])

    def validate(self) -> None:
        if not self.valid():
            choices = ", ".join(str(option) for option in self.options)
            self.errors.append(f"Must be one of: {choices}")

    def valid(self) -> bool:
        return any(_same_value(option, self.data) for option in self.options)


class ArrayNode(ValidatorNode):
    """Node for ``type: array``, holding one child node per item."""

    kind = "array"
    inline = False
    checks = ARRAY_CHECKS

    def __init__(self, *args: Any, **kwargs: Any):
        self.items: List[ValidatorNode] = []
        super().__init__(*args, **kwargs)

    def children(self) -> Iterator[ValidatorNode]:
        return iter(self.items)

    def set_data(self, data: Any) -> ArrayNode:
        errors: List[str] = []
        items: List[ValidatorNode] = []

        if data is UNSET or data is None:
            data = []
        elif not isinstance(data, (list, tuple)):
            errors.append("Must be an array")
            data = []
        data = list(data)

        # Children are bound before anything is assigned, so a schema error
        # leaves the node as it was
        items_schema = self.schema.get("items")
        if isinstance(items_schema, list):
            # Positional pairing, no padding to minItems
            for i, entry in enumerate(data):
                if i < len(items_schema):
                    items.append(self._build_child(items_schema[i], entry, i))
                else:
                    errors.append(f"Unknown item: {i}")
        elif isinstance(items_schema, Mapping):
            length = max(len(data), self.schema.get("minItems", 0))
            for i in range(length):
                entry = data[i] if i < len(data) else UNSET
                items.append(self._build_child(items_schema, entry, i))
        else:
            errors.extend(f"Unknown item: {i}" for i in range(len(data)))

        previous = (self.items, self.errors)
        self.items, self.errors = items, errors
        try:
            self.validate()
        except Exception:
            self.items, self.errors = previous
            raise
        logger.debug(f"Rebuilt {len(self.items)} item(s) at {format_path(self.path)}")
        return self

    def value(self) -> List[Any]:
        return [item.value() for item in self.items]

    def valid(self) -> bool:
        return not self.errors and all(item.valid() for item in self.items)

    def can_add_item(self) -> bool:
        """Whether another item fits under ``maxItems``."""
        return "maxItems" not in self.schema or self.schema["maxItems"] > len(self.items)

    def add_item(self, data: Any = UNSET) -> ArrayNode:
        """Append an item (undefined by default) and rebuild."""
        values = self.value()
        values.append(data)
        return self.set_data(values)

    def set_item(self, index: int, data: Any) -> ArrayNode:
        """Replace the item at ``index`` and rebuild."""
        values = self.value()
        values[index] = data
        return self.set_data(values)

    def remove_item(self, index: int) -> ArrayNode:
        """Delete the item at ``index`` and rebuild.

        Raises:
            IndexError: If there is no item at ``index``
        """
        values = self.value()
        del values[index]
        return self.set_data(values)

    def _build_child(self, schema: Any, data: Any, index: int) -> ValidatorNode:
        return self.binder.bind(schema, data, self.path + (index,))


class ObjectNode(ValidatorNode):
    """Node for ``type: object``, holding one child node per property."""

    kind = "object"
    inline = False

    def __init__(self, *args: Any, **kwargs: Any):
        self.properties: Dict[str, ValidatorNode] = {}
        super().__init__(*args, **kwargs)

    def children(self) -> Iterator[ValidatorNode]:
        return iter(self.properties.values())

    def set_data(self, data: Any) -> ObjectNode:
        errors: List[str] = []
        properties: Dict[str, ValidatorNode] = {}

        if data is UNSET or data is None:
            data = {}
        elif not isinstance(data, Mapping):
            errors.append("Must be an object")
            data = {}

        for key, entry in data.items():
            subschema = self.subschema(key)
            if subschema is None:
                errors.append(f"Unknown property: {key}")
                continue
            properties[key] = self._build_child(subschema, entry, key)

        for key in self.schema.get("required") or []:
            if key in data:
                continue
            subschema = self.subschema(key)
            if subschema is None:
                raise SchemaError(
                    f"Required property has no schema: {key}",
                    context={"property": key, "path": format_path(self.path)},
                )
            properties[key] = self._build_child(subschema, UNSET, key)

        # Assigned only once every child is bound
        self.properties, self.errors = properties, errors
        logger.debug(f"Rebuilt {len(self.properties)} properties at {format_path(self.path)}")
        return self

    def value(self) -> Dict[str, Any]:
        return {key: node.value() for key, node in self.properties.items()}

    def valid(self) -> bool:
        return not self.errors and all(node.valid() for node in self.properties.values())

    def subschema(self, key: str) -> Any:
        """Schema (as written) governing ``key``, or None if the key is unknown.

        Declared ``properties`` take precedence over an ``additionalProperties``
        schema; a boolean ``additionalProperties`` never admits a key.
        """
        declared = self.schema.get("properties") or {}
        if key in declared:
            return declared[key]
        additional = self.schema.get("additionalProperties")
        if isinstance(additional, Mapping):
            return additional
        return None

    def required(self, key: str) -> bool:
        """Whether ``key`` is listed in the schema's ``required``."""
        return key in (self.schema.get("required") or [])

    def label(self, key: str) -> str:
        """Display label for ``key``: its schema ``title`` or the key itself."""
        subschema = self.subschema(key)
        if subschema is None:
            return key
        return self.binder.resolver.resolve(subschema).get("title") or key

    def can_add_property(self) -> bool:
        """Whether keys beyond the declared properties are accepted."""
        return isinstance(self.schema.get("additionalProperties"), Mapping)

    def add_property(self, key: str, data: Any = UNSET) -> ObjectNode:
        """Add ``key`` (undefined by default) and rebuild."""
        values = self.value()
        values[key] = data
        return self.set_data(values)

    set_property = add_property

    def remove_property(self, key: str) -> ObjectNode:
        """Drop ``key`` and rebuild; a required key comes back undefined.

        Raises:
            KeyError: If the node has no such property
        """
        values = self.value()
        del values[key]
        return self.set_data(values)

    def _build_child(self, schema: Any, data: Any, key: str) -> ValidatorNode:
        return self.binder.bind(schema, data, self.path + (key,))


def _is_number(data: Any) -> bool:
    if isinstance(data, bool):
        return False
    if isinstance(data, int):
        return True
    return isinstance(data, float) and math.isfinite(data)


def _same_value(a: Any, b: Any) -> bool:
    # True == 1 in Python, but booleans and numbers are distinct JSON values
    if isinstance(a, bool) or isinstance(b, bool):
        return type(a) is type(b) and a == b
    if isinstance(a, Mapping) and isinstance(b, Mapping):
        return a.keys() == b.keys() and all(_same_value(a[key], b[key]) for key in a)
    if isinstance(a, (list, tuple)) and isinstance(b, (list, tuple)):
        return len(a) == len(b) and all(_same_value(x, y) for x, y in zip(a, b))
    return a == b
