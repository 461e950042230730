"""Building validator trees from a schema and a data value.

``SchemaBinder`` owns everything shared by the nodes of one tree: the root
document, the resolver for its ``$ref`` pointers, the kind registry and
the settings. Composite nodes build their children through the binder
that built them.

Example:
    ```python
    from dataknobs_jsonform import build

    node = build(
        {
            "type": "object",
            "properties": {"name": {"type": "string", "minLength": 1}},
            "required": ["name"],
        },
        {},
    )
    node.valid()                       # False
    node.properties["name"].errors     # ['Must be at least 1 characters']
    node.set_data({"name": "Homer"}).value()
    # {'name': 'Homer'}
    ```
"""

import logging
from typing import Any, Mapping, Tuple

from .exceptions import SchemaRecursionError
from .kinds import KindRegistry, default_registry
from .nodes import UNSET, ValidatorNode
from .pointer import format_path
from .resolver import SchemaResolver
from .settings import BinderSettings

logger = logging.getLogger(__name__)


class SchemaBinder:
    """Constructs validator nodes for schemas within one root document.

    Args:
        root: Root schema document
        registry: Kind registry (defaults to the canonical catalogue)
        settings: Recursion limits (defaults to ``BinderSettings()``)
    """

    def __init__(
        self,
        root: Mapping[str, Any],
        registry: KindRegistry | None = None,
        settings: BinderSettings | None = None,
    ) -> None:
        self.root = root
        self.registry = registry or default_registry()
        self.settings = settings or BinderSettings()
        self.resolver = SchemaResolver(root, self.settings.max_reference_hops)

    def bind(self, schema: Any, data: Any = UNSET, path: Tuple[Any, ...] = ()) -> ValidatorNode:
        """Resolve ``schema``, pick its kind and build a node holding ``data``.

        Args:
            schema: Schema as written (``$ref``/``allOf`` allowed)
            data: Initial value; ``UNSET`` falls back to the schema default
            path: Location of the node within the data value

        Returns:
            A fully validated node

        Raises:
            SchemaError: If the schema is broken, unclassifiable or recursive
        """
        path = tuple(path)
        if len(path) > self.settings.max_depth:
            raise SchemaRecursionError(
                f"Schema recursion too deep at {format_path(path)}",
                context={"path": list(path), "max_depth": self.settings.max_depth},
            )

        effective = self.resolver.resolve(schema)
        kind = self.registry.classify(effective)
        logger.debug(f"Binding {kind.name} node at {format_path(path)}")
        return kind.node_class(effective, data, root=self.root, path=path, binder=self)


def build(
    schema: Any,
    data: Any = UNSET,
    root: Mapping[str, Any] | None = None,
    path: Tuple[Any, ...] = (),
    *,
    registry: KindRegistry | None = None,
    settings: BinderSettings | None = None,
) -> ValidatorNode:
    """Build a validator tree for ``data`` against ``schema``.

    Args:
        schema: Schema to bind
        data: Initial value (omit for "no value")
        root: Document ``$ref`` pointers resolve against; defaults to ``schema``
        path: Location of the node, empty for a top-level call
        registry: Optional custom kind registry
        settings: Optional recursion limits

    Returns:
        The root validator node
    """
    binder = SchemaBinder(schema if root is None else root, registry=registry, settings=settings)
    return binder.bind(schema, data, path)
