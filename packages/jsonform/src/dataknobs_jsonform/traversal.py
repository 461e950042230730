"""Path-based traversal over validator trees."""

from typing import Any, Dict, Iterator, List, Tuple

from .nodes import ArrayNode, ObjectNode, ValidatorNode
from .pointer import format_path


def iter_nodes(node: ValidatorNode) -> Iterator[ValidatorNode]:
    """Depth-first, pre-order iteration over ``node`` and its descendants."""
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(list(current.children())))


def iter_errors(node: ValidatorNode) -> Iterator[Tuple[Tuple[Any, ...], str]]:
    """Yield ``(path, message)`` for every error anywhere in the tree."""
    for current in iter_nodes(node):
        for message in current.errors:
            yield current.path, message


def collect_errors(node: ValidatorNode) -> Dict[str, List[str]]:
    """Errors of the whole tree keyed by jq-style path (``.a[0].b``).

    Example:
        >>> collect_errors(build(schema, {"age": "old"}))
        {'.age': ['Must be a number']}
    """
    result: Dict[str, List[str]] = {}
    for path, message in iter_errors(node):
        result.setdefault(format_path(path), []).append(message)
    return result


def find_node(node: ValidatorNode, path: Tuple[Any, ...]) -> ValidatorNode:
    """Return the descendant of ``node`` at ``path`` (relative to ``node``).

    Raises:
        KeyError: If no node exists at ``path``
    """
    current = node
    for step in path:
        if isinstance(current, ObjectNode) and step in current.properties:
            current = current.properties[step]
        elif (
            isinstance(current, ArrayNode)
            and isinstance(step, int)
            and 0 <= step < len(current.items)
        ):
            current = current.items[step]
        else:
            raise KeyError(f"No node at {format_path(tuple(path))}")
    return current
