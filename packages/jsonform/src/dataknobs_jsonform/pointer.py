"""Root-relative ``$ref`` pointers and node path formatting.

Only fragment pointers into the root document are supported
(``#``, ``#/properties/name``, ``#/items/0``). External documents and
named anchors are not resolved.
"""

import logging
from collections.abc import Mapping, Sequence
from typing import Any, Tuple
from urllib.parse import unquote

from .exceptions import BrokenReferenceError

logger = logging.getLogger(__name__)

PathTuple = Tuple[Any, ...]


def split_pointer(uri: str) -> list[str]:
    """Split a ``$ref`` URI into unescaped fragment segments.

    Args:
        uri: Reference such as ``"#/properties/name"``

    Returns:
        List of segments, empty for a reference to the whole document

    Raises:
        BrokenReferenceError: If the URI has no fragment part
    """
    if not isinstance(uri, str) or "#" not in uri:
        raise BrokenReferenceError(
            f"Unsupported reference (only '#' fragments are resolved): {uri}",
            context={"ref": uri},
        )

    fragment = uri.split("#", 1)[1]
    if not fragment:
        return []

    # First segment is always '' because fragments start with '/'
    segments = fragment.split("/")[1:]
    return [unquote(s).replace("~1", "/").replace("~0", "~") for s in segments]


def resolve_pointer(uri: str, root: Any) -> Any:
    """Walk ``root`` following the fragment of ``uri``.

    Args:
        uri: Reference such as ``"#/definitions/address"``
        root: Root schema document

    Returns:
        The referenced sub-document

    Raises:
        BrokenReferenceError: If any segment is missing from the document
    """
    target = root
    for segment in split_pointer(uri):
        if isinstance(target, Mapping):
            if segment not in target:
                raise BrokenReferenceError(
                    f"Broken reference: {uri}",
                    context={"ref": uri, "segment": segment},
                )
            target = target[segment]
        elif isinstance(target, Sequence) and not isinstance(target, str):
            if not segment.isdigit() or int(segment) >= len(target):
                raise BrokenReferenceError(
                    f"Broken reference: {uri}",
                    context={"ref": uri, "segment": segment, "length": len(target)},
                )
            target = target[int(segment)]
        else:
            raise BrokenReferenceError(
                f"Broken reference: {uri}",
                context={"ref": uri, "segment": segment},
            )

    logger.debug(f"Resolved reference {uri}")
    return target


def build_pointer(path: PathTuple) -> str:
    """Render a path tuple as a ``#/a/0/b`` fragment pointer."""
    escaped = [str(p).replace("~", "~0").replace("/", "~1") for p in path]
    return "#" + "".join(f"/{p}" for p in escaped)


def format_path(path: PathTuple) -> str:
    """Render a path tuple jq-style, e.g. ``('a', 0, 'b')`` -> ``.a[0].b``.

    The root path renders as ``"."``.
    """
    if not path:
        return "."
    result = ""
    for elt in path:
        if isinstance(elt, int):
            result += f"[{elt}]"
        else:
            result += f".{elt}"
    return result
