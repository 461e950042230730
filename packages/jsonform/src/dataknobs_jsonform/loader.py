"""Loading schema and data documents from JSON or YAML files.

Example:
    ```python
    loader = SchemaLoader("./schemas")
    schema = loader.load("person.yaml")
    node = build(schema, loader.load("homer.json"))
    ```
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

import yaml

from .exceptions import SchemaLoadError

logger = logging.getLogger(__name__)

YAML_SUFFIXES = (".yaml", ".yml")


def load_document(path: str | Path) -> Any:
    """Parse a JSON or YAML file.

    Files ending in ``.yaml``/``.yml`` are parsed with ``yaml.safe_load``;
    anything else is parsed as JSON.

    Raises:
        SchemaLoadError: If the file is missing or cannot be parsed
    """
    path = Path(path)
    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() in YAML_SUFFIXES:
                return yaml.safe_load(f)
            return json.load(f)
    except OSError as e:
        raise SchemaLoadError(
            f"Cannot read {path}: {e}",
            context={"path": str(path)},
        ) from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise SchemaLoadError(
            f"Cannot parse {path}: {e}",
            context={"path": str(path)},
        ) from e


class SchemaLoader:
    """Caching loader for schema documents.

    Attributes:
        base_dir: Directory relative paths are resolved against
    """

    def __init__(self, base_dir: str | Path | None = None):
        self.base_dir = Path(base_dir) if base_dir else Path(".")
        self._cache: Dict[Path, Any] = {}

    def load(self, path: str | Path, use_cache: bool = True) -> Any:
        """Load a document, reusing a cached parse when available.

        Args:
            path: File path, absolute or relative to ``base_dir``
            use_cache: Whether to return a previously loaded document

        Returns:
            The parsed document
        """
        resolved = (self.base_dir / path).resolve()
        if use_cache and resolved in self._cache:
            logger.debug(f"Returning cached document {resolved}")
            return self._cache[resolved]

        document = load_document(resolved)
        self._cache[resolved] = document
        logger.debug(f"Loaded document {resolved}")
        return document

    def clear_cache(self) -> None:
        self._cache.clear()
