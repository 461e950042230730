"""Exception hierarchy for the jsonform package.

Two families of problems exist when binding data to a schema:

- Schema defects (broken ``$ref`` pointers, schemas no validator kind
  accepts, unbounded recursion). These abort tree construction and are
  raised as ``SchemaError`` subclasses.
- Validation findings (keyword violations, unknown properties). These are
  never raised; they are recorded as messages on the node's ``errors`` list.

Every exception carries an optional context dictionary with the details
needed to locate the defect.

Example:
    ```python
    from dataknobs_jsonform import build, SchemaError

    try:
        node = build({"$ref": "#/missing"}, {})
    except SchemaError as e:
        logger.error(f"Bad schema: {e}")
        if e.context:
            logger.error(f"Context: {e.context}")
    ```
"""

from typing import Any, Dict


class JsonFormError(Exception):
    """Base exception for the jsonform package.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context (ref, path, etc.)
        details: Alternative to context (takes precedence when both are given)
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.context = details or context or {}
        self.details = self.context


class SchemaError(JsonFormError):
    """Raised when a schema cannot be turned into a validator tree.

    Schema errors are construction-fatal: the caller is expected to treat
    them as schema-authoring defects rather than bad user data.
    """

    pass


class BrokenReferenceError(SchemaError):
    """Raised when a ``$ref`` pointer cannot be walked to a target.

    Example:
        ```python
        raise BrokenReferenceError(
            "Broken reference: #/definitions/address",
            context={"ref": "#/definitions/address", "segment": "definitions"},
        )
        ```
    """

    pass


class UnclassifiableSchemaError(SchemaError):
    """Raised when no validator kind accepts an effective schema."""

    pass


class SchemaRecursionError(SchemaError):
    """Raised when reference resolution or tree nesting does not terminate."""

    pass


class RegistryError(JsonFormError):
    """Raised when a validator kind cannot be registered or looked up."""

    pass


class SchemaLoadError(JsonFormError):
    """Raised when a schema or data document cannot be read or parsed."""

    pass


class SettingsError(JsonFormError):
    """Raised when binder settings are invalid."""

    pass


__all__ = [
    "JsonFormError",
    "SchemaError",
    "BrokenReferenceError",
    "UnclassifiableSchemaError",
    "SchemaRecursionError",
    "RegistryError",
    "SchemaLoadError",
    "SettingsError",
]
