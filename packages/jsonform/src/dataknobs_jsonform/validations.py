"""Keyword checks used by the validator nodes.

Each table maps a schema keyword to a check function taking the keyword's
value and the node's current value and returning an error message, or
``None`` when the check passes. A node only runs the checks whose keyword
is present in its effective schema.
"""

import math
import re
from collections.abc import Mapping
from fractions import Fraction
from typing import Any, Callable, Dict, List

from .exceptions import SchemaError

Check = Callable[[Any, Any], "str | None"]


def _min_length(min_length: int, data: str) -> str | None:
    if len(data) < min_length:
        return f"Must be at least {min_length} characters"
    return None


def _max_length(max_length: int, data: str) -> str | None:
    if len(data) > max_length:
        return f"Must be at most {max_length} characters"
    return None


def _pattern(pattern: str, data: str) -> str | None:
    try:
        regex = re.compile(pattern)
    except re.error as e:
        raise SchemaError(
            f"Invalid pattern: {pattern}",
            context={"pattern": pattern, "error": str(e)},
        ) from e
    # Unanchored: a match anywhere in the string satisfies the pattern
    if regex.search(data) is None:
        return f"Must match pattern: {pattern}"
    return None


def _multiple_of(multiple_of: float, data: float) -> str | None:
    if multiple_of <= 0:
        raise SchemaError(
            f"'multipleOf' must be greater than 0, got {multiple_of}",
            context={"multipleOf": multiple_of},
        )
    if isinstance(data, int) and isinstance(multiple_of, int):
        is_multiple = data % multiple_of == 0
    else:
        try:
            quotient = data / multiple_of
        except OverflowError:
            # An int operand too large for a float; compare exactly
            quotient = None
        if quotient is None:
            is_multiple = Fraction(data) % Fraction(multiple_of) == 0
        elif math.isinf(quotient):
            # Past float precision every quotient is integral
            is_multiple = True
        else:
            is_multiple = math.isclose(quotient, round(quotient), rel_tol=0.0, abs_tol=1e-9)
    if not is_multiple:
        return f"Must be a multiple of {multiple_of}"
    return None


def _maximum(maximum: float, data: float) -> str | None:
    if data > maximum:
        return f"Must be less than or equal to {maximum}"
    return None


def _minimum(minimum: float, data: float) -> str | None:
    if data < minimum:
        return f"Must be greater than or equal to {minimum}"
    return None


def _exclusive_maximum(exclusive_maximum: float, data: float) -> str | None:
    if data >= exclusive_maximum:
        return f"Must be less than {exclusive_maximum}"
    return None


def _exclusive_minimum(exclusive_minimum: float, data: float) -> str | None:
    if data <= exclusive_minimum:
        return f"Must be greater than {exclusive_minimum}"
    return None


def _min_items(min_items: int, data: list) -> str | None:
    if len(data) < min_items:
        return f"Must have at least {min_items} items"
    return None


def _max_items(max_items: int, data: list) -> str | None:
    if len(data) > max_items:
        return f"Must have at most {max_items} items"
    return None


STRING_CHECKS: Dict[str, Check] = {
    "minLength": _min_length,
    "maxLength": _max_length,
    "pattern": _pattern,
}

NUMBER_CHECKS: Dict[str, Check] = {
    "multipleOf": _multiple_of,
    "maximum": _maximum,
    "minimum": _minimum,
    "exclusiveMaximum": _exclusive_maximum,
    "exclusiveMinimum": _exclusive_minimum,
}

ARRAY_CHECKS: Dict[str, Check] = {
    "minItems": _min_items,
    "maxItems": _max_items,
}


def run_checks(checks: Mapping[str, Check], schema: Mapping[str, Any], value: Any) -> List[str]:
    """Run every check whose keyword appears in ``schema``.

    Args:
        checks: Keyword check table
        schema: Effective schema of the node
        value: Current value of the node

    Returns:
        Error messages in table order (empty when all checks pass)
    """
    errors = []
    for keyword, check in checks.items():
        if keyword in schema:
            error = check(schema[keyword], value)
            if error:
                errors.append(error)
    return errors
