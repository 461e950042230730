"""Binder settings and their sources (dicts and environment variables)."""

import os
from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping

from .exceptions import SettingsError
from .resolver import DEFAULT_MAX_REFERENCE_HOPS

DEFAULT_MAX_DEPTH = 64


@dataclass(frozen=True)
class BinderSettings:
    """Limits applied while building validator trees.

    Attributes:
        max_depth: Deepest node path allowed; guards self-referential
            schemas whose required properties would nest forever
        max_reference_hops: Longest ``$ref`` chain followed for one schema
    """

    max_depth: int = DEFAULT_MAX_DEPTH
    max_reference_hops: int = DEFAULT_MAX_REFERENCE_HOPS

    ENV_PREFIX = "DATAKNOBS_JSONFORM_"

    def __post_init__(self) -> None:
        for field in fields(self):
            value = getattr(self, field.name)
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise SettingsError(
                    f"Setting '{field.name}' must be a positive integer, got {value!r}",
                    context={"setting": field.name, "value": value},
                )

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BinderSettings":
        """Create settings from a dictionary.

        Raises:
            SettingsError: If a key is unknown or a value is invalid
        """
        known = {field.name for field in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise SettingsError(
                f"Unknown setting(s): {', '.join(unknown)}",
                context={"unknown": unknown, "known": sorted(known)},
            )
        return cls(**dict(data))

    @classmethod
    def from_env(
        cls,
        prefix: str | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> "BinderSettings":
        """Create settings from environment variables.

        ``<PREFIX>MAX_DEPTH`` and ``<PREFIX>MAX_REFERENCE_HOPS`` override the
        defaults; the prefix defaults to ``DATAKNOBS_JSONFORM_``.
        """
        prefix = prefix or cls.ENV_PREFIX
        environ = os.environ if environ is None else environ

        overrides: Dict[str, Any] = {}
        for field in fields(cls):
            raw = environ.get(f"{prefix}{field.name.upper()}")
            if raw is None:
                continue
            try:
                overrides[field.name] = int(raw)
            except ValueError as e:
                raise SettingsError(
                    f"Environment variable {prefix}{field.name.upper()} must be an integer",
                    context={"setting": field.name, "value": raw},
                ) from e
        return cls(**overrides)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
