#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Base classes for renderer options.

Options are frozen dataclasses. Each field carries ``metadata`` with a help
string and, for enumerated settings, the allowed ``choices``; validation
runs in ``__post_init__`` and raises ValueError.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from dataclasses import dataclass, fields, replace
from typing import Any

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from mdtree.constants import OPTION_ALIASES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseRendererOptions(CloneFrozenMixin):
    """Base class for all renderer options.

    Notes
    -----
    Subclasses define format-specific rendering options as frozen dataclass
    fields. Fields whose metadata declares ``choices`` are checked by
    :meth:`__post_init__`.

    """

    def __post_init__(self) -> None:
        """Validate enumerated fields against their declared choices.

        Raises
        ------
        ValueError
            If a field value is not one of its ``choices``.

        """
        for f in fields(self):
            choices = f.metadata.get("choices")
            if choices is None:
                continue
            value = getattr(self, f.name)
            if value not in choices:
                raise ValueError(f"{f.name} must be one of {', '.join(map(repr, choices))}, got {value!r}")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any]) -> Self:
        """Build options from a plain mapping.

        Keys may use either the camelCase names from :data:`OPTION_ALIASES`
        or the snake_case field names. Unknown keys are ignored.

        Parameters
        ----------
        mapping : Mapping
            Option values, typically loaded from a configuration file

        Returns
        -------
        Self
            New options instance

        Raises
        ------
        ValueError
            If a recognized option has an invalid value

        """
        known = {f.name for f in fields(cls) if f.init}
        kwargs: dict[str, Any] = {}
        for key, value in mapping.items():
            name = OPTION_ALIASES.get(key, key)
            if name not in known:
                logger.debug(f"Ignoring unknown option '{key}'")
                continue
            kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self) -> dict[str, Any]:
        """Return the option values keyed by field name."""
        return {f.name: getattr(self, f.name) for f in fields(self)}
