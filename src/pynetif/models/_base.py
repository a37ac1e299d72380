"""Base model and enums for interface records.

Every record model inherits from :class:`NetifBaseModel` which provides:

* frozen instances, so snapshots handed to consumers are read-only;
* a ``model_validator(mode="before")`` that strips placeholder values
  (``""``, ``"--"``, ``"N/A"``) so the field default is used instead.

State enums inherit from :class:`NetifEnum` which resolves values
case-insensitively and falls back to ``UNKNOWN`` for anything unmapped.
"""

from __future__ import annotations

import enum
from typing import Any

from pydantic import BaseModel, ConfigDict, model_validator

# Placeholder strings the OS tools print for "not available".
_SENTINELS = frozenset({"", "--", "n/a", "N/A"})


class NetifEnum(enum.StrEnum):
    """Base for state enums.

    Every subclass **must** define ``UNKNOWN``.
    """

    @classmethod
    def _missing_(cls, value: object) -> NetifEnum:
        if isinstance(value, str):
            folded = value.strip().casefold()
            for member in cls:
                if member.value.casefold() == folded:
                    return member
        unknown: NetifEnum = cls.UNKNOWN  # type: ignore[attr-defined]
        return unknown


class NetifBaseModel(BaseModel):
    """Base for record models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
        str_strip_whitespace=True,
    )

    @model_validator(mode="before")
    @classmethod
    def _drop_placeholders(cls, values: Any) -> Any:
        if not isinstance(values, dict):
            return values
        cleaned: dict[str, Any] = {}
        for key, value in values.items():
            if value is None:
                continue
            if isinstance(value, str) and value.strip() in _SENTINELS:
                continue
            cleaned[key] = value
        return cleaned
