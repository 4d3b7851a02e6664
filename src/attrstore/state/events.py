"""Change-tracking types shared by the store and its listeners."""

from __future__ import annotations

import enum
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ChangeState(enum.Flag):
    """Per-attribute change bookkeeping.

    ``CHANGED``: differs from the previous-attributes snapshot.
    ``PENDING``: a loud change still owes an aggregate ``change`` event.
    ``SILENT``: a silent change has not been surfaced yet.
    """

    SETTLED = 0
    CHANGED = enum.auto()
    PENDING = enum.auto()
    SILENT = enum.auto()


UNFLUSHED = ChangeState.PENDING | ChangeState.SILENT


class SetOptions(BaseModel):
    """Options of a ``set``/``unset`` call, handed to every listener it triggers.

    Flags the store does not know about are kept, so callers can tag
    updates (e.g. ``source="sync"``) and listeners can read them back.
    """

    model_config = ConfigDict(frozen=True, extra="allow")

    silent: bool = False
    unset: bool = False
    changes: tuple[str, ...] = Field(
        default=(),
        description="Names whose current value was changed by the triggering call",
    )

    @field_validator("silent", "unset", mode="before")
    @classmethod
    def _nullish_flag_is_false(cls, value: Any) -> Any:
        return False if value is None else value

    @field_validator("changes", mode="before")
    @classmethod
    def _coerce_changes(cls, value: Any) -> Any:
        if value is None:
            return ()
        if isinstance(value, Mapping):
            return tuple(value)
        return value

    @classmethod
    def coerce(cls, options: SetOptions | Mapping[str, Any] | None = None, **flags: Any) -> SetOptions:
        """Merge *options* and keyword *flags* into a new ``SetOptions``.

        Keyword flags win over values carried by *options*.
        """
        if options is None:
            if not flags:
                return cls()
            base: dict[str, Any] = {}
        elif isinstance(options, SetOptions):
            if not flags:
                return options
            base = options.model_dump()
        elif isinstance(options, Mapping):
            base = dict(options)
        else:
            raise TypeError(f"options must be SetOptions, a mapping or None, got {type(options).__name__}")
        base.update(flags)
        return cls.model_validate(base)

    def with_changes(self, changes: tuple[str, ...]) -> SetOptions:
        return self.model_copy(update={"changes": changes})
