"""Store configuration for attrstore."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from attrstore.exceptions import AttrStoreConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class StoreConfig:
    """Per-store configuration.

    Parameters
    ----------
    separator : str
        Text placed between the change event name and the attribute
        name for per-attribute events (``"change:name"``).
    change_event : str
        Name of the aggregate change event.
    deep_snapshots : bool
        Deep-copy attribute values into the previous-attributes
        snapshot.  The default shallow copy shares mutable values with
        the live mapping, so in-place mutation of a value is invisible
        to change detection.
    max_cycle_iterations : int or None
        Upper bound on aggregate emissions in one change cycle.
        ``None`` leaves the cycle unbounded.
    """

    separator: str = ":"
    change_event: str = "change"
    deep_snapshots: bool = False
    max_cycle_iterations: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.separator, str) or not self.separator:
            raise AttrStoreConfigError("separator must be a non-empty string")
        if not isinstance(self.change_event, str) or not self.change_event:
            raise AttrStoreConfigError("change_event must be a non-empty string")
        if self.max_cycle_iterations is not None and self.max_cycle_iterations < 1:
            raise AttrStoreConfigError("max_cycle_iterations must be >= 1 or None")

    def attribute_event(self, name: str) -> str:
        """Return the per-attribute event name for *name*."""
        return f"{self.change_event}{self.separator}{name}"

    @classmethod
    def from_env(cls, **overrides: Any) -> StoreConfig:
        """Create configuration from environment variables.

        Reads ``ATTRSTORE_SEPARATOR``, ``ATTRSTORE_CHANGE_EVENT``,
        ``ATTRSTORE_DEEP_SNAPSHOTS`` and ``ATTRSTORE_MAX_CYCLE_ITERATIONS``.
        Explicit keyword arguments override environment values.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "ATTRSTORE_SEPARATOR": "separator",
            "ATTRSTORE_CHANGE_EVENT": "change_event",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        if "deep_snapshots" not in overrides:
            config_kwargs["deep_snapshots"] = _env_bool(env.get("ATTRSTORE_DEEP_SNAPSHOTS"), False)

        iterations_env = env.get("ATTRSTORE_MAX_CYCLE_ITERATIONS")
        if iterations_env is not None and "max_cycle_iterations" not in overrides:
            value = iterations_env.strip()
            if value and value.lower() != "none":
                try:
                    config_kwargs["max_cycle_iterations"] = int(value)
                except ValueError as exc:
                    raise AttrStoreConfigError(
                        f"ATTRSTORE_MAX_CYCLE_ITERATIONS is not an integer: {iterations_env!r}"
                    ) from exc

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
