"""Container configuration for shapex."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from shapex.exceptions import ShapeXConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def _env_keys(value: str) -> frozenset[str]:
    return frozenset(part.strip().lower() for part in value.split(",") if part.strip())


@dataclasses.dataclass(frozen=True)
class ShapeXConfig:
    """Container configuration.

    Parameters
    ----------
    state_prefix : str
        Sentinel that marks a listener name as a state-change listener.
        ``"$"`` makes ``"$.counter"`` listen to changes of ``state["counter"]``.
    path_separator : str
        Separator between the sentinel and each key of a state path.
    log_state : bool
        Include (redacted) state snapshots in DEBUG log lines.  Off by
        default because states can be large.
    max_log_string : int
        Strings longer than this are truncated in log output.
    redact_keys : frozenset[str]
        Mapping keys (case-insensitive) whose values are replaced with
        ``"<redacted>"`` in log output.
    """

    state_prefix: str = "$"
    path_separator: str = "."
    log_state: bool = False
    max_log_string: int = 512
    redact_keys: frozenset[str] = dataclasses.field(default_factory=frozenset)

    def __post_init__(self) -> None:
        if not self.state_prefix:
            raise ShapeXConfigError("state_prefix must be non-empty")
        if not self.path_separator:
            raise ShapeXConfigError("path_separator must be non-empty")
        if self.path_separator in self.state_prefix:
            raise ShapeXConfigError(
                f"state_prefix {self.state_prefix!r} must not contain path_separator {self.path_separator!r}"
            )
        if self.max_log_string < 0:
            raise ShapeXConfigError("max_log_string must be >= 0")
        keys = {self.redact_keys} if isinstance(self.redact_keys, str) else self.redact_keys
        # Normalise so lookups in the redactor are case-insensitive.
        object.__setattr__(self, "redact_keys", frozenset(key.lower() for key in keys))

    @classmethod
    def from_env(cls, **overrides: Any) -> ShapeXConfig:
        """Create configuration from environment variables.

        Reads the optional ``SHAPEX_*`` variables.  Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        ShapeXConfig
            Populated configuration.
        """
        env = os.environ

        _ENV_CONFIG_MAP = {
            "SHAPEX_STATE_PREFIX": "state_prefix",
            "SHAPEX_PATH_SEPARATOR": "path_separator",
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, field_name in _ENV_CONFIG_MAP.items():
            val = env.get(env_key)
            if val is not None:
                config_kwargs[field_name] = val

        if "log_state" not in overrides:
            config_kwargs["log_state"] = _env_bool(env.get("SHAPEX_LOG_STATE"), False)

        max_string_env = env.get("SHAPEX_MAX_LOG_STRING")
        if max_string_env is not None and "max_log_string" not in overrides:
            try:
                config_kwargs["max_log_string"] = int(max_string_env)
            except ValueError as exc:
                raise ShapeXConfigError(f"SHAPEX_MAX_LOG_STRING must be an integer, got {max_string_env!r}") from exc

        redact_env = env.get("SHAPEX_REDACT_KEYS")
        if redact_env is not None and "redact_keys" not in overrides:
            config_kwargs["redact_keys"] = _env_keys(redact_env)

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
