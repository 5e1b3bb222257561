"""Program configuration passed explicitly into the command loop."""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from typing import Mapping, Optional

from led_engine.buffer import DEFAULT_CAPACITY

ENV_PREFIX = "LED_ENGINE_"


class ConfigError(ValueError):
    """Raised for invalid startup options."""


@dataclass(frozen=True, slots=True)
class Config:
    """Startup options for one editing session.

    ``file_path`` is the backing file (``None`` edits an unnamed buffer),
    ``input_path`` an optional file to read commands from instead of stdin,
    and ``buffer_length`` the number of line slots allocated up front.
    """

    program_name: str = "led"
    file_path: Optional[str] = None
    input_path: Optional[str] = None
    buffer_length: int = DEFAULT_CAPACITY

    def __post_init__(self) -> None:
        if self.buffer_length < 1:
            raise ConfigError("invalid buffer length")

    @classmethod
    def from_env(
        cls, environ: Optional[Mapping[str, str]] = None, **overrides: object
    ) -> "Config":
        env = os.environ if environ is None else environ
        raw = env.get(f"{ENV_PREFIX}BUFFER_LENGTH")
        values: dict[str, object] = {}
        if raw:
            try:
                values["buffer_length"] = int(raw)
            except ValueError as exc:
                raise ConfigError("invalid buffer length") from exc
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)  # type: ignore[arg-type]

    def with_file(self, path: Optional[str]) -> "Config":
        return replace(self, file_path=path)


__all__ = ["Config", "ConfigError", "ENV_PREFIX"]
