"""
Runtime configuration for cargo-vanish.

Settings are resolved once from environment variables and validated with
pydantic. Command line options take precedence over anything resolved here;
this module only supplies the defaults.

Environment variables:
- CARGO_VANISH_DIRECTORY: default scan root (falls back to the home directory)
- LOG_LEVEL: default log level name
- CARGO_VANISH_CARGO / CARGO: cargo executable used for cleaning
- CARGO_VANISH_DELAY_MS: pause between progress updates on a terminal
"""

import functools
import os
import pathlib
from typing import Mapping

from pydantic import BaseModel, Field, field_validator

from cargo_vanish import utils

DEFAULT_CARGO = "cargo"
DEFAULT_DELAY_MS = 15


def _default_directory() -> pathlib.Path:
    return pathlib.Path.home()


class Settings(BaseModel):
    """Resolved defaults for a single invocation."""

    directory: pathlib.Path = Field(default_factory=_default_directory)
    log_level: str = "INFO"
    cargo: str = DEFAULT_CARGO
    delay_ms: int = Field(default=DEFAULT_DELAY_MS, ge=0)

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        value = value.strip().upper()
        if not utils.is_log_level(value):
            raise ValueError(f"Unknown log level: {value}")
        return value

    @field_validator("cargo")
    @classmethod
    def _validate_cargo(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Cargo executable must not be empty")
        return value

    @property
    def delay(self) -> float:
        """Progress delay in seconds."""
        return self.delay_ms / 1000

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> "Settings":
        """
        Build settings from environment variables.

        Unset or blank variables fall back to the model defaults.

        Args:
            environ: Mapping to read from, defaults to os.environ

        Raises:
            pydantic.ValidationError: If a variable holds an invalid value
        """
        if environ is None:
            environ = os.environ

        def _get(*keys: str) -> str | None:
            for key in keys:
                value = environ.get(key, "").strip()
                if value:
                    return value
            return None

        values = {
            "directory": _get("CARGO_VANISH_DIRECTORY"),
            "log_level": _get("LOG_LEVEL"),
            "cargo": _get("CARGO_VANISH_CARGO", "CARGO"),
            "delay_ms": _get("CARGO_VANISH_DELAY_MS"),
        }
        return cls(**{k: v for k, v in values.items() if v is not None})


@functools.cache
def settings() -> Settings:
    """Return the process-wide settings, resolved on first use."""
    return Settings.from_env()
