"""Configuration: environment-resolved retry defaults.

Raw ``QUIETRETRY_*`` values are validated by a pydantic schema, then frozen
into ``Config``. A ``.env`` file in the working directory is loaded once, the
first time ``Config.from_env()`` reads the process environment.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import os
from typing import TYPE_CHECKING, Any

from dotenv import find_dotenv, load_dotenv
from pydantic import BaseModel, Field, ValidationError, field_validator

from quietretry.errors import ConfigurationError
from quietretry.history import DEFAULT_CAPACITY, ErrorHistory
from quietretry.retry import RetryPolicy

if TYPE_CHECKING:
    from collections.abc import Mapping

ENV_PREFIX = "QUIETRETRY_"
_OFF_LEVELS = frozenset({"OFF", "NONE", ""})

_DOTENV_LOADED: bool = False


def _load_dotenv_once() -> None:
    global _DOTENV_LOADED
    if _DOTENV_LOADED:
        return
    _DOTENV_LOADED = True
    # Existing environment variables win over the file.
    load_dotenv(find_dotenv(usecwd=True))


class Settings(BaseModel):
    """Validation schema for configuration values."""

    max_attempts: int = Field(default=3, ge=1)
    backoff_base: float = Field(default=2.0, gt=0)
    delay_unit_s: float = Field(default=1.0, ge=0)
    log_level: int | None = Field(default=logging.DEBUG)
    history_capacity: int = Field(default=DEFAULT_CAPACITY, ge=1)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        """Accept level names ("debug", "WARNING"), numbers, or OFF/NONE."""
        if v is None or isinstance(v, int):
            return v
        if isinstance(v, str):
            s = v.strip().upper()
            if s in _OFF_LEVELS:
                return None
            if s.isdigit():
                return int(s)
            level = logging.getLevelNamesMapping().get(s)
            if level is None:
                raise ValueError(f"unknown log level {v!r}")
            return level
        return v


@dataclass(frozen=True)
class Config:
    """Immutable retry defaults.

    Example:
        config = Config.from_env()
        outcome = invoke_with_retry(op, policy=config.retry_policy())
    """

    max_attempts: int = 3
    backoff_base: float = 2.0
    delay_unit_s: float = 1.0
    log_level: int | None = logging.DEBUG
    history_capacity: int = DEFAULT_CAPACITY

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> Config:
        """Resolve configuration from ``QUIETRETRY_*`` environment variables.

        An explicit *environ* mapping is used as-is, without reading ``.env``.
        """
        if environ is None:
            _load_dotenv_once()
        env = os.environ if environ is None else environ
        raw = {
            name: env[ENV_PREFIX + name.upper()]
            for name in Settings.model_fields
            if ENV_PREFIX + name.upper() in env
        }
        try:
            settings = Settings(**raw)
        except ValidationError as exc:
            fields = sorted(
                ENV_PREFIX + str(err["loc"][0]).upper() for err in exc.errors()
            )
            raise ConfigurationError(
                f"Invalid configuration: {', '.join(fields)}",
                hint=str(exc),
            ) from exc
        return cls(**settings.model_dump())

    def retry_policy(self) -> RetryPolicy:
        return RetryPolicy(
            max_attempts=self.max_attempts,
            backoff_base=self.backoff_base,
            delay_unit_s=self.delay_unit_s,
            log_level=self.log_level,
        )

    def error_history(self) -> ErrorHistory:
        """Create an empty history sized to ``history_capacity``."""
        return ErrorHistory(self.history_capacity)

    def __str__(self) -> str:
        """Return a compact, developer-friendly representation."""
        level = (
            logging.getLevelName(self.log_level) if self.log_level is not None else "OFF"
        )
        return (
            f"Config(max_attempts={self.max_attempts}, backoff_base={self.backoff_base}, "
            f"delay_unit_s={self.delay_unit_s}, log_level={level}, "
            f"history_capacity={self.history_capacity})"
        )

    __repr__ = __str__
