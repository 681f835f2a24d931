from __future__ import annotations

import logging
import os
from functools import lru_cache
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, PositiveInt, field_validator
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from blake3_session import __version__
from blake3_session.constants import DEFAULT_DIGEST_SIZE, MAX_DIGEST_SIZE, MIN_DIGEST_SIZE
from blake3_session.utils.logging import OperationIdFilter, setup_operation_id_logging

ENV_VAR = "BLAKE3_SESSION_ENV"

_DEFAULT_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(operation_id)s] %(message)s"


class SessionConfig(BaseModel):
    """Defaults and policies applied to new hash sessions."""

    default_digest_size: int = Field(
        DEFAULT_DIGEST_SIZE, ge=MIN_DIGEST_SIZE, le=MAX_DIGEST_SIZE
    )
    finalize_policy: Literal["repeatable", "one_shot"] = Field(
        "repeatable",
        description=(
            "`repeatable` allows update after digest; `one_shot` rejects "
            "update once any output has been produced."
        ),
    )
    advisory_params: Literal["ignore", "reject"] = Field(
        "ignore",
        description="What to do with non-default `usedforsecurity`/`max_threads` values.",
    )
    file_chunk_size: PositiveInt = 1 << 20

    model_config = ConfigDict(frozen=True)

    @property
    def max_digest_size(self) -> int:
        return MAX_DIGEST_SIZE


class MonitoringConfig(BaseModel):
    """Logging configuration."""

    log_level: str = "INFO"
    log_format: str = _DEFAULT_LOG_FORMAT

    model_config = ConfigDict(frozen=True)

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"unknown log level: {value}")
        return level


class UnifiedSettings(BaseSettings):
    """
    Aggregate all configuration sections.

    Environment variables use the ``BLAKE3_SESSION_`` prefix and ``__`` to
    reach nested fields, e.g. ``BLAKE3_SESSION_SESSION__FINALIZE_POLICY``.
    They take precedence over profile defaults passed to the constructor.
    """

    version: str = __version__
    profile: str = "default"
    session: SessionConfig = SessionConfig()
    monitoring: MonitoringConfig = MonitoringConfig()

    model_config = SettingsConfigDict(
        env_prefix="BLAKE3_SESSION_",
        env_nested_delimiter="__",
        extra="ignore",
        frozen=True,
    )

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        # Environment overrides the profile values passed as init kwargs.
        return env_settings, init_settings, dotenv_settings, file_secret_settings

    @classmethod
    def for_testing(cls) -> UnifiedSettings:
        return cls(
            profile="testing",
            session={"file_chunk_size": 4_096},
            monitoring={"log_level": "DEBUG"},
        )

    @classmethod
    def for_production(cls) -> UnifiedSettings:
        return cls(
            profile="production",
            session={"advisory_params": "reject"},
            monitoring={"log_level": "WARNING"},
        )

    @classmethod
    def for_development(cls) -> UnifiedSettings:
        return cls(profile="development", monitoring={"log_level": "DEBUG"})

    def summary(self) -> dict[str, Any]:
        """Flat view of the effective settings, used by ``blake3-session info``."""
        return {
            "version": self.version,
            "profile": self.profile,
            **{f"session.{k}": v for k, v in self.session.model_dump().items()},
            "session.max_digest_size": self.session.max_digest_size,
            "monitoring.log_level": self.monitoring.log_level,
        }


def configure_logging(settings: UnifiedSettings | None = None, *, level: str | None = None) -> None:
    settings = settings or get_settings()
    name = (level or settings.monitoring.log_level).upper()
    numeric = getattr(logging, name, logging.INFO)
    setup_operation_id_logging()
    logging.basicConfig(level=numeric, format=settings.monitoring.log_format)
    logging.getLogger("blake3_session").setLevel(numeric)
    root = logging.getLogger()
    if not any(isinstance(f, OperationIdFilter) for f in root.filters):
        root.addFilter(OperationIdFilter())


@lru_cache(maxsize=8)
def _settings_for(env: str) -> UnifiedSettings:
    if env == "production":
        return UnifiedSettings.for_production()
    if env == "testing":
        return UnifiedSettings.for_testing()
    if env == "development":
        return UnifiedSettings.for_development()
    return UnifiedSettings()


def get_settings(env: str | None = None) -> UnifiedSettings:
    """Return the (cached) settings for *env*, defaulting to ``$BLAKE3_SESSION_ENV``."""
    return _settings_for(env or os.getenv(ENV_VAR, "default"))


def reset_settings_cache() -> None:
    """Forget cached settings so environment changes are picked up."""
    _settings_for.cache_clear()


__all__ = [
    "ENV_VAR",
    "MonitoringConfig",
    "SessionConfig",
    "UnifiedSettings",
    "configure_logging",
    "get_settings",
    "reset_settings_cache",
]
