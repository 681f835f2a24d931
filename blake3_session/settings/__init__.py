"""Settings package providing configuration models for BLAKE3 sessions."""

from .core import (
    ENV_VAR,
    MonitoringConfig,
    SessionConfig,
    UnifiedSettings,
    configure_logging,
    get_settings,
    reset_settings_cache,
)

__all__ = [
    "ENV_VAR",
    "MonitoringConfig",
    "SessionConfig",
    "UnifiedSettings",
    "configure_logging",
    "get_settings",
    "reset_settings_cache",
]
