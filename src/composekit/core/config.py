"""
Centralized settings for composekit.

:class:`ComposeSettings` is the single validated, cached source of the few
knobs the framework has: logging, prefetch timeout and pool size for the
concurrent router, and whether strategy registries consult their discovery
collaborator.

All fields can be set through ``COMPOSEKIT_*`` environment variables or a
``.env`` file, e.g. ``COMPOSEKIT_PREFETCH_TIMEOUT_SECONDS=2.5``.

Tags:
    composekit, configuration, settings, pydantic, caching

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class ComposeSettings(BaseSettings):
    """composekit configuration."""

    model_config = SettingsConfigDict(
        env_prefix="COMPOSEKIT_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # ── Logging ──────────────────────────────────────────────────
    log_level: str = Field(default="INFO")
    log_format: Literal["json", "console"] = Field(default="json")

    # ── Concurrent router ────────────────────────────────────────
    prefetch_timeout_seconds: float = Field(
        default=5.0, gt=0, description="Default wait for prefetch tasks"
    )
    prefetch_max_workers: int = Field(
        default=4, ge=1, description="Thread pool size used by prefetch()"
    )

    # ── Strategy registry ────────────────────────────────────────
    discovery_enabled: bool = Field(
        default=True, description="Consult the discovery collaborator at construction"
    )

    @field_validator("log_level")
    @classmethod
    def _normalize_level(cls, value: str) -> str:
        level = value.upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {value}")
        return level


_settings_cache: dict[str, ComposeSettings] = {}


def get_settings(*, _force_reload: bool = False) -> ComposeSettings:
    """Load, validate, and cache a :class:`ComposeSettings` instance."""
    if _force_reload or "default" not in _settings_cache:
        _settings_cache["default"] = ComposeSettings()
    return _settings_cache["default"]


def reset_settings() -> None:
    """Drop the cached settings (for testing)."""
    _settings_cache.clear()


__all__ = ["ComposeSettings", "get_settings", "reset_settings"]
