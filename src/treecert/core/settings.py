"""
Central configuration for treecert.

This module provides a single, typed configuration object that reads from
environment variables (12-factor style) using pydantic-settings.

Usage:

    from treecert.core.settings import get_settings

    settings = get_settings()
    algorithm = settings.hash_algorithm
"""

from __future__ import annotations

import logging
from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ROOT_LOGGER_NAME = "treecert"


class TreeCertSettings(BaseSettings):
    """
    Root configuration object for treecert.

    Only ambient concerns live here: the hash algorithm used when a caller
    does not pass one explicitly, and the package log level.
    """

    model_config = SettingsConfigDict(env_prefix="TREECERT_")

    hash_algorithm: str = Field(
        default="SHA-1",
        description="Digest algorithm for leaves and nodes (e.g. SHA-1, SHA-256).",
    )
    log_level: str = Field(
        default="WARNING",
        description="Package log level (DEBUG/INFO/WARNING/ERROR).",
    )

    @field_validator("hash_algorithm")
    @classmethod
    def _strip_hash_algorithm(cls, v: str) -> str:
        # Unknown or blank names are rejected by HashAlgorithm when first used.
        return (v or "").strip()

    @field_validator("log_level")
    @classmethod
    def _normalize_log_level(cls, v: str) -> str:
        v = (v or "WARNING").strip().upper()
        if v == "WARN":
            v = "WARNING"
        if not isinstance(logging.getLevelName(v), int):
            return "WARNING"
        return v


@lru_cache(maxsize=1)
def get_settings() -> TreeCertSettings:
    """
    Cached accessor for TreeCertSettings.

    The configured log level is applied to the package root logger each
    time settings are (re)loaded. Call ``get_settings.cache_clear()`` after
    changing the environment.
    """
    settings = TreeCertSettings()
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(settings.log_level)
    return settings
