"""Coordinator configuration sourced from environment."""

from __future__ import annotations

import os
from dataclasses import dataclass

from coordinator_kit.api.navigation import DEFAULT_MAX_NAVIGATION_DEPTH


def _flag(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


@dataclass(frozen=True, slots=True)
class CoordinatorConfig:
    """Immutable coordinator defaults."""

    max_navigation_depth: int = DEFAULT_MAX_NAVIGATION_DEPTH
    strict_start: bool = False
    debug_actions: bool = False
    log_level: str = "INFO"


def resolve_log_level_name(default: str = "INFO") -> str:
    """Resolve log level with coordinator-prefixed override."""
    value = os.getenv("COORDINATOR_LOG_LEVEL")
    if value is None:
        value = os.getenv("LOG_LEVEL", default)
    return value.strip().upper()


def load_coordinator_config() -> CoordinatorConfig:
    """Load immutable coordinator configuration from env vars."""
    return CoordinatorConfig(
        max_navigation_depth=max(
            0, _int("COORDINATOR_MAX_NAVIGATION_DEPTH", DEFAULT_MAX_NAVIGATION_DEPTH)
        ),
        strict_start=_flag("COORDINATOR_STRICT_START", False),
        debug_actions=_flag("COORDINATOR_DEBUG_ACTIONS", False),
        log_level=resolve_log_level_name(),
    )
