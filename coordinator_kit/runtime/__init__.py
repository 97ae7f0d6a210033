"""Coordinator runtime modules."""

from coordinator_kit.runtime.actions import ActionChannel, RuntimeActionChannel
from coordinator_kit.runtime.config import CoordinatorConfig, load_coordinator_config
from coordinator_kit.runtime.coordinator import Coordinator
from coordinator_kit.runtime.executors import AsyncioLoopExecutor, UiThreadExecutor
from coordinator_kit.runtime.host import CoordinatorHost, NavigationScene, RouteScreenRenderer
from coordinator_kit.runtime.logging import (
    configure_coordinator_logging,
    setup_coordinator_logging,
    shutdown_coordinator_logging,
)
from coordinator_kit.runtime.navigation import NavigationState

__all__ = [
    "ActionChannel",
    "AsyncioLoopExecutor",
    "Coordinator",
    "CoordinatorConfig",
    "CoordinatorHost",
    "NavigationScene",
    "NavigationState",
    "RouteScreenRenderer",
    "RuntimeActionChannel",
    "UiThreadExecutor",
    "configure_coordinator_logging",
    "load_coordinator_config",
    "setup_coordinator_logging",
    "shutdown_coordinator_logging",
]
