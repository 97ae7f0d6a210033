"""Navigation coordinators: route stack, modal slots, and action delivery."""

from coordinator_kit.api.errors import (
    CoordinatorError,
    InvalidRoute,
    NavigationNotAllowed,
    NavigationStackOverflow,
    PresentationConflict,
)
from coordinator_kit.api.navigation import DEFAULT_MAX_NAVIGATION_DEPTH, NavigationSnapshot
from coordinator_kit.runtime.actions import ActionChannel
from coordinator_kit.runtime.coordinator import Coordinator
from coordinator_kit.runtime.host import CoordinatorHost, NavigationScene
from coordinator_kit.runtime.navigation import NavigationState

__all__ = [
    "ActionChannel",
    "Coordinator",
    "CoordinatorError",
    "CoordinatorHost",
    "DEFAULT_MAX_NAVIGATION_DEPTH",
    "InvalidRoute",
    "NavigationNotAllowed",
    "NavigationScene",
    "NavigationSnapshot",
    "NavigationStackOverflow",
    "NavigationState",
    "PresentationConflict",
]
