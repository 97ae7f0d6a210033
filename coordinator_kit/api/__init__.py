"""Public coordinator_kit API contracts."""

from coordinator_kit.api.actions import (
    ActionChannel,
    ActionHandler,
    Subscription,
    UiExecutor,
    create_action_channel,
    create_ui_executor,
)
from coordinator_kit.api.coordinator import Coordinator
from coordinator_kit.api.errors import (
    CoordinatorError,
    InvalidRoute,
    NavigationNotAllowed,
    NavigationStackOverflow,
    PresentationConflict,
)
from coordinator_kit.api.logging import CoordinatorLoggingConfig
from coordinator_kit.api.navigation import (
    DEFAULT_MAX_NAVIGATION_DEPTH,
    NavigationSnapshot,
    NavigationStateView,
    NavigationValidator,
    StateObserver,
    create_navigation_state,
)
from coordinator_kit.api.routes import NavigationRoute, ScreenRenderer, create_screen_renderer

__all__ = [
    "ActionChannel",
    "ActionHandler",
    "Coordinator",
    "CoordinatorError",
    "CoordinatorLoggingConfig",
    "DEFAULT_MAX_NAVIGATION_DEPTH",
    "InvalidRoute",
    "NavigationNotAllowed",
    "NavigationRoute",
    "NavigationSnapshot",
    "NavigationStackOverflow",
    "NavigationStateView",
    "NavigationValidator",
    "PresentationConflict",
    "ScreenRenderer",
    "StateObserver",
    "Subscription",
    "UiExecutor",
    "create_action_channel",
    "create_navigation_state",
    "create_screen_renderer",
    "create_ui_executor",
]
