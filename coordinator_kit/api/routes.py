"""Public route and screen-renderer contracts."""

from __future__ import annotations

from collections.abc import Hashable
from typing import Protocol, runtime_checkable

from coordinator_kit.api.actions import ActionChannel


@runtime_checkable
class NavigationRoute[TAction, TScreen](Protocol):
    """Route value able to build its own screen. Routes must be hashable."""

    def build(self, dispatcher: ActionChannel[TAction]) -> TScreen:
        """Build screen; UI events go through `dispatcher.send`."""


class ScreenRenderer[TRoute: Hashable, TAction, TScreen](Protocol):
    """Turns a route into a displayable screen. Must not mutate navigation state."""

    def render(self, route: TRoute, dispatcher: ActionChannel[TAction]) -> TScreen:
        """Render route synchronously."""


def create_screen_renderer() -> ScreenRenderer[Hashable, object, object]:
    """Create renderer delegating to `route.build(dispatcher)`."""
    from coordinator_kit.runtime.host import RouteScreenRenderer

    return RouteScreenRenderer()
