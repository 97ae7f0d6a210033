"""Public coordinator capability contract."""

from __future__ import annotations

from collections.abc import Hashable
from typing import Protocol

from coordinator_kit.api.actions import ActionChannel
from coordinator_kit.api.navigation import NavigationSnapshot, NavigationStateView


class Coordinator[TRoute: Hashable, TAction](Protocol):
    """Owner of one navigation state and the handler for its screens' actions."""

    @property
    def navigation_path(self) -> list[TRoute]:
        """Return stack copy, root first."""

    @property
    def sheet_route(self) -> TRoute | None:
        """Return route in the sheet slot."""

    @property
    def full_screen_route(self) -> TRoute | None:
        """Return route in the full-screen slot."""

    @property
    def action_dispatcher(self) -> ActionChannel[TAction]:
        """Return channel handed to screens."""

    @property
    def navigation_state(self) -> NavigationStateView[TRoute]:
        """Return observable state."""

    def handle(self, action: TAction) -> None:
        """React to one action from a screen."""

    def bind_action_dispatcher(self) -> object:
        """Route dispatcher output to `handle`."""

    def start(self, initial_route: TRoute) -> bool:
        """Push initial route when the stack is empty."""

    def snapshot(self) -> NavigationSnapshot[TRoute]:
        """Return immutable copy of current state."""

    def cleanup(self) -> None:
        """Clear state and release the dispatcher binding."""
