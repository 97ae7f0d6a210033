"""Helpers for exercising coordinators in tests."""

from __future__ import annotations

from collections.abc import Callable, Hashable
from typing import Any

from coordinator_kit.api.navigation import NavigationSnapshot
from coordinator_kit.runtime import navigation
from coordinator_kit.runtime.coordinator import Coordinator

type Reaction[TAction] = Callable[["RecordingCoordinator[Any, TAction]", TAction], None]


def simulate_action[TAction](coordinator: Coordinator[Any, TAction], action: TAction) -> None:
    """Call `handle` directly, bypassing the dispatcher and executor."""
    coordinator.handle(action)


class RecordingCoordinator[TRoute: Hashable, TAction](Coordinator[TRoute, TAction], route=object):
    """Coordinator that records handled actions and captured snapshots.

    Accepts any route value. `reaction`, when given, runs after each recorded
    action so tests can script navigation in response.
    """

    def __init__(self, *, reaction: Reaction[TAction] | None = None, **kwargs: Any) -> None:
        super().__init__(**kwargs)
        self.handled_actions: list[TAction] = []
        self.navigation_states: list[NavigationSnapshot[TRoute]] = []
        self._reaction = reaction

    def handle(self, action: TAction) -> None:
        self.handled_actions.append(action)
        if self._reaction is not None:
            self._reaction(self, action)

    def simulate_action(self, action: TAction) -> None:
        self.handle(action)

    def capture_navigation_state(self) -> NavigationSnapshot[TRoute]:
        snapshot = self.snapshot()
        self.navigation_states.append(snapshot)
        return snapshot

    def reset_test_state(self) -> None:
        self.handled_actions.clear()
        self.navigation_states.clear()
        navigation.reset(self.navigation_state)
