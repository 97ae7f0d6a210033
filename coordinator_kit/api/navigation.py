"""Public navigation-state API contracts."""

from __future__ import annotations

from collections.abc import Callable, Hashable
from dataclasses import dataclass, field
from time import time
from typing import Protocol

from coordinator_kit.api.actions import Subscription

DEFAULT_MAX_NAVIGATION_DEPTH = 20


@dataclass(frozen=True, slots=True)
class NavigationSnapshot[TRoute: Hashable]:
    """Immutable copy of the stack and both modal slots."""

    stack: tuple[TRoute, ...] = ()
    sheet: TRoute | None = None
    full_screen: TRoute | None = None
    revision: int = 0
    captured_at: float = field(default_factory=time, compare=False)

    @property
    def current_route(self) -> TRoute | None:
        return self.stack[-1] if self.stack else None


type StateObserver[TRoute: Hashable] = Callable[[NavigationSnapshot[TRoute]], None]
type NavigationValidator[TRoute: Hashable] = Callable[[TRoute, TRoute | None], None]
"""Called as `validate(new_route, current_top)`; raises to veto a push."""


class NavigationStateView[TRoute: Hashable](Protocol):
    """Read/observe surface of navigation state for hosts and renderers."""

    @property
    def top(self) -> TRoute | None:
        """Return the visible route."""

    def snapshot(self) -> NavigationSnapshot[TRoute]:
        """Return immutable copy of current state."""

    def observe(self, callback: StateObserver[TRoute]) -> Subscription:
        """Register callback for committed changes."""

    def unobserve(self, subscription: Subscription) -> None:
        """Remove callback if present."""


def create_navigation_state[TRoute: Hashable]() -> NavigationStateView[TRoute]:
    """Create default empty navigation state."""
    from coordinator_kit.runtime.navigation import NavigationState

    return NavigationState()
