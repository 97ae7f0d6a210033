"""Public action-channel API contracts."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

type ActionHandler[TAction] = Callable[[TAction], None]
type UiCallback = Callable[[], None]


@dataclass(frozen=True, slots=True)
class Subscription:
    """Opaque subscription token."""

    id: int


class UiExecutor(Protocol):
    """Execution context with UI affinity."""

    def submit(self, callback: UiCallback) -> None:
        """Schedule callback on the UI context, preserving submission order."""


class ActionChannel[TAction](Protocol):
    """Single-consumer channel from screens to their coordinator."""

    @property
    def is_bound(self) -> bool:
        """Return whether a handler is attached."""

    def send(self, action: TAction) -> None:
        """Publish one action. Dropped when no handler is bound."""

    def bind(self, handler: ActionHandler[TAction]) -> Subscription:
        """Attach the handler once. Later calls return the existing subscription."""

    def unbind(self) -> None:
        """Release the handler subscription."""

    def add_tap(self, observer: ActionHandler[TAction]) -> Subscription:
        """Attach a non-consuming observer invoked synchronously on send."""

    def remove_tap(self, subscription: Subscription) -> None:
        """Remove an observer if present."""


def create_action_channel[TAction](
    executor: UiExecutor | None = None,
) -> ActionChannel[TAction]:
    """Create default action-channel implementation."""
    from coordinator_kit.runtime.actions import RuntimeActionChannel

    return RuntimeActionChannel(executor=executor)


def create_ui_executor() -> UiExecutor:
    """Create default executor bound to the calling thread."""
    from coordinator_kit.runtime.executors import UiThreadExecutor

    return UiThreadExecutor()
