"""Navigation state container and its transitions.

`NavigationState` holds the route stack and the two modal slots. The module-level
functions are the only mutators: each takes the state by exclusive reference,
validates under the state's lock, and either raises a `CoordinatorError` with the
state untouched or mutates and commits one revision.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Hashable
from dataclasses import dataclass, field

from coordinator_kit.api.actions import Subscription
from coordinator_kit.api.errors import (
    CoordinatorError,
    NavigationNotAllowed,
    NavigationStackOverflow,
    PresentationConflict,
)
from coordinator_kit.api.navigation import (
    DEFAULT_MAX_NAVIGATION_DEPTH,
    NavigationSnapshot,
    NavigationValidator,
    StateObserver,
)
from coordinator_kit.runtime.errors import log_recoverable

_LOG = logging.getLogger("coordinator_kit.navigation")


@dataclass(slots=True)
class NavigationState[TRoute: Hashable]:
    """Mutable route stack plus sheet and full-screen slots."""

    stack: list[TRoute] = field(default_factory=list)
    sheet: TRoute | None = None
    full_screen: TRoute | None = None
    revision: int = 0
    _lock: threading.RLock = field(
        default_factory=threading.RLock, init=False, repr=False, compare=False
    )
    _observers: dict[int, StateObserver[TRoute]] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )
    _next_observer_id: int = field(default=1, init=False, repr=False, compare=False)

    @property
    def top(self) -> TRoute | None:
        return self.stack[-1] if self.stack else None

    @property
    def depth(self) -> int:
        return len(self.stack)

    def exclusive(self) -> threading.RLock:
        """Return the single-writer lock guarding every transition."""
        return self._lock

    def snapshot(self) -> NavigationSnapshot[TRoute]:
        """Return immutable copy of current state."""
        with self._lock:
            return NavigationSnapshot(
                stack=tuple(self.stack),
                sheet=self.sheet,
                full_screen=self.full_screen,
                revision=self.revision,
            )

    def observe(self, callback: StateObserver[TRoute]) -> Subscription:
        """Register callback invoked with a snapshot after each commit."""
        with self._lock:
            sub_id = self._next_observer_id
            self._next_observer_id += 1
            self._observers[sub_id] = callback
        return Subscription(sub_id)

    def unobserve(self, subscription: Subscription) -> None:
        """Remove an observer if present."""
        with self._lock:
            self._observers.pop(subscription.id, None)

    def commit(self) -> None:
        """Bump revision and notify observers. Callers hold the lock.

        The transition is already applied when observers run, so an observer
        failure is logged and the remaining observers are still notified.
        """
        self.revision += 1
        if not self._observers:
            return
        snapshot = self.snapshot()
        for observer in tuple(self._observers.values()):
            try:
                observer(snapshot)
            except Exception:  # pylint: disable=broad-exception-caught
                _LOG.exception("state_observer_failed revision=%d", self.revision)


def push[TRoute: Hashable](
    state: NavigationState[TRoute],
    route: TRoute,
    *,
    max_depth: int = DEFAULT_MAX_NAVIGATION_DEPTH,
    validate: NavigationValidator[TRoute] | None = None,
) -> None:
    """Push route on top of the stack.

    Pushing the route that is already on top is a successful no-op. Only the
    immediate top is compared, so a route can reappear further down the stack.
    """
    with state.exclusive():
        if len(state.stack) >= max_depth:
            raise NavigationStackOverflow(max_depth)
        current = state.top
        if state.stack and current == route:
            _LOG.debug("route_duplicate_ignored route=%r", route)
            return
        if validate is not None:
            validate(route, current)
        state.stack.append(route)
        state.commit()
        _LOG.debug("route_pushed route=%r depth=%d", route, state.depth)


def pop[TRoute: Hashable](state: NavigationState[TRoute]) -> TRoute:
    """Remove and return the top route."""
    with state.exclusive():
        if not state.stack:
            raise NavigationNotAllowed("Cannot pop from empty navigation stack")
        route = state.stack.pop()
        state.commit()
        _LOG.debug("route_popped route=%r depth=%d", route, len(state.stack))
        return route


def pop_to_root[TRoute: Hashable](state: NavigationState[TRoute]) -> None:
    """Collapse the stack to its oldest entry."""
    with state.exclusive():
        if len(state.stack) <= 1:
            return
        del state.stack[1:]
        state.commit()
        _LOG.debug("popped_to_root route=%r", state.stack[0])


def present_sheet[TRoute: Hashable](state: NavigationState[TRoute], route: TRoute) -> None:
    """Show route in the sheet slot when no modal is presented."""
    with state.exclusive():
        if state.sheet is not None:
            raise PresentationConflict(f"Sheet already presented: {state.sheet!r}")
        if state.full_screen is not None:
            raise PresentationConflict(f"Full screen already presented: {state.full_screen!r}")
        state.sheet = route
        state.commit()
        _LOG.debug("sheet_presented route=%r", route)


def present_full_screen[TRoute: Hashable](
    state: NavigationState[TRoute], route: TRoute
) -> None:
    """Show route in the full-screen slot when no modal is presented."""
    with state.exclusive():
        if state.full_screen is not None:
            raise PresentationConflict(f"Full screen already presented: {state.full_screen!r}")
        if state.sheet is not None:
            raise PresentationConflict(f"Sheet already presented: {state.sheet!r}")
        state.full_screen = route
        state.commit()
        _LOG.debug("full_screen_presented route=%r", route)


def try_present_sheet[TRoute: Hashable](state: NavigationState[TRoute], route: TRoute) -> bool:
    """Best-effort `present_sheet`. Returns whether the sheet was shown."""
    try:
        present_sheet(state, route)
    except CoordinatorError:
        log_recoverable(_LOG, f"Failed to present sheet: {route!r}")
        return False
    return True


def try_present_full_screen[TRoute: Hashable](
    state: NavigationState[TRoute], route: TRoute
) -> bool:
    """Best-effort `present_full_screen`. Returns whether it was shown."""
    try:
        present_full_screen(state, route)
    except CoordinatorError:
        log_recoverable(_LOG, f"Failed to present full screen: {route!r}")
        return False
    return True


def dismiss_sheet[TRoute: Hashable](state: NavigationState[TRoute]) -> None:
    with state.exclusive():
        if state.sheet is None:
            return
        state.sheet = None
        state.commit()


def dismiss_full_screen[TRoute: Hashable](state: NavigationState[TRoute]) -> None:
    with state.exclusive():
        if state.full_screen is None:
            return
        state.full_screen = None
        state.commit()


def start[TRoute: Hashable](
    state: NavigationState[TRoute],
    initial_route: TRoute,
    *,
    max_depth: int = DEFAULT_MAX_NAVIGATION_DEPTH,
    validate: NavigationValidator[TRoute] | None = None,
    strict: bool = False,
) -> bool:
    """Push the initial route when the stack is empty.

    With `strict=False` a failed push is logged and swallowed; the return value
    tells whether the stack holds a route afterwards. With `strict=True` the
    push error propagates.
    """
    with state.exclusive():
        if state.stack:
            return True
        try:
            push(state, initial_route, max_depth=max_depth, validate=validate)
        except CoordinatorError:
            if strict:
                raise
            log_recoverable(
                _LOG,
                f"start_push_failed route={initial_route!r}",
                level=logging.WARNING,
            )
        return bool(state.stack)


def reset[TRoute: Hashable](state: NavigationState[TRoute]) -> None:
    """Clear the stack and both modal slots."""
    with state.exclusive():
        if not state.stack and state.sheet is None and state.full_screen is None:
            return
        state.stack.clear()
        state.sheet = None
        state.full_screen = None
        state.commit()
