"""Coordinator façade over navigation state and action channel."""

from __future__ import annotations

import logging
import types
import weakref
from abc import ABC, abstractmethod
from collections.abc import Hashable
from typing import Any, ClassVar

from coordinator_kit.api.actions import Subscription, UiExecutor
from coordinator_kit.api.errors import CoordinatorError, InvalidRoute
from coordinator_kit.api.navigation import NavigationSnapshot
from coordinator_kit.runtime import navigation
from coordinator_kit.runtime.actions import RuntimeActionChannel
from coordinator_kit.runtime.config import CoordinatorConfig, load_coordinator_config
from coordinator_kit.runtime.errors import log_recoverable
from coordinator_kit.runtime.logging import setup_coordinator_logging
from coordinator_kit.runtime.navigation import NavigationState

_LOG = logging.getLogger("coordinator_kit.coordinator")


class _Lifetime:
    __slots__ = ("torn_down",)

    def __init__(self) -> None:
        self.torn_down = False


def _finalize_coordinator(
    state: NavigationState[Any],
    channel: RuntimeActionChannel[Any],
    lifetime: _Lifetime,
    type_name: str,
) -> None:
    lifetime.torn_down = True
    channel.unbind()
    navigation.reset(state)
    _LOG.debug("coordinator_finalized type=%s", type_name)


class Coordinator[TRoute: Hashable, TAction](ABC):
    """Base class for application coordinators.

    Subclasses declare their route type with a class keyword and implement
    `handle`::

        class HomeCoordinator(Coordinator[HomeRoute, HomeAction], route=HomeRoute):
            max_navigation_depth = 10

            def handle(self, action: HomeAction) -> None:
                ...

    `max_navigation_depth` left at None falls back to the configured default.
    """

    route_type: ClassVar[type | types.UnionType | None] = None
    max_navigation_depth: ClassVar[int | None] = None

    def __init_subclass__(
        cls, *, route: type | types.UnionType | None = None, **kwargs: Any
    ) -> None:
        super().__init_subclass__(**kwargs)
        if route is None:
            return
        if not isinstance(route, (type, types.UnionType)):
            raise TypeError(f"route must be a class, got {route!r}")
        cls.route_type = route

    def __init__(
        self,
        *,
        state: NavigationState[TRoute] | None = None,
        channel: RuntimeActionChannel[TAction] | None = None,
        executor: UiExecutor | None = None,
        strict_start: bool | None = None,
        config: CoordinatorConfig | None = None,
    ) -> None:
        cls = type(self)
        if cls.route_type is None:
            raise TypeError(f"{cls.__name__}: Coordinator requires a NavigationRoute type")
        if config is None:
            config = load_coordinator_config()
        self._config = config
        self._max_depth = (
            cls.max_navigation_depth
            if cls.max_navigation_depth is not None
            else config.max_navigation_depth
        )
        self._strict_start = config.strict_start if strict_start is None else strict_start
        self._state: NavigationState[TRoute] = state if state is not None else NavigationState()
        self._channel: RuntimeActionChannel[TAction] = (
            channel if channel is not None else RuntimeActionChannel(executor=executor)
        )
        self._lifetime = _Lifetime()
        self._debug_tap: Subscription | None = None
        self._finalizer = weakref.finalize(
            self, _finalize_coordinator, self._state, self._channel, self._lifetime, cls.__name__
        )
        if config.debug_actions:
            setup_coordinator_logging(config)
            self.enable_debug_logging()

    @abstractmethod
    def handle(self, action: TAction) -> None:
        """React to one action delivered on the UI context."""

    def validate_navigation(self, new_route: TRoute, current_route: TRoute | None) -> None:
        """Veto a push by raising `CoordinatorError`. Accepts everything by default."""

    @property
    def max_depth(self) -> int:
        return self._max_depth

    @property
    def strict_start(self) -> bool:
        return self._strict_start

    @property
    def navigation_state(self) -> NavigationState[TRoute]:
        return self._state

    @property
    def action_dispatcher(self) -> RuntimeActionChannel[TAction]:
        return self._channel

    @property
    def is_torn_down(self) -> bool:
        return self._lifetime.torn_down

    @property
    def navigation_path(self) -> list[TRoute]:
        return list(self._state.stack)

    @property
    def sheet_route(self) -> TRoute | None:
        return self._state.sheet

    @property
    def full_screen_route(self) -> TRoute | None:
        return self._state.full_screen

    @property
    def current_route(self) -> TRoute | None:
        return self._state.top

    @property
    def navigation_history(self) -> tuple[TRoute, ...]:
        return tuple(self._state.stack)

    @property
    def presented_sheet(self) -> TRoute | None:
        return self._state.sheet

    @property
    def presented_full_screen(self) -> TRoute | None:
        return self._state.full_screen

    def snapshot(self) -> NavigationSnapshot[TRoute]:
        return self._state.snapshot()

    def push(self, route: TRoute) -> None:
        self._check_route(route)
        navigation.push(
            self._state,
            route,
            max_depth=self._max_depth,
            validate=self.validate_navigation,
        )

    def pop(self) -> TRoute:
        return navigation.pop(self._state)

    def pop_to_root(self) -> None:
        navigation.pop_to_root(self._state)

    def present_sheet(self, route: TRoute) -> None:
        self._check_route(route)
        navigation.present_sheet(self._state, route)

    def present_full_screen(self, route: TRoute) -> None:
        self._check_route(route)
        navigation.present_full_screen(self._state, route)

    def try_present_sheet(self, route: TRoute) -> bool:
        """Present sheet without raising. Returns whether it was shown."""
        try:
            self._check_route(route)
        except InvalidRoute:
            log_recoverable(_LOG, f"Failed to present sheet: {route!r}")
            return False
        return navigation.try_present_sheet(self._state, route)

    def try_present_full_screen(self, route: TRoute) -> bool:
        """Present full screen without raising. Returns whether it was shown."""
        try:
            self._check_route(route)
        except InvalidRoute:
            log_recoverable(_LOG, f"Failed to present full screen: {route!r}")
            return False
        return navigation.try_present_full_screen(self._state, route)

    def dismiss_sheet(self) -> None:
        navigation.dismiss_sheet(self._state)

    def dismiss_full_screen(self) -> None:
        navigation.dismiss_full_screen(self._state)

    def start(self, initial_route: TRoute, *, strict: bool | None = None) -> bool:
        """Push `initial_route` if nothing is on the stack yet.

        Returns whether the stack holds a route afterwards. Failures propagate
        only in strict mode (per call, per instance, or via configuration).
        """
        strict = self._strict_start if strict is None else strict
        with self._state.exclusive():
            if self._state.stack:
                return True
            try:
                self._check_route(initial_route)
            except InvalidRoute:
                if strict:
                    raise
                log_recoverable(
                    _LOG, f"start_rejected route={initial_route!r}", level=logging.WARNING
                )
                return False
            return navigation.start(
                self._state,
                initial_route,
                max_depth=self._max_depth,
                validate=self.validate_navigation,
                strict=strict,
            )

    def bind_action_dispatcher(self) -> Subscription:
        """Forward dispatcher output to `handle`. Idempotent.

        Binding again after `cleanup` re-arms delivery. The channel reaches the
        coordinator through a weak reference, so screens holding the dispatcher
        do not keep the coordinator alive.
        """
        lifetime = self._lifetime
        if self._channel.is_bound:
            subscription = self._channel.subscription
            if subscription is not None:
                return subscription
        lifetime.torn_down = False
        coordinator_ref = weakref.ref(self)
        type_name = type(self).__name__

        def deliver(action: TAction) -> None:
            coordinator = coordinator_ref()
            if coordinator is None or lifetime.torn_down:
                _LOG.debug("action_ignored reason=torn_down action=%r", action)
                return
            try:
                coordinator.handle(action)
            except CoordinatorError:
                log_recoverable(
                    _LOG,
                    f"handle_failed type={type_name} action={action!r}",
                    level=logging.WARNING,
                )

        return self._channel.bind(deliver)

    def enable_debug_logging(self) -> None:
        """Log every action sent through the dispatcher."""
        if self._debug_tap is not None:
            return
        type_name = type(self).__name__
        self._debug_tap = self._channel.add_tap(
            lambda action: _LOG.info("coordinator_action type=%s action=%r", type_name, action)
        )

    def cleanup(self) -> None:
        """Release the dispatcher and clear all navigation state. Idempotent."""
        self._channel.unbind()
        if self._debug_tap is not None:
            self._channel.remove_tap(self._debug_tap)
            self._debug_tap = None
        navigation.reset(self._state)
        if not self._lifetime.torn_down:
            self._lifetime.torn_down = True
            _LOG.debug("coordinator_cleaned_up type=%s", type(self).__name__)

    def _check_route(self, route: object) -> None:
        route_type = type(self).route_type
        if route_type is not None and not isinstance(route, route_type):
            raise InvalidRoute(f"expected {_type_label(route_type)}, got {route!r}")


def _type_label(route_type: type | types.UnionType) -> str:
    if isinstance(route_type, type):
        return route_type.__name__
    return str(route_type)
