"""Observation host that keeps rendered screens in sync with navigation state."""

from __future__ import annotations

import logging
from collections.abc import Callable, Hashable
from dataclasses import dataclass
from typing import Any

from coordinator_kit.api.actions import ActionChannel
from coordinator_kit.api.navigation import NavigationSnapshot
from coordinator_kit.api.routes import ScreenRenderer
from coordinator_kit.runtime.coordinator import Coordinator

_LOG = logging.getLogger("coordinator_kit.host")


class RouteScreenRenderer:
    """Renderer that asks the route to build itself."""

    def render(self, route: Any, dispatcher: ActionChannel[Any]) -> Any:
        build = getattr(route, "build", None)
        if build is None:
            raise TypeError(f"route {route!r} does not implement build(dispatcher)")
        return build(dispatcher)


@dataclass(frozen=True, slots=True)
class NavigationScene[TScreen]:
    """Rendered screens for one navigation snapshot."""

    root: TScreen
    pushed: tuple[TScreen, ...] = ()
    sheet: TScreen | None = None
    full_screen: TScreen | None = None
    revision: int = 0

    @property
    def visible(self) -> TScreen:
        """Return the frontmost screen."""
        if self.full_screen is not None:
            return self.full_screen
        if self.sheet is not None:
            return self.sheet
        if self.pushed:
            return self.pushed[-1]
        return self.root


type SceneListener[TScreen] = Callable[[NavigationScene[TScreen]], None]


type _Rendered[TRoute, TScreen] = tuple[TRoute, TScreen]


class CoordinatorHost[TRoute: Hashable, TAction, TScreen]:
    """Bind, start, and observe one coordinator.

    The root screen comes from the first stack entry (the initial route once
    started); later entries render as pushed screens. Stack screens are cached
    per position: a screen is reused while the route at its position and every
    position below it are unchanged, so a route revisited further up the stack
    gets its own screen. Sheet and full-screen screens are cached per slot.
    """

    def __init__(
        self,
        coordinator: Coordinator[TRoute, TAction],
        initial_route: TRoute,
        *,
        renderer: ScreenRenderer[TRoute, TAction, TScreen] | None = None,
        on_scene: SceneListener[TScreen] | None = None,
    ) -> None:
        self._coordinator = coordinator
        self._initial_route = initial_route
        self._renderer: ScreenRenderer[TRoute, TAction, TScreen] = (
            renderer if renderer is not None else RouteScreenRenderer()
        )
        self._on_scene = on_scene
        self._stack_screens: list[_Rendered[TRoute, TScreen]] = []
        self._sheet_screen: _Rendered[TRoute, TScreen] | None = None
        self._full_screen_screen: _Rendered[TRoute, TScreen] | None = None
        self._render_count = 0
        coordinator.bind_action_dispatcher()
        coordinator.start(initial_route)
        self._scene = self._compose(coordinator.snapshot())
        self._subscription = coordinator.navigation_state.observe(self._on_change)

    @property
    def scene(self) -> NavigationScene[TScreen]:
        return self._scene

    @property
    def render_count(self) -> int:
        """Return number of renderer invocations so far."""
        return self._render_count

    def close(self) -> None:
        """Stop observing the coordinator."""
        self._coordinator.navigation_state.unobserve(self._subscription)
        self._stack_screens = []
        self._sheet_screen = None
        self._full_screen_screen = None

    def _on_change(self, snapshot: NavigationSnapshot[TRoute]) -> None:
        self._scene = self._compose(snapshot)
        if self._on_scene is not None:
            self._on_scene(self._scene)

    def _compose(self, snapshot: NavigationSnapshot[TRoute]) -> NavigationScene[TScreen]:
        routes = snapshot.stack or (self._initial_route,)
        stack_screens: list[_Rendered[TRoute, TScreen]] = []
        reusable = True
        for index, route in enumerate(routes):
            cached = self._stack_screens[index] if index < len(self._stack_screens) else None
            if reusable and cached is not None and cached[0] == route:
                stack_screens.append(cached)
            else:
                reusable = False
                stack_screens.append((route, self._render(route)))
        self._stack_screens = stack_screens
        self._sheet_screen = self._slot(self._sheet_screen, snapshot.sheet)
        self._full_screen_screen = self._slot(self._full_screen_screen, snapshot.full_screen)

        scene = NavigationScene(
            root=stack_screens[0][1],
            pushed=tuple(screen for _, screen in stack_screens[1:]),
            sheet=self._sheet_screen[1] if self._sheet_screen is not None else None,
            full_screen=(
                self._full_screen_screen[1] if self._full_screen_screen is not None else None
            ),
            revision=snapshot.revision,
        )
        _LOG.debug(
            "scene_composed revision=%d depth=%d sheet=%s full_screen=%s",
            snapshot.revision,
            len(snapshot.stack),
            snapshot.sheet is not None,
            snapshot.full_screen is not None,
        )
        return scene

    def _slot(
        self, cached: _Rendered[TRoute, TScreen] | None, route: TRoute | None
    ) -> _Rendered[TRoute, TScreen] | None:
        if route is None:
            return None
        if cached is not None and cached[0] == route:
            return cached
        return (route, self._render(route))

    def _render(self, route: TRoute) -> TScreen:
        screen = self._renderer.render(route, self._coordinator.action_dispatcher)
        self._render_count += 1
        return screen
