from __future__ import annotations

import gc
import logging
import threading

import pytest

from coordinator_kit.api.errors import (
    InvalidRoute,
    NavigationNotAllowed,
    NavigationStackOverflow,
    PresentationConflict,
)
from coordinator_kit.runtime.config import CoordinatorConfig
from coordinator_kit.runtime.coordinator import Coordinator
from coordinator_kit.runtime.executors import UiThreadExecutor
from tests.coordinator_kit.helpers import (
    Action,
    DemoCoordinator,
    GuardedCoordinator,
    Screen,
)


def test_coordinator_without_route_type_cannot_be_created() -> None:
    class Untyped(Coordinator[str, str]):
        def handle(self, action: str) -> None:
            pass

    with pytest.raises(TypeError, match="Coordinator requires a NavigationRoute type"):
        Untyped(config=CoordinatorConfig())


def test_coordinator_rejects_non_class_route_declaration() -> None:
    with pytest.raises(TypeError, match="route must be a class"):

        class Broken(Coordinator[str, str], route="Screen"):  # type: ignore[arg-type]
            def handle(self, action: str) -> None:
                pass


def test_coordinator_start_then_accessors() -> None:
    coordinator = DemoCoordinator()
    assert coordinator.current_route is None

    assert coordinator.start(Screen.HOME) is True
    coordinator.push(Screen.DETAIL)

    assert coordinator.current_route is Screen.DETAIL
    assert coordinator.navigation_history == (Screen.HOME, Screen.DETAIL)
    assert coordinator.navigation_path == [Screen.HOME, Screen.DETAIL]
    assert coordinator.presented_sheet is None
    assert coordinator.presented_full_screen is None


def test_coordinator_navigation_path_is_a_copy() -> None:
    coordinator = DemoCoordinator()
    coordinator.start(Screen.HOME)
    path = coordinator.navigation_path
    path.append(Screen.DETAIL)
    assert coordinator.navigation_path == [Screen.HOME]


def test_coordinator_rejects_routes_of_other_types() -> None:
    coordinator = DemoCoordinator()
    with pytest.raises(InvalidRoute, match="expected Screen"):
        coordinator.push("home")  # type: ignore[arg-type]
    with pytest.raises(InvalidRoute):
        coordinator.present_sheet("profile")  # type: ignore[arg-type]
    assert coordinator.try_present_full_screen("login") is False  # type: ignore[arg-type]
    assert coordinator.navigation_path == []


def test_coordinator_default_depth_comes_from_config() -> None:
    coordinator = DemoCoordinator(config=CoordinatorConfig(max_navigation_depth=2))
    coordinator.push(Screen.HOME)
    coordinator.push(Screen.DETAIL)
    with pytest.raises(NavigationStackOverflow, match="maximum depth of 2"):
        coordinator.push(Screen.SETTINGS)


def test_coordinator_class_depth_overrides_config() -> None:
    coordinator = GuardedCoordinator(config=CoordinatorConfig(max_navigation_depth=50))
    assert coordinator.max_depth == 3
    for screen in (Screen.HOME, Screen.PROFILE, Screen.DETAIL):
        coordinator.push(screen)
    with pytest.raises(NavigationStackOverflow):
        coordinator.push(Screen.LOGIN)


def test_coordinator_validate_navigation_hook_vetoes_push() -> None:
    coordinator = GuardedCoordinator()
    coordinator.start(Screen.HOME)
    coordinator.push(Screen.DETAIL)

    with pytest.raises(NavigationNotAllowed, match="settings unavailable"):
        coordinator.push(Screen.SETTINGS)

    assert coordinator.navigation_path == [Screen.HOME, Screen.DETAIL]


def test_coordinator_start_is_best_effort_by_default() -> None:
    class Shallow(DemoCoordinator):
        max_navigation_depth = 0

    coordinator = Shallow()
    assert coordinator.start(Screen.HOME) is False
    assert coordinator.navigation_path == []
    with pytest.raises(NavigationStackOverflow):
        coordinator.start(Screen.HOME, strict=True)


def test_coordinator_strict_start_from_config() -> None:
    class Shallow(DemoCoordinator):
        max_navigation_depth = 0

    coordinator = Shallow(config=CoordinatorConfig(strict_start=True))
    assert coordinator.strict_start is True
    with pytest.raises(NavigationStackOverflow):
        coordinator.start(Screen.HOME)
    with pytest.raises(InvalidRoute):
        coordinator.start("home")  # type: ignore[arg-type]


def test_coordinator_presentation_conflict_and_try_variants() -> None:
    coordinator = DemoCoordinator()
    coordinator.present_sheet(Screen.PROFILE)

    with pytest.raises(PresentationConflict):
        coordinator.present_full_screen(Screen.LOGIN)
    assert coordinator.try_present_sheet(Screen.SETTINGS) is False
    assert coordinator.sheet_route is Screen.PROFILE
    assert coordinator.full_screen_route is None

    coordinator.dismiss_sheet()
    assert coordinator.try_present_full_screen(Screen.LOGIN) is True
    assert coordinator.presented_full_screen is Screen.LOGIN


def test_coordinator_dispatches_actions_to_handle() -> None:
    coordinator = DemoCoordinator()
    coordinator.bind_action_dispatcher()
    coordinator.start(Screen.HOME)
    dispatcher = coordinator.action_dispatcher

    dispatcher.send(Action.OPEN_DETAIL)
    dispatcher.send(Action.OPEN_SETTINGS)
    dispatcher.send(Action.HOME)
    dispatcher.send(Action.SHOW_PROFILE)

    assert coordinator.handled == [
        Action.OPEN_DETAIL,
        Action.OPEN_SETTINGS,
        Action.HOME,
        Action.SHOW_PROFILE,
    ]
    assert coordinator.navigation_path == [Screen.HOME]
    assert coordinator.sheet_route is Screen.PROFILE


def test_coordinator_bind_twice_delivers_once() -> None:
    coordinator = DemoCoordinator()
    first = coordinator.bind_action_dispatcher()
    second = coordinator.bind_action_dispatcher()

    coordinator.action_dispatcher.send(Action.OPEN_DETAIL)

    assert first == second
    assert coordinator.handled == [Action.OPEN_DETAIL]


def test_coordinator_actions_before_bind_are_dropped() -> None:
    coordinator = DemoCoordinator()
    coordinator.action_dispatcher.send(Action.OPEN_DETAIL)
    coordinator.bind_action_dispatcher()
    assert coordinator.handled == []


def test_coordinator_handle_errors_are_logged_not_raised(caplog) -> None:
    coordinator = DemoCoordinator()
    coordinator.bind_action_dispatcher()
    caplog.set_level(logging.WARNING, logger="coordinator_kit.coordinator")

    coordinator.action_dispatcher.send(Action.BACK)

    assert coordinator.handled == [Action.BACK]
    assert any("handle_failed" in record.getMessage() for record in caplog.records)


def test_coordinator_cleanup_is_idempotent_and_releases_dispatcher() -> None:
    coordinator = DemoCoordinator()
    coordinator.bind_action_dispatcher()
    coordinator.start(Screen.HOME)
    coordinator.push(Screen.DETAIL)
    coordinator.present_full_screen(Screen.LOGIN)

    coordinator.cleanup()
    once = coordinator.snapshot()
    coordinator.cleanup()

    assert coordinator.snapshot() == once
    assert once.stack == ()
    assert once.sheet is None
    assert once.full_screen is None
    assert coordinator.is_torn_down is True
    assert coordinator.action_dispatcher.is_bound is False

    coordinator.action_dispatcher.send(Action.OPEN_DETAIL)
    assert coordinator.handled == []


def test_coordinator_pending_delivery_after_cleanup_is_ignored() -> None:
    executor = UiThreadExecutor()
    coordinator = DemoCoordinator(executor=executor)
    coordinator.bind_action_dispatcher()

    worker = threading.Thread(target=lambda: coordinator.action_dispatcher.send(Action.OPEN_DETAIL))
    worker.start()
    worker.join()
    coordinator.cleanup()
    executor.drain()

    assert coordinator.handled == []
    assert coordinator.navigation_path == []


def test_coordinator_rebind_after_cleanup_rearms_delivery() -> None:
    coordinator = DemoCoordinator()
    coordinator.bind_action_dispatcher()
    coordinator.cleanup()

    coordinator.bind_action_dispatcher()
    coordinator.action_dispatcher.send(Action.OPEN_DETAIL)

    assert coordinator.is_torn_down is False
    assert coordinator.navigation_path == [Screen.DETAIL]


def test_coordinator_garbage_collection_tears_down_state() -> None:
    coordinator = DemoCoordinator()
    coordinator.bind_action_dispatcher()
    coordinator.start(Screen.HOME)
    coordinator.present_sheet(Screen.PROFILE)
    state = coordinator.navigation_state

    del coordinator
    gc.collect()

    assert state.stack == []
    assert state.sheet is None


def test_coordinator_debug_logging_logs_each_action_once(caplog) -> None:
    coordinator = DemoCoordinator()
    coordinator.enable_debug_logging()
    coordinator.enable_debug_logging()
    caplog.set_level(logging.INFO, logger="coordinator_kit.coordinator")

    coordinator.action_dispatcher.send(Action.SHOW_LOGIN)

    messages = [r.getMessage() for r in caplog.records if "coordinator_action" in r.getMessage()]
    assert messages == ["coordinator_action type=DemoCoordinator action=<Action.SHOW_LOGIN: 'show_login'>"]


def test_coordinator_debug_actions_config_installs_tap(caplog) -> None:
    caplog.set_level(logging.INFO, logger="coordinator_kit.coordinator")
    coordinator = DemoCoordinator(config=CoordinatorConfig(debug_actions=True))

    coordinator.action_dispatcher.send(Action.OPEN_DETAIL)
    coordinator.cleanup()
    coordinator.action_dispatcher.send(Action.OPEN_SETTINGS)

    messages = [r.getMessage() for r in caplog.records if "coordinator_action" in r.getMessage()]
    assert len(messages) == 1


def test_coordinator_send_returns_when_handle_raises_unexpected_error(caplog) -> None:
    class Fragile(DemoCoordinator):
        def handle(self, action: Action) -> None:
            if action is Action.SHOW_LOGIN:
                raise ValueError("login screen unavailable")
            super().handle(action)

    coordinator = Fragile()
    coordinator.bind_action_dispatcher()
    caplog.set_level(logging.ERROR, logger="coordinator_kit.actions")

    coordinator.action_dispatcher.send(Action.SHOW_LOGIN)
    coordinator.action_dispatcher.send(Action.OPEN_DETAIL)

    assert coordinator.navigation_path == [Screen.DETAIL]
    assert coordinator.full_screen_route is None
    assert any("action_handler_failed" in record.getMessage() for record in caplog.records)


def test_coordinator_start_on_started_stack_ignores_route_type() -> None:
    coordinator = DemoCoordinator()
    coordinator.start(Screen.HOME)

    assert coordinator.start("home", strict=True) is True  # type: ignore[arg-type]
    assert coordinator.navigation_path == [Screen.HOME]


def test_coordinator_is_collected_while_screens_hold_dispatcher() -> None:
    coordinator = DemoCoordinator()
    coordinator.bind_action_dispatcher()
    coordinator.start(Screen.HOME)
    dispatcher = coordinator.action_dispatcher
    state = coordinator.navigation_state

    del coordinator
    gc.collect()

    assert state.stack == []
    assert dispatcher.is_bound is False
    dispatcher.send(Action.OPEN_DETAIL)
    assert state.stack == []
