from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from coordinator_kit.api.actions import ActionChannel
from coordinator_kit.api.errors import NavigationNotAllowed
from coordinator_kit.runtime.config import CoordinatorConfig
from coordinator_kit.runtime.coordinator import Coordinator


@dataclass(frozen=True, slots=True)
class FakeScreen:
    route: "Screen"
    dispatcher: object = field(compare=False, repr=False)


class Screen(Enum):
    HOME = "home"
    DETAIL = "detail"
    SETTINGS = "settings"
    PROFILE = "profile"
    LOGIN = "login"

    def build(self, dispatcher: ActionChannel["Action"]) -> FakeScreen:
        return FakeScreen(route=self, dispatcher=dispatcher)


class Action(Enum):
    OPEN_DETAIL = "open_detail"
    OPEN_SETTINGS = "open_settings"
    BACK = "back"
    HOME = "home"
    SHOW_LOGIN = "show_login"
    SHOW_PROFILE = "show_profile"
    CLOSE_MODALS = "close_modals"


class DemoCoordinator(Coordinator[Screen, Action], route=Screen):
    def __init__(self, **kwargs) -> None:
        kwargs.setdefault("config", CoordinatorConfig())
        super().__init__(**kwargs)
        self.handled: list[Action] = []

    def handle(self, action: Action) -> None:
        self.handled.append(action)
        match action:
            case Action.OPEN_DETAIL:
                self.push(Screen.DETAIL)
            case Action.OPEN_SETTINGS:
                self.push(Screen.SETTINGS)
            case Action.BACK:
                self.pop()
            case Action.HOME:
                self.pop_to_root()
            case Action.SHOW_LOGIN:
                self.present_full_screen(Screen.LOGIN)
            case Action.SHOW_PROFILE:
                self.present_sheet(Screen.PROFILE)
            case Action.CLOSE_MODALS:
                self.dismiss_sheet()
                self.dismiss_full_screen()


class GuardedCoordinator(DemoCoordinator):
    """Refuses to open settings on top of a detail screen."""

    max_navigation_depth = 3

    def validate_navigation(self, new_route: Screen, current_route: Screen | None) -> None:
        if new_route is Screen.SETTINGS and current_route is Screen.DETAIL:
            raise NavigationNotAllowed("settings unavailable from detail")
