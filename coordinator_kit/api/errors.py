"""Public navigation error taxonomy."""

from __future__ import annotations


class CoordinatorError(Exception):
    """Base class for recoverable navigation failures."""

    prefix: str | None = None

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        if self.prefix is None:
            return self.message
        return f"{self.prefix}: {self.message}"


class NavigationStackOverflow(CoordinatorError):
    """Push attempted while the stack is at capacity."""

    def __init__(self, max_depth: int) -> None:
        super().__init__(f"Navigation stack exceeded maximum depth of {max_depth}")
        self.max_depth = max_depth


class InvalidRoute(CoordinatorError):
    """Route rejected by a validation hook or route-type check."""

    prefix = "Invalid route"


class PresentationConflict(CoordinatorError):
    """Sheet or full-screen slot already occupied."""

    prefix = "Presentation conflict"


class NavigationNotAllowed(CoordinatorError):
    """Navigation rejected: empty-stack pop or a validation veto."""

    prefix = "Navigation not allowed"
