"""Action-based navigation: each screen returns the next screen to show."""

from collections.abc import Callable
from typing import Optional

from loguru import logger

from diary.tui.terminal import Terminal

Action = Callable[[Terminal], Optional["Action"]]


class Router:
    """Run actions until one returns ``None``.

    Screens receive the screen to go back to as an argument, so "back" is
    always an explicit destination rather than a stack pop.
    """

    def __init__(self, start: Action, terminal: Terminal, farewell: str | None = None):
        self._current: Action | None = start
        self._terminal = terminal
        self._farewell = farewell
        self.steps = 0

    def run(self) -> None:
        try:
            while self._current is not None:
                self._current = self._current(self._terminal)
                self.steps += 1
        except EOFError:
            logger.debug("Input closed after {} navigation steps", self.steps)
            self._current = None
        if self._farewell:
            self._terminal.success(self._farewell)


def run_actions(start: Action, terminal: Terminal) -> None:
    Router(start, terminal).run()
