from loguru import logger
from sqlalchemy.exc import SQLAlchemyError

from diary.entities.core._base import describe_validation_error
from diary.runtime.config.config_data import UIConfig
from diary.tui.formatting import format_timestamp
from diary.tui.paginator import Paginator
from diary.tui.router import Action, run_actions
from diary.tui.terminal import Terminal


class BaseController:
    """Shared plumbing for the screens of one area of the application."""

    def __init__(self, terminal: Terminal, ui: UIConfig):
        self.terminal = terminal
        self.ui = ui

    def browse(self, start: Action) -> None:
        """Run an action chain from a menu option until it backs out."""
        run_actions(start, self.terminal)

    def paginator(self, items, title: str, formatter) -> Paginator:
        return Paginator(items, self.terminal, title, formatter, page_size=self.ui.page_size)

    def timestamp(self, value) -> str:
        return format_timestamp(value, self.ui.timestamp_format)

    def report_failure(self, exc: Exception, doing: str) -> None:
        """Print a failed operation in red and keep the application running."""
        if isinstance(exc, SQLAlchemyError):
            logger.opt(exception=exc).error("Database error while {}", doing)
            self.terminal.error(f"Database error while {doing}. Nothing was changed.")
        else:
            self.terminal.error(f"Error: {describe_validation_error(exc)}")

    def read_choice(self) -> str:
        return self.terminal.read_line("-> ").strip().lower()
