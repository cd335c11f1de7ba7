"""Composition root: builds the object graph and runs the main menu."""

from loguru import logger
from rich.console import Console

from diary.core.services.author_service import AuthorService
from diary.core.services.database.db_manage import DbManageService
from diary.core.services.database.db_session import DbSessionService
from diary.core.services.diary_entry_service import DiaryEntryService
from diary.core.services.statistics_service import StatisticsService
from diary.entities.author import AuthorRepository
from diary.entities.diary_entry import DiaryEntryRepository
from diary.runtime.config.config_data import ConfigData
from diary.runtime.context import get_config
from diary.tui.controllers import AuthorController, EntryController, StatisticsController
from diary.tui.menu import Menu
from diary.tui.terminal import Terminal


class DiaryApp:
    """The interactive diary.

    Use it as a context manager so the database engine is disposed on every
    exit path, including ``KeyboardInterrupt``::

        with DiaryApp() as app:
            app.run()
    """

    def __init__(self, config: ConfigData | None = None, terminal: Terminal | None = None):
        self.config = config or get_config()
        self.terminal = terminal or Terminal(Console(no_color=not self.config.ui.color))

        self.db = DbSessionService(config=self.config)
        DbManageService(self.db).create_all()

        self.author_service = AuthorService(AuthorRepository(self.db))
        self.entry_service = DiaryEntryService(DiaryEntryRepository(self.db))
        self.statistics_service = StatisticsService(self.author_service, self.entry_service)

        ui = self.config.ui
        self.entry_controller = EntryController(
            self.terminal, self.entry_service, self.author_service, ui
        )
        self.author_controller = AuthorController(
            self.terminal, self.author_service, self.entry_service, self.entry_controller, ui
        )
        self.statistics_controller = StatisticsController(
            self.terminal, self.statistics_service, ui
        )
        self._closed = False

    def main_menu(self) -> Menu:
        menu = Menu(self.terminal, f"== {self.config.app.name} ==", root=True)
        menu.add_submenu("Diary Entries", self.entry_controller.menu())
        menu.add_submenu("Authors", self.author_controller.menu())
        menu.add_action("Statistics", self.statistics_controller.show)
        return menu

    def run(self) -> None:
        logger.info("Starting {}", self.config.app.name)
        self.main_menu().show()
        self.terminal.success("Goodbye!")
        logger.info("Session ended")

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self.db.dispose()

    def __enter__(self) -> "DiaryApp":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        if exc_type is KeyboardInterrupt:
            logger.info("Interrupted by user")
        self.close()
