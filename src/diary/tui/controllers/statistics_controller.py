"""Statistics screen."""

from rich.table import Table

from diary.core.services.statistics_service import StatisticsService
from diary.runtime.config.config_data import UIConfig
from diary.tui.controllers._base import BaseController
from diary.tui.terminal import Terminal


def build_statistics_table(statistics: StatisticsService) -> Table:
    """Per-author entry counts as a rich table."""
    table = Table(title="Entries per Author")
    table.add_column("Author", style="cyan")
    table.add_column("Email")
    table.add_column("Entries", justify="right", style="green")
    for row in statistics.entries_per_author():
        table.add_row(row.author.full_name, row.author.email, str(row.entries))
    return table


def format_average(value: float | None) -> str:
    return "-" if value is None else f"{value:.2f}"


class StatisticsController(BaseController):
    def __init__(self, terminal: Terminal, statistics: StatisticsService, ui: UIConfig):
        super().__init__(terminal, ui)
        self._statistics = statistics

    def show(self) -> None:
        terminal = self.terminal
        terminal.heading("Statistics")
        terminal.info(f"Total authors: {self._statistics.total_authors()}")
        terminal.info(f"Total entries: {self._statistics.total_entries()}")
        terminal.info(
            f"Average entries per author: {format_average(self._statistics.average_entries_per_author())}"
        )
        terminal.write()
        terminal.console.print(build_statistics_table(self._statistics))
        terminal.pause()
