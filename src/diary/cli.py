"""Command-line entry point."""

from pathlib import Path

import typer
from loguru import logger
from rich.console import Console

from diary.app import DiaryApp
from diary.core.services.author_service import AuthorService
from diary.core.services.database.db_manage import DbManageService
from diary.core.services.database.db_session import DbSessionService
from diary.core.services.diary_entry_service import DiaryEntryService
from diary.core.services.statistics_service import StatisticsService
from diary.entities.author import AuthorRepository
from diary.entities.diary_entry import DiaryEntryRepository
from diary.runtime.config.config_data import ConfigData
from diary.runtime.context import load_config, set_config
from diary.runtime.logging import configure_logging
from diary.tui.controllers.statistics_controller import build_statistics_table, format_average

console = Console()

app = typer.Typer(
    help="📔 Diary - keep diary entries for any number of authors",
    rich_markup_mode="rich",
)


@app.callback(invoke_without_command=True)
def startup(
    ctx: typer.Context,
    config_file: Path | None = typer.Option(
        None, "--config", "-c", help="Path to config.yaml (default: $DIARY_CONFIG or ./config.yaml)"
    ),
    database_url: str | None = typer.Option(
        None, "--database-url", help="Database URL, overrides the configuration"
    ),
    log_level: str | None = typer.Option(None, "--log-level", help="Log level, e.g. DEBUG"),
) -> None:
    """Load configuration and logging; without a command, start the interactive diary."""
    # Loguru's default stderr sink would print over the menus until configure_logging runs
    logger.remove()
    try:
        config = load_config(config_file)
    except (FileNotFoundError, ValueError) as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(code=1) from e

    if database_url:
        config.database.url = database_url
    if log_level:
        config.logging.level = log_level.upper()

    set_config(config)
    configure_logging(config)
    ctx.obj = config

    if ctx.invoked_subcommand is None:
        _run_interactive(config)


@app.command()
def run(ctx: typer.Context) -> None:
    """Start the interactive diary."""
    _run_interactive(ctx.obj)


@app.command("init-db")
def init_db(ctx: typer.Context) -> None:
    """Create the database tables."""
    config: ConfigData = ctx.obj
    db = DbSessionService(config=config)
    try:
        DbManageService(db).create_all()
        if not db.health_check():
            console.print("[red]❌ Database is not reachable[/red]")
            raise typer.Exit(code=1)
    finally:
        db.dispose()
    console.print("[green]✓[/green] Database tables created")


@app.command()
def stats(ctx: typer.Context) -> None:
    """Print diary statistics."""
    config: ConfigData = ctx.obj
    db = DbSessionService(config=config)
    try:
        DbManageService(db).create_all()
        authors = AuthorService(AuthorRepository(db))
        entries = DiaryEntryService(DiaryEntryRepository(db))
        statistics = StatisticsService(authors, entries)

        console.print(f"Total authors: {statistics.total_authors()}")
        console.print(f"Total entries: {statistics.total_entries()}")
        console.print(
            f"Average entries per author: {format_average(statistics.average_entries_per_author())}"
        )
        console.print(build_statistics_table(statistics))
    finally:
        db.dispose()


def _run_interactive(config: ConfigData) -> None:
    try:
        with DiaryApp(config) as diary:
            diary.run()
    except KeyboardInterrupt:
        console.print("\n[green]Goodbye![/green]")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
