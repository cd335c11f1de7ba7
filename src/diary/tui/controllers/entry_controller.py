"""Screens for listing, creating, searching, editing and deleting entries."""

from collections.abc import Callable

from sqlalchemy.exc import SQLAlchemyError

from diary.core.services.author_service import AuthorService
from diary.core.services.diary_entry_service import DiaryEntryService
from diary.entities.author import Author
from diary.entities.diary_entry import DiaryEntry
from diary.runtime.config.config_data import UIConfig
from diary.tui.controllers._base import BaseController
from diary.tui.formatting import author_line, date_example, entry_line, parse_date
from diary.tui.menu import Menu
from diary.tui.router import Action
from diary.tui.terminal import Terminal

EntryLoader = Callable[[], list[DiaryEntry]]

RULE = "=" * 50


class EntryController(BaseController):
    def __init__(
        self,
        terminal: Terminal,
        entry_service: DiaryEntryService,
        author_service: AuthorService,
        ui: UIConfig,
    ):
        super().__init__(terminal, ui)
        self._entries = entry_service
        self._authors = author_service

    def menu(self) -> Menu:
        search = Menu(self.terminal, "== Search Entries ==")
        search.add_action("By Keyword", lambda: self.browse(self.keyword_search()))
        search.add_action("By Date", lambda: self.browse(self.date_search()))
        search.add_action("By Date Range", lambda: self.browse(self.date_range_search()))
        search.add_action("By Author", lambda: self.browse(self.author_search()))

        menu = Menu(self.terminal, "== Diary Entries ==")
        menu.add_action(
            "List All Entries",
            lambda: self.browse(self.entry_list(self._entries.find_all, "All Entries")),
        )
        menu.add_action("Create Entry", self.create_entry)
        menu.add_submenu("Search Entries", search)
        return menu

    # Screens

    def entry_list(
        self,
        load: EntryLoader,
        title: str,
        back: Action | None = None,
        formatter=entry_line,
        empty_message: str | None = None,
    ) -> Action:
        """Paged list of entries; the detail screen returns here.

        With ``empty_message`` an empty result prints that message and goes
        back instead of showing an empty page.
        """

        def screen(terminal: Terminal) -> Action | None:
            found = load()
            if not found and empty_message:
                terminal.info(empty_message)
                return back
            selected = self.paginator(found, title, formatter).show()
            if selected is None:
                return back
            return self.entry_detail(selected, back=screen)

        return screen

    def entry_detail(self, entry: DiaryEntry, back: Action | None = None) -> Action:
        """Full entry with edit and delete commands."""

        def screen(terminal: Terminal) -> Action | None:
            current = self._entries.find_by_id(entry.id)
            if current is None:
                terminal.warning("This entry no longer exists.")
                return back

            self.render_entry(current)
            terminal.write()
            terminal.info("[1] Edit  [2] Delete  [b] Back")
            while True:
                choice = self.read_choice()
                if choice == "b":
                    return back
                if choice == "1":
                    self.edit_entry(current)
                    return screen
                if choice == "2":
                    if self.delete_entry(current):
                        return back
                    return screen
                terminal.error("Invalid input")

        return screen

    def keyword_search(self, back: Action | None = None) -> Action:
        def screen(terminal: Terminal) -> Action | None:
            terminal.heading("Search Entries")
            term = terminal.prompt("Search term")
            if not term:
                return back
            return self.entry_list(
                lambda: self._entries.search(term),
                f"Search Results: {term}",
                back,
                empty_message=f"No entries found matching: {term}",
            )

        return screen

    def date_search(self, back: Action | None = None) -> Action:
        def screen(terminal: Terminal) -> Action | None:
            terminal.heading("Search by Date")
            day = self._prompt_date("Date")
            if day is None:
                return back
            label = day.strftime(self.ui.date_format)
            return self.entry_list(
                lambda: self._entries.find_by_date(day),
                f"Entries on {label}",
                back,
                empty_message=f"No entries found on {label}.",
            )

        return screen

    def date_range_search(self, back: Action | None = None) -> Action:
        def screen(terminal: Terminal) -> Action | None:
            terminal.heading("Search by Date Range")
            start = self._prompt_date("Start date")
            if start is None:
                return back
            while True:
                end = self._prompt_date("End date")
                if end is None:
                    return back
                if end >= start:
                    break
                terminal.error("End date cannot be before start date.")

            span = f"{start.strftime(self.ui.date_format)} to {end.strftime(self.ui.date_format)}"
            return self.entry_list(
                lambda: self._entries.find_by_date_range(start, end),
                f"Entries from {span}",
                back,
                empty_message=f"No entries found from {span}.",
            )

        return screen

    def author_search(self, back: Action | None = None) -> Action:
        """Pick an author, then page through that author's entries."""

        def screen(terminal: Terminal) -> Action | None:
            author = self.paginator(self._authors.find_all(), "Select Author", author_line).show()
            if author is None:
                return back
            return self.entry_list(
                lambda: self._entries.find_by_author_id(author.id),
                f"Entries by {author.full_name}",
                screen,
                empty_message=f"No entries found for {author.full_name}.",
            )

        return screen

    # Operations

    def render_entry(self, entry: DiaryEntry) -> None:
        terminal = self.terminal
        terminal.write()
        terminal.info(RULE)
        terminal.info(f"Title:   {entry.title}")
        terminal.info(f"Author:  {entry.author.full_name}")
        terminal.info(f"Created: {self.timestamp(entry.created_at)}")
        terminal.info(f"Updated: {self.timestamp(entry.updated_at)}")
        terminal.info(RULE)
        terminal.write()
        terminal.info(entry.content)
        terminal.write()
        terminal.info(RULE)

    def create_entry(self) -> DiaryEntry | None:
        terminal = self.terminal
        terminal.heading("Create Entry")

        authors = self._authors.find_all()
        if not authors:
            terminal.warning("No authors found.")
            if not terminal.confirm("Create an author now?"):
                return None
            author = self.create_author_inline()
            if author is None:
                return None
            authors = [author]

        author = self.paginator(authors, "Select Author", author_line).show()
        if author is None:
            terminal.info("Cancelled.")
            return None

        title = terminal.prompt("Title")
        if not title:
            terminal.info("Cancelled.")
            return None

        content = terminal.read_multiline("Content (enter empty line to finish):")
        if content is None:
            terminal.info("Cancelled - content cannot be empty.")
            return None

        try:
            entry = self._entries.create_entry(title, author, content)
        except (ValueError, SQLAlchemyError) as e:
            self.report_failure(e, "creating the entry")
            return None
        terminal.success(f"Created: {entry}")
        return entry

    def create_author_inline(self) -> Author | None:
        terminal = self.terminal
        terminal.heading("Quick Author Creation")
        first_name = terminal.prompt("First name")
        if not first_name:
            terminal.info("Cancelled.")
            return None
        last_name = terminal.prompt("Last name")
        if not last_name:
            terminal.info("Cancelled.")
            return None
        email = terminal.prompt("Email")
        if not email:
            terminal.info("Cancelled.")
            return None

        try:
            author = self._authors.create_author(first_name, last_name, email)
        except (ValueError, SQLAlchemyError) as e:
            self.report_failure(e, "creating the author")
            return None
        if author is None:
            terminal.error("Email already exists.")
            return None
        terminal.success(f"Created: {author}")
        return author

    def edit_entry(self, entry: DiaryEntry) -> bool:
        """Prompt for new values; blank answers keep the current ones."""
        terminal = self.terminal
        terminal.heading(f"Edit Entry: {entry.title}")
        terminal.info("(Leave empty to keep current value)")
        changed = False

        title = terminal.prompt(f"Title [{entry.title}]")
        if title and title != entry.title:
            try:
                entry.title = title
                changed = True
            except ValueError as e:
                self.report_failure(e, "changing the title")

        terminal.write()
        terminal.info(f"Current content preview: {terminal.truncate(entry.content, 100)}")
        if terminal.confirm("Replace content?"):
            content = terminal.read_multiline("New content (enter empty line to finish):")
            if content is not None:
                try:
                    entry.content = content
                    changed = True
                except ValueError as e:
                    self.report_failure(e, "changing the content")

        if not changed:
            terminal.info("No changes made.")
            return False
        try:
            self._entries.update(entry)
        except (ValueError, SQLAlchemyError) as e:
            self.report_failure(e, "updating the entry")
            return False
        terminal.success("Entry updated.")
        return True

    def delete_entry(self, entry: DiaryEntry) -> bool:
        terminal = self.terminal
        if not terminal.confirm(f"Delete entry '{entry.title}'?"):
            terminal.info("Cancelled.")
            return False
        try:
            deleted = self._entries.delete(entry)
        except SQLAlchemyError as e:
            self.report_failure(e, "deleting the entry")
            return False
        if deleted:
            terminal.success("Entry deleted.")
        else:
            terminal.warning("Entry was already deleted.")
        return True

    def _prompt_date(self, label: str):
        """Ask until a valid date is typed; None when the answer is blank."""
        example = date_example(self.ui.date_format)
        while True:
            text = self.terminal.prompt(f"{label} (e.g. {example})")
            if not text:
                return None
            try:
                return parse_date(text, self.ui.date_format)
            except ValueError:
                self.terminal.error(f"Invalid date format. Use the form {example}.")
