"""Screens for listing, creating, finding, editing and deleting authors."""

from sqlalchemy.exc import SQLAlchemyError

from diary.core.services.author_service import AuthorService, DuplicateEmailError
from diary.core.services.diary_entry_service import DiaryEntryService
from diary.entities.author import Author, is_valid_email
from diary.runtime.config.config_data import UIConfig
from diary.tui.controllers._base import BaseController
from diary.tui.controllers.entry_controller import EntryController
from diary.tui.formatting import author_line, entry_preview_line
from diary.tui.menu import Menu
from diary.tui.router import Action
from diary.tui.terminal import Terminal


class AuthorController(BaseController):
    """Author screens.

    Entry details opened from an author go through ``entry_controller`` and
    come back to the author's entry list.
    """

    def __init__(
        self,
        terminal: Terminal,
        author_service: AuthorService,
        entry_service: DiaryEntryService,
        entry_controller: EntryController,
        ui: UIConfig,
    ):
        super().__init__(terminal, ui)
        self._authors = author_service
        self._entries = entry_service
        self._entry_controller = entry_controller

    def menu(self) -> Menu:
        menu = Menu(self.terminal, "== Authors ==")
        menu.add_action("List Authors", lambda: self.browse(self.author_list()))
        menu.add_action("Create Author", self.create_author)
        menu.add_action("Find by Email", lambda: self.browse(self.find_by_email()))
        return menu

    # Screens

    def author_list(self, back: Action | None = None) -> Action:
        def screen(terminal: Terminal) -> Action | None:
            selected = self.paginator(self._authors.find_all(), "All Authors", author_line).show()
            if selected is None:
                return back
            return self.author_detail(selected, back=screen)

        return screen

    def find_by_email(self, back: Action | None = None) -> Action:
        def screen(terminal: Terminal) -> Action | None:
            terminal.heading("Find Author by Email")
            email = terminal.prompt("Email")
            if not email:
                return back
            author = self._authors.find_by_email(email)
            if author is None:
                terminal.info("Author not found.")
                return back
            return self.author_detail(author, back=back)

        return screen

    def author_detail(self, author: Author, back: Action | None = None) -> Action:
        def screen(terminal: Terminal) -> Action | None:
            current = self._authors.find_by_id(author.id)
            if current is None:
                terminal.warning("This author no longer exists.")
                return back

            entry_count = self._entries.count_by_author_id(current.id)
            terminal.heading(f"Author: {current.full_name}")
            terminal.info(f"Name:    {current.full_name}")
            terminal.info(f"Email:   {current.email}")
            terminal.info(f"Created: {self.timestamp(current.created_at)}")
            terminal.info(f"Updated: {self.timestamp(current.updated_at)}")
            terminal.info(f"Entries: {entry_count}")
            terminal.write()
            terminal.info("[1] View Entries  [2] Edit Author  [3] Delete Author  [b] Back")

            while True:
                choice = self.read_choice()
                if choice == "b":
                    return back
                if choice == "1":
                    return self.author_entries(current, back=screen)
                if choice == "2":
                    self.edit_author(current)
                    return screen
                if choice == "3":
                    if self.delete_author(current):
                        return back
                    return screen
                terminal.error("Invalid input")

        return screen

    def author_entries(self, author: Author, back: Action | None = None) -> Action:
        return self._entry_controller.entry_list(
            lambda: self._entries.find_by_author_id(author.id),
            f"Entries by {author.full_name}",
            back,
            formatter=lambda entry: entry_preview_line(entry, self.ui.preview_length),
        )

    # Operations

    def create_author(self) -> Author | None:
        terminal = self.terminal
        terminal.heading("Create Author")
        first_name = terminal.prompt("First name")
        if not first_name:
            terminal.info("Cancelled.")
            return None
        last_name = terminal.prompt("Last name")
        if not last_name:
            terminal.info("Cancelled.")
            return None
        email = self._prompt_unique_email()
        if email is None:
            terminal.info("Cancelled.")
            return None

        try:
            author = self._authors.create_author_or_raise(first_name, last_name, email)
        except DuplicateEmailError:
            terminal.error("Email already exists.")
            return None
        except (ValueError, SQLAlchemyError) as e:
            self.report_failure(e, "creating the author")
            return None
        terminal.success(f"Created: {author}")
        return author

    def edit_author(self, author: Author) -> bool:
        """Prompt for new values; blank answers keep the current ones."""
        terminal = self.terminal
        terminal.heading(f"Edit Author: {author.full_name}")
        terminal.info("(Leave empty to keep current value)")
        changed = False

        first_name = terminal.prompt(f"First name [{author.first_name}]")
        if first_name and first_name != author.first_name:
            try:
                author.first_name = first_name
                changed = True
            except ValueError as e:
                self.report_failure(e, "changing the first name")

        last_name = terminal.prompt(f"Last name [{author.last_name}]")
        if last_name and last_name != author.last_name:
            try:
                author.last_name = last_name
                changed = True
            except ValueError as e:
                self.report_failure(e, "changing the last name")

        while True:
            email = terminal.prompt(f"Email [{author.email}]")
            if not email or email.lower() == author.email:
                break
            if not is_valid_email(email):
                terminal.error("Invalid email format.")
                continue
            if self._authors.email_exists(email):
                terminal.error("Email already in use.")
                continue
            author.email = email
            changed = True
            break

        if not changed:
            terminal.info("No changes made.")
            return False
        try:
            self._authors.update(author)
        except (ValueError, SQLAlchemyError) as e:
            self.report_failure(e, "updating the author")
            return False
        terminal.success(f"Author updated: {author}")
        return True

    def delete_author(self, author: Author) -> bool:
        """Delete ``author`` after confirmation; refused while it owns entries."""
        terminal = self.terminal
        entry_count = self._entries.count_by_author_id(author.id)
        if entry_count > 0:
            terminal.error(f"Cannot delete: author has {entry_count} entries.")
            return False
        if not terminal.confirm(f"Delete {author.full_name}?"):
            terminal.info("Cancelled.")
            return False
        try:
            self._authors.delete(author)
        except SQLAlchemyError as e:
            self.report_failure(e, "deleting the author")
            return False
        terminal.success("Author deleted.")
        return True

    def _prompt_unique_email(self) -> str | None:
        terminal = self.terminal
        while True:
            email = terminal.prompt("Email")
            if not email:
                return None
            if not is_valid_email(email):
                terminal.error("Invalid email format.")
            elif self._authors.email_exists(email):
                terminal.error("Email already exists.")
            else:
                return email
            if not terminal.confirm("Try again?"):
                return None
