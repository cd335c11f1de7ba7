"""Paged list display with next/previous/select/back commands."""

import math
from collections.abc import Callable, Sequence
from typing import Generic, TypeVar

from rich.text import Text

from diary.tui.terminal import Terminal

T = TypeVar("T")

DEFAULT_PAGE_SIZE = 9


class Paginator(Generic[T]):
    """Show a fixed snapshot of items one page at a time.

    Items are numbered from 1 on every page. ``show()`` returns the picked
    item, ``show_read_only()`` only browses. Blank input, ``b`` and end of
    input all mean back.
    """

    def __init__(
        self,
        items: Sequence[T],
        terminal: Terminal,
        title: str,
        formatter: Callable[[T], str] = str,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        if page_size < 1:
            raise ValueError("Page size must be at least 1")
        self._items: tuple[T, ...] = tuple(items)
        self._terminal = terminal
        self._title = title
        self._formatter = formatter
        self._page_size = page_size
        self._current_page = 0

    @property
    def items(self) -> tuple[T, ...]:
        return self._items

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def page_count(self) -> int:
        return math.ceil(len(self._items) / self._page_size)

    @property
    def has_next_page(self) -> bool:
        return (self._current_page + 1) * self._page_size < len(self._items)

    @property
    def has_previous_page(self) -> bool:
        return self._current_page > 0

    @property
    def page_items(self) -> tuple[T, ...]:
        start = self._current_page * self._page_size
        end = min(start + self._page_size, len(self._items))
        return self._items[start:end]

    def next_page(self) -> bool:
        if not self.has_next_page:
            return False
        self._current_page += 1
        return True

    def previous_page(self) -> bool:
        if not self.has_previous_page:
            return False
        self._current_page -= 1
        return True

    def item_at(self, number: int) -> T | None:
        """The item shown as ``[number]`` on the current page."""
        page = self.page_items
        if 1 <= number <= len(page):
            return page[number - 1]
        return None

    def show(self) -> T | None:
        return self._run(selectable=True)

    def show_read_only(self) -> None:
        self._run(selectable=False)

    def _run(self, selectable: bool) -> T | None:
        if not self._items:
            self._terminal.write()
            self._terminal.info("No items found.")
            return None

        while True:
            self._render(selectable)
            try:
                choice = self._terminal.read_line("-> ").strip().lower()
            except EOFError:
                return None

            if choice in ("", "b"):
                return None
            if choice == "n":
                self.next_page()
            elif choice == "p":
                self.previous_page()
            elif selectable:
                selected = self._select(choice)
                if selected is not None:
                    return selected

    def _select(self, choice: str) -> T | None:
        try:
            number = int(choice)
        except ValueError:
            self._terminal.error("Invalid input")
            return None
        selected = self.item_at(number)
        if selected is None:
            self._terminal.error("Invalid selection")
        return selected

    def _render(self, selectable: bool) -> None:
        console = self._terminal.console
        console.print()
        console.print(
            Text(f"== {self._title} (Page {self._current_page + 1} of {self.page_count}) ==", style="bold")
        )
        page = self.page_items
        for number, item in enumerate(page, start=1):
            console.print(Text.assemble("[", (str(number), "cyan"), f"] - {self._formatter(item)}"))
        console.print()
        console.print(Text(f"Total: {len(self._items)} item(s)"))

        commands: list[Text] = []
        if self.has_next_page:
            commands.append(Text.assemble("[", ("N", "cyan"), "] Next"))
        if self.has_previous_page:
            commands.append(Text.assemble("[", ("P", "cyan"), "] Previous"))
        if selectable:
            commands.append(Text.assemble("[", (f"1-{len(page)}", "cyan"), "] Select"))
        commands.append(Text.assemble("[", ("B", "red"), "] Back"))
        console.print()
        console.print(Text("  ").join(commands))
        console.print()
