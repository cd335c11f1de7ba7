"""Numbered text menus: the blocking, nested navigation model."""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

from loguru import logger
from rich.text import Text

from diary.tui.terminal import Terminal

BACK_TOKEN = "b"
EXIT_TOKEN = "q"
PROMPT = "-> "


@dataclass(frozen=True)
class MenuOption:
    """A menu line that either runs an action or opens a sub-menu, never both."""

    label: str
    action: Optional[Callable[[], None]] = None
    submenu: Optional["Menu"] = None
    color: str = "cyan"

    def __post_init__(self):
        if (self.action is None) == (self.submenu is None):
            raise ValueError("A menu option needs exactly one of an action or a sub-menu")

    def execute(self) -> None:
        if self.action is not None:
            self.action()
        else:
            self.submenu.show()


class Menu:
    """A single menu level.

    ``show()`` loops until the user backs out (``b``) or, on the root menu,
    exits (``q``) and confirms. End of input unwinds like back; on the root
    menu it ends without asking.
    """

    def __init__(self, terminal: Terminal, title: str = "", *, root: bool = False):
        self.terminal = terminal
        self.title = title
        self.root = root
        self.options: list[MenuOption] = []

    @property
    def leave_token(self) -> str:
        return EXIT_TOKEN if self.root else BACK_TOKEN

    @property
    def leave_label(self) -> str:
        return "Exit" if self.root else "Back"

    def add_option(self, option: MenuOption) -> "Menu":
        self.options.append(option)
        return self

    def add_action(self, label: str, action: Callable[[], None], color: str = "cyan") -> "Menu":
        return self.add_option(MenuOption(label, action=action, color=color))

    def add_submenu(self, label: str, submenu: "Menu", color: str = "cyan") -> "Menu":
        return self.add_option(MenuOption(label, submenu=submenu, color=color))

    def render(self) -> None:
        console = self.terminal.console
        if self.title:
            console.print()
            console.print(Text(self.title, style="bold"))
        for number, option in enumerate(self.options, start=1):
            console.print(Text.assemble("[", (str(number), option.color), f"] - {option.label}"))
        console.print(Text.assemble("[", (self.leave_token, "magenta"), f"] - {self.leave_label}"))
        console.print()

    def show(self) -> None:
        while True:
            self.render()
            try:
                raw = self.terminal.read_line(PROMPT)
            except EOFError:
                logger.debug("Input closed in menu '{}'", self.title)
                return

            choice = raw.strip().lower()
            if choice == self.leave_token:
                if not self.root:
                    return
                try:
                    if self.terminal.confirm("Are you sure you want to exit?"):
                        return
                except EOFError:
                    return
                continue

            option = self._option_for(choice)
            if option is None:
                self.terminal.error("Invalid input")
                continue

            try:
                option.execute()
            except EOFError:
                logger.debug("Input closed while running '{}'", option.label)
                return

    def _option_for(self, choice: str) -> MenuOption | None:
        try:
            number = int(choice)
        except ValueError:
            return None
        if 1 <= number <= len(self.options):
            return self.options[number - 1]
        return None
