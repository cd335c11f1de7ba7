"""Line-oriented console I/O shared by every screen."""

from typing import TextIO

from rich.console import Console
from rich.text import Text

from diary.entities.diary_entry.entity import truncate

SUCCESS = "green"
ERROR = "red"
WARNING = "yellow"


class Terminal:
    """Reads one line at a time and prints styled messages through rich.

    When ``stream`` is given, lines are read from it instead of stdin, which
    is how tests script a session. End of input always surfaces as
    ``EOFError`` so the navigation loops can unwind.
    """

    def __init__(self, console: Console | None = None, stream: TextIO | None = None):
        self.console = console or Console()
        self._stream = stream

    def read_line(self, prompt: str = "") -> str:
        """Read one line without its newline; raise EOFError at end of input."""
        line = self.console.input(Text(prompt), stream=self._stream)
        if self._stream is not None and line == "":
            raise EOFError
        return line.rstrip("\r\n")

    def prompt(self, label: str) -> str:
        """Ask for a value and return it trimmed."""
        return self.read_line(f"{label}: ").strip()

    def confirm(self, question: str) -> bool:
        answer = self.read_line(f"{question} (y/n): ").strip().lower()
        return answer in ("y", "yes")

    def write(self, message: str = "", style: str | None = None) -> None:
        self.console.print(Text(message, style=style or ""))

    def success(self, message: str) -> None:
        self.write(message, SUCCESS)

    def error(self, message: str) -> None:
        self.write(message, ERROR)

    def warning(self, message: str) -> None:
        self.write(message, WARNING)

    def info(self, message: str) -> None:
        self.write(message)

    def heading(self, title: str) -> None:
        self.write()
        self.write(f"=== {title} ===", "bold")

    def pause(self) -> None:
        self.read_line("Press Enter to continue...")

    def read_multiline(self, header: str) -> str | None:
        """Collect lines until the first empty one; None when nothing was typed."""
        self.info(header)
        lines: list[str] = []
        while True:
            try:
                line = self.read_line()
            except EOFError:
                if not lines:
                    raise
                break
            if line == "":
                break
            lines.append(line)
        content = "\n".join(lines).strip()
        return content or None

    @staticmethod
    def truncate(text: str | None, max_length: int) -> str:
        return truncate(text, max_length)
