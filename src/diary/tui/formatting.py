from datetime import date, datetime

from diary.entities.author import Author
from diary.entities.diary_entry import DiaryEntry


def format_timestamp(value: datetime | None, fmt: str) -> str:
    if value is None:
        return "-"
    return value.strftime(fmt)


def date_example(fmt: str) -> str:
    """A sample date in ``fmt`` to show next to date prompts."""
    return date(2024, 12, 31).strftime(fmt)


def parse_date(text: str, fmt: str) -> date:
    """Parse a user-typed date; raises ValueError when it does not match ``fmt``."""
    return datetime.strptime(text.strip(), fmt).date()


def author_line(author: Author) -> str:
    return str(author)


def entry_line(entry: DiaryEntry) -> str:
    return f"{entry.title} - {entry.author.full_name}"


def entry_preview_line(entry: DiaryEntry, preview_length: int) -> str:
    return f"{entry.title} - {entry.content_preview(preview_length)}"
