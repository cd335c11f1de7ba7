"""Entity: DiaryEntry."""

from typing import Any

from pydantic import Field, field_validator

from diary.entities.author.entity import Author
from diary.entities.core._base import Entity, require_text


class DiaryEntry(Entity):
    """A titled diary entry written by one author."""

    title: str = Field(description="Entry title")
    content: str = Field(description="Entry body, unbounded text")
    author: Author = Field(description="Author who wrote the entry")

    @field_validator("title", mode="before")
    @classmethod
    def _check_title(cls, value: Any) -> str:
        return require_text(value, "Title")

    @field_validator("content", mode="before")
    @classmethod
    def _check_content(cls, value: Any) -> str:
        return require_text(value, "Content")

    @field_validator("author", mode="before")
    @classmethod
    def _check_author(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("Author cannot be null")
        return value

    def content_preview(self, max_length: int = 40) -> str:
        """Content on one line, cut to ``max_length`` characters with ``...``."""
        return truncate(self.content, max_length)

    @property
    def display_label(self) -> str:
        return f"{self.title} by {self.author.full_name}"

    def __str__(self) -> str:
        return self.display_label

    def __eq__(self, other: Any) -> bool:
        """Entries are equal when they are the same saved row.

        Unsaved entries only equal themselves, however alike their fields are.
        """
        if self is other:
            return True
        if not isinstance(other, DiaryEntry):
            return False
        return self.id is not None and self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)


def truncate(text: str | None, max_length: int) -> str:
    if text is None:
        return ""
    flat = text.replace("\r", " ").replace("\n", " ")
    if len(flat) <= max_length:
        return flat
    if max_length <= 3:
        return flat[:max_length]
    return flat[: max_length - 3] + "..."
