"""Read-only statistics over authors and entries."""

from dataclasses import dataclass

from diary.core.services.author_service import AuthorService
from diary.core.services.diary_entry_service import DiaryEntryService
from diary.entities.author import Author


@dataclass(frozen=True)
class AuthorEntryCount:
    author: Author
    entries: int


class StatisticsService:
    def __init__(self, author_service: AuthorService, entry_service: DiaryEntryService):
        self._authors = author_service
        self._entries = entry_service

    def total_authors(self) -> int:
        return self._authors.count()

    def total_entries(self) -> int:
        return self._entries.count()

    def entries_per_author(self) -> list[AuthorEntryCount]:
        """Every author in author order with its entry count, zero included."""
        counts = self._entries.count_per_author()
        return [
            AuthorEntryCount(author=author, entries=counts.get(author.id, 0))
            for author in self._authors.find_all()
        ]

    def average_entries_per_author(self) -> float | None:
        authors = self.total_authors()
        if authors == 0:
            return None
        return self.total_entries() / authors
