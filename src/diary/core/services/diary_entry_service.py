"""Diary entry use cases on top of the entry repository."""

from datetime import date

from loguru import logger

from diary.entities.author import Author
from diary.entities.diary_entry import DiaryEntry, DiaryEntryRepository


class DiaryEntryService:
    def __init__(self, entry_repository: DiaryEntryRepository):
        self._entries = entry_repository

    def create_entry(self, title: str, author: Author, content: str) -> DiaryEntry:
        entry = DiaryEntry(title=title, author=author, content=content)
        saved = self._entries.save(entry)
        logger.info("Created entry {} by author {}", saved.id, author.id)
        return saved

    def find_by_id(self, entry_id: int) -> DiaryEntry | None:
        return self._entries.find_by_id(entry_id)

    def find_all(self) -> list[DiaryEntry]:
        return self._entries.find_all()

    def find_by_author(self, author: Author) -> list[DiaryEntry]:
        return self._entries.find_by_author(author)

    def find_by_author_id(self, author_id: int) -> list[DiaryEntry]:
        return self._entries.find_by_author_id(author_id)

    def search(self, text: str | None) -> list[DiaryEntry]:
        """Keyword search over titles and contents; blank text finds nothing."""
        if text is None or not text.strip():
            return []
        return self._entries.search_by_title_or_content(text.strip())

    def find_by_date(self, day: date) -> list[DiaryEntry]:
        return self._entries.find_by_date(day)

    def find_by_date_range(self, start: date, end: date) -> list[DiaryEntry]:
        if end < start:
            raise ValueError("End date cannot be before start date")
        return self._entries.find_by_date_range(start, end)

    def update_title(self, entry: DiaryEntry, title: str) -> DiaryEntry:
        entry.title = title
        return self.update(entry)

    def update_content(self, entry: DiaryEntry, content: str) -> DiaryEntry:
        entry.content = content
        return self.update(entry)

    def update(self, entry: DiaryEntry) -> DiaryEntry:
        updated = self._entries.update(entry)
        logger.info("Updated entry {}", updated.id)
        return updated

    def delete(self, entry: DiaryEntry) -> bool:
        deleted = self._entries.delete(entry)
        if deleted:
            logger.info("Deleted entry {}", entry.id)
        return deleted

    def delete_by_id(self, entry_id: int) -> bool:
        deleted = self._entries.delete_by_id(entry_id)
        if deleted:
            logger.info("Deleted entry {}", entry_id)
        return deleted

    def count(self) -> int:
        return self._entries.count()

    def count_by_author_id(self, author_id: int) -> int:
        return self._entries.count_by_author_id(author_id)

    def count_per_author(self) -> dict[int, int]:
        return self._entries.count_per_author()
