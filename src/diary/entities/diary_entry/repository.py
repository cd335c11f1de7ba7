"""Data access for diary entries."""

from datetime import date, datetime, time, timedelta

from loguru import logger
from sqlalchemy import func, or_
from sqlmodel import col, select

from diary.core.services.database.db_session import DbSessionService
from diary.entities.author.entity import Author
from diary.entities.author.repository import to_author
from diary.entities.core._base import utcnow
from diary.entities.diary_entry.entity import DiaryEntry
from diary.entities.diary_entry.table import DiaryEntryTable


def to_entry(row: DiaryEntryTable) -> DiaryEntry:
    return DiaryEntry(
        id=row.id,
        title=row.title,
        content=row.content,
        author=to_author(row.author),
        created_at=row.created_at,
        updated_at=row.updated_at,
    )


def _newest_first(statement):
    return statement.order_by(col(DiaryEntryTable.created_at).desc(), col(DiaryEntryTable.id).desc())


def _day_start(day: date) -> datetime:
    return datetime.combine(day, time.min)


class DiaryEntryRepository:
    """Data-access layer for diary entries.

    List queries return entries newest first, each with its author loaded.
    """

    def __init__(self, db: DbSessionService) -> None:
        self._db = db

    def _list(self, statement) -> list[DiaryEntry]:
        with self._db.get_session() as session:
            rows = session.exec(_newest_first(statement)).unique().all()
            return [to_entry(row) for row in rows]

    def save(self, entry: DiaryEntry) -> DiaryEntry:
        if entry.author.id is None:
            raise ValueError("The entry's author must be saved first")
        with self._db.session_scope() as session:
            row = DiaryEntryTable(
                title=entry.title,
                content=entry.content,
                author_id=entry.author.id,
            )
            session.add(row)
            session.flush()
            session.refresh(row)
            entry.id = row.id
            entry.created_at = row.created_at
            entry.updated_at = row.updated_at
        logger.debug("Saved entry {} for author {}", entry.id, entry.author.id)
        return entry

    def find_by_id(self, entry_id: int) -> DiaryEntry | None:
        with self._db.get_session() as session:
            row = session.get(DiaryEntryTable, entry_id)
            if row is None:
                return None
            return to_entry(row)

    def find_all(self) -> list[DiaryEntry]:
        return self._list(select(DiaryEntryTable))

    def find_by_author(self, author: Author) -> list[DiaryEntry]:
        if author.id is None:
            return []
        return self.find_by_author_id(author.id)

    def find_by_author_id(self, author_id: int) -> list[DiaryEntry]:
        return self._list(select(DiaryEntryTable).where(DiaryEntryTable.author_id == author_id))

    def search_by_title_or_content(self, keyword: str) -> list[DiaryEntry]:
        """Entries whose title or content contains ``keyword``, ignoring case.

        ``%`` and ``_`` in the keyword match literally.
        """
        statement = select(DiaryEntryTable).where(
            or_(
                col(DiaryEntryTable.title).icontains(keyword, autoescape=True),
                col(DiaryEntryTable.content).icontains(keyword, autoescape=True),
            )
        )
        return self._list(statement)

    def find_by_date(self, day: date) -> list[DiaryEntry]:
        return self.find_by_date_range(day, day)

    def find_by_date_range(self, start: date, end: date) -> list[DiaryEntry]:
        """Entries created from the start of ``start`` to the end of ``end`` (UTC days)."""
        statement = select(DiaryEntryTable).where(
            col(DiaryEntryTable.created_at) >= _day_start(start),
            col(DiaryEntryTable.created_at) < _day_start(end + timedelta(days=1)),
        )
        return self._list(statement)

    def update(self, entry: DiaryEntry) -> DiaryEntry:
        if entry.id is None:
            raise ValueError("Cannot update an entry that has not been saved")
        if entry.author.id is None:
            raise ValueError("The entry's author must be saved first")
        with self._db.session_scope() as session:
            row = session.get(DiaryEntryTable, entry.id)
            if row is None:
                raise ValueError(f"Diary entry {entry.id} does not exist")
            row.title = entry.title
            row.content = entry.content
            row.author_id = entry.author.id
            row.updated_at = utcnow()
            session.add(row)
            session.flush()
            session.refresh(row)
            entry.updated_at = row.updated_at
        logger.debug("Updated entry {}", entry.id)
        return entry

    def delete(self, entry: DiaryEntry) -> bool:
        if entry.id is None:
            return False
        return self.delete_by_id(entry.id)

    def delete_by_id(self, entry_id: int) -> bool:
        with self._db.session_scope() as session:
            row = session.get(DiaryEntryTable, entry_id)
            if row is None:
                return False
            session.delete(row)
        logger.debug("Deleted entry {}", entry_id)
        return True

    def count(self) -> int:
        with self._db.get_session() as session:
            return session.exec(select(func.count()).select_from(DiaryEntryTable)).one()

    def count_by_author_id(self, author_id: int) -> int:
        with self._db.get_session() as session:
            statement = (
                select(func.count())
                .select_from(DiaryEntryTable)
                .where(DiaryEntryTable.author_id == author_id)
            )
            return session.exec(statement).one()

    def count_per_author(self) -> dict[int, int]:
        """Number of entries per author id; authors without entries are absent."""
        with self._db.get_session() as session:
            statement = select(DiaryEntryTable.author_id, func.count()).group_by(
                DiaryEntryTable.author_id
            )
            return {author_id: total for author_id, total in session.exec(statement).all()}
