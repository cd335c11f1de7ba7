"""Data access for authors."""

from loguru import logger
from sqlalchemy import func
from sqlmodel import col, select

from diary.core.services.database.db_session import DbSessionService
from diary.entities.author.entity import Author
from diary.entities.author.table import AuthorTable
from diary.entities.core._base import utcnow


def to_author(row: AuthorTable) -> Author:
    return Author.model_validate(row, from_attributes=True)


class AuthorRepository:
    """Data-access layer for authors.

    Every call opens its own session; writes run inside ``session_scope()``.
    """

    def __init__(self, db: DbSessionService) -> None:
        self._db = db

    def save(self, author: Author) -> Author:
        """Insert ``author`` and copy the generated id and timestamps onto it."""
        with self._db.session_scope() as session:
            row = AuthorTable(
                first_name=author.first_name,
                last_name=author.last_name,
                email=author.email,
            )
            session.add(row)
            session.flush()
            session.refresh(row)
            author.id = row.id
            author.created_at = row.created_at
            author.updated_at = row.updated_at
        logger.debug("Saved author {} ({})", author.id, author.email)
        return author

    def find_by_id(self, author_id: int) -> Author | None:
        with self._db.get_session() as session:
            row = session.get(AuthorTable, author_id)
            if row is None:
                return None
            return to_author(row)

    def find_all(self) -> list[Author]:
        """All authors ordered by last name, first name."""
        with self._db.get_session() as session:
            statement = select(AuthorTable).order_by(
                col(AuthorTable.last_name), col(AuthorTable.first_name), col(AuthorTable.id)
            )
            return [to_author(row) for row in session.exec(statement).all()]

    def find_by_email(self, email: str) -> Author | None:
        normalized = email.strip().lower()
        with self._db.get_session() as session:
            statement = select(AuthorTable).where(func.lower(AuthorTable.email) == normalized)
            row = session.exec(statement).first()
            if row is None:
                return None
            return to_author(row)

    def exists_by_email(self, email: str) -> bool:
        return self.find_by_email(email) is not None

    def update(self, author: Author) -> Author:
        """Write the fields of a saved author back to its row."""
        if author.id is None:
            raise ValueError("Cannot update an author that has not been saved")
        with self._db.session_scope() as session:
            row = session.get(AuthorTable, author.id)
            if row is None:
                raise ValueError(f"Author {author.id} does not exist")
            row.first_name = author.first_name
            row.last_name = author.last_name
            row.email = author.email
            row.updated_at = utcnow()
            session.add(row)
            session.flush()
            session.refresh(row)
            author.updated_at = row.updated_at
        logger.debug("Updated author {}", author.id)
        return author

    def delete(self, author: Author) -> bool:
        if author.id is None:
            return False
        return self.delete_by_id(author.id)

    def delete_by_id(self, author_id: int) -> bool:
        with self._db.session_scope() as session:
            row = session.get(AuthorTable, author_id)
            if row is None:
                return False
            session.delete(row)
        logger.debug("Deleted author {}", author_id)
        return True

    def count(self) -> int:
        with self._db.get_session() as session:
            return session.exec(select(func.count()).select_from(AuthorTable)).one()
