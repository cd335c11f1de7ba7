"""Schema management for the diary database."""

from loguru import logger
from sqlmodel import SQLModel

from diary.core.services.database.db_session import DbSessionService


class DbManageService:
    def __init__(self, db: DbSessionService):
        self._engine = db.engine

    def create_all(self) -> None:
        """Create all database tables."""
        from diary.entities.author import AuthorTable  # noqa: F401
        from diary.entities.diary_entry import DiaryEntryTable  # noqa: F401

        SQLModel.metadata.create_all(self._engine)
        logger.info("Database initialized with tables.")

    def drop_all(self) -> None:
        """Drop all database tables."""
        from diary.entities.author import AuthorTable  # noqa: F401
        from diary.entities.diary_entry import DiaryEntryTable  # noqa: F401

        SQLModel.metadata.drop_all(self._engine)
        logger.warning("Database tables dropped.")
