"""Author database table model."""

from sqlmodel import Field

from diary.entities.core._base import EntityTable


class AuthorTable(EntityTable, table=True):
    """Database persistence model for authors."""

    __tablename__ = "authors"

    first_name: str = Field(nullable=False)
    last_name: str = Field(nullable=False)
    email: str = Field(nullable=False, unique=True, index=True)
