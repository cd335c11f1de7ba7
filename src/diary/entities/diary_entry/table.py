"""Diary entry database table model."""

from typing import Optional

from sqlalchemy import Column, Text
from sqlmodel import Field, Relationship

from diary.entities.author.table import AuthorTable
from diary.entities.core._base import EntityTable


class DiaryEntryTable(EntityTable, table=True):
    """Database persistence model for diary entries.

    The author is loaded eagerly with every entry.
    """

    __tablename__ = "diary_entries"

    title: str = Field(nullable=False)
    content: str = Field(sa_column=Column(Text, nullable=False))
    author_id: int = Field(foreign_key="authors.id", nullable=False, index=True)

    author: Optional[AuthorTable] = Relationship(sa_relationship_kwargs={"lazy": "joined"})
