"""Entity package: DiaryEntry."""

from .entity import DiaryEntry
from .repository import DiaryEntryRepository
from .table import DiaryEntryTable

__all__ = ["DiaryEntry", "DiaryEntryRepository", "DiaryEntryTable"]
