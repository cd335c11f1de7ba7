"""Entity package: Author."""

from .entity import Author, is_valid_email
from .repository import AuthorRepository
from .table import AuthorTable

__all__ = ["Author", "AuthorRepository", "AuthorTable", "is_valid_email"]
