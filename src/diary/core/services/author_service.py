"""Author use cases on top of the author repository."""

from loguru import logger

from diary.entities.author import Author, AuthorRepository


class DuplicateEmailError(ValueError):
    """Raised when an author with the same email address already exists."""

    def __init__(self, email: str):
        super().__init__(f"An author with email '{email}' already exists")
        self.email = email


class AuthorService:
    def __init__(self, author_repository: AuthorRepository):
        self._authors = author_repository

    def create_author(self, first_name: str, last_name: str, email: str) -> Author | None:
        """Create and save an author, or return None when the email is taken.

        Raises:
            pydantic.ValidationError: If a name is blank or the email is malformed.
        """
        author = Author(first_name=first_name, last_name=last_name, email=email)
        if self._authors.exists_by_email(author.email):
            logger.info("Author not created, email already registered: {}", author.email)
            return None
        saved = self._authors.save(author)
        logger.info("Created author {} ({})", saved.id, saved.email)
        return saved

    def create_author_or_raise(self, first_name: str, last_name: str, email: str) -> Author:
        author = self.create_author(first_name, last_name, email)
        if author is None:
            raise DuplicateEmailError(email.strip().lower())
        return author

    def find_by_id(self, author_id: int) -> Author | None:
        return self._authors.find_by_id(author_id)

    def find_by_email(self, email: str) -> Author | None:
        return self._authors.find_by_email(email)

    def find_all(self) -> list[Author]:
        return self._authors.find_all()

    def update(self, author: Author) -> Author:
        """Persist changes to ``author``.

        Raises:
            DuplicateEmailError: If the new email belongs to another author.
        """
        existing = self._authors.find_by_email(author.email)
        if existing is not None and existing.id != author.id:
            raise DuplicateEmailError(author.email)
        updated = self._authors.update(author)
        logger.info("Updated author {}", updated.id)
        return updated

    def delete(self, author: Author) -> bool:
        deleted = self._authors.delete(author)
        if deleted:
            logger.info("Deleted author {} ({})", author.id, author.email)
        return deleted

    def email_exists(self, email: str) -> bool:
        return self._authors.exists_by_email(email)

    def count(self) -> int:
        return self._authors.count()
