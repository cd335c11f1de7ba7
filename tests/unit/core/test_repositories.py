"""Unit tests for the author and diary entry repositories."""

from datetime import timedelta

import pytest
from sqlalchemy.exc import IntegrityError

from diary.entities.author import Author, AuthorRepository
from diary.entities.core._base import utcnow
from diary.entities.diary_entry import DiaryEntry, DiaryEntryRepository


def new_author(first: str, last: str, email: str) -> Author:
    return Author(first_name=first, last_name=last, email=email)


class TestAuthorRepository:
    """Test the AuthorRepository against an in-memory database."""

    def test_save_assigns_id_and_timestamps(self, author_repository: AuthorRepository):
        """Should set id, created_at and updated_at on the saved author."""
        author = author_repository.save(new_author("Jane", "Smith", "jane@example.com"))

        assert author.id is not None
        assert author.created_at is not None
        assert author.updated_at is not None

    def test_find_by_id(self, author_repository: AuthorRepository, author: Author):
        """Should return a domain entity equal to the saved one."""
        found = author_repository.find_by_id(author.id)

        assert isinstance(found, Author)
        assert found == author
        assert found.full_name == "John Doe"

    def test_find_by_id_not_found(self, author_repository: AuthorRepository):
        """Should return None for an unknown id."""
        assert author_repository.find_by_id(999) is None

    def test_find_all_ordered_by_name(self, author_repository: AuthorRepository):
        """Should order by last name, then first name."""
        author_repository.save(new_author("Zed", "Berg", "zed@example.com"))
        author_repository.save(new_author("Anna", "Berg", "anna@example.com"))
        author_repository.save(new_author("Carl", "Aas", "carl@example.com"))

        names = [a.full_name for a in author_repository.find_all()]

        assert names == ["Carl Aas", "Anna Berg", "Zed Berg"]

    def test_find_by_email_ignores_case(self, author_repository: AuthorRepository, author: Author):
        """Should find authors whatever the case of the query."""
        assert author_repository.find_by_email(" JOHN@Example.com ") == author
        assert author_repository.exists_by_email("john@EXAMPLE.com")
        assert not author_repository.exists_by_email("nobody@example.com")

    def test_duplicate_email_violates_constraint(self, author_repository: AuthorRepository, author: Author):
        """Should refuse a second row with the same email at the database level."""
        with pytest.raises(IntegrityError):
            author_repository.save(new_author("Other", "Person", "john@example.com"))

        assert author_repository.count() == 1

    def test_update(self, author_repository: AuthorRepository, author: Author):
        """Should persist changed fields and refresh updated_at."""
        before = author.updated_at
        author.last_name = "Smith"

        author_repository.update(author)

        reloaded = author_repository.find_by_id(author.id)
        assert reloaded.last_name == "Smith"
        assert reloaded.updated_at >= before

    def test_update_unsaved_author(self, author_repository: AuthorRepository):
        """Should refuse to update an author without an id."""
        with pytest.raises(ValueError, match="not been saved"):
            author_repository.update(new_author("No", "Id", "no@example.com"))

    def test_update_missing_author(self, author_repository: AuthorRepository):
        """Should refuse to update an author whose row is gone."""
        ghost = new_author("Ghost", "Writer", "ghost@example.com")
        ghost.id = 42

        with pytest.raises(ValueError, match="does not exist"):
            author_repository.update(ghost)

    def test_delete(self, author_repository: AuthorRepository, author: Author):
        """Should remove the row and report whether anything was deleted."""
        assert author_repository.delete(author) is True
        assert author_repository.find_by_id(author.id) is None
        assert author_repository.delete(author) is False

    def test_delete_author_with_entries_is_blocked_by_foreign_key(
        self, author_repository: AuthorRepository, entry: DiaryEntry
    ):
        """Should not orphan entries: the foreign key rejects the delete."""
        with pytest.raises(IntegrityError):
            author_repository.delete(entry.author)

        assert author_repository.find_by_id(entry.author.id) is not None

    def test_count(self, author_repository: AuthorRepository):
        assert author_repository.count() == 0
        author_repository.save(new_author("A", "B", "ab@example.com"))
        assert author_repository.count() == 1


class TestDiaryEntryRepository:
    """Test the DiaryEntryRepository against an in-memory database."""

    @pytest.fixture
    def second_author(self, author_repository: AuthorRepository) -> Author:
        return author_repository.save(new_author("Jane", "Smith", "jane@example.com"))

    def write(self, repo: DiaryEntryRepository, author: Author, title: str, content: str = "Some text") -> DiaryEntry:
        return repo.save(DiaryEntry(title=title, content=content, author=author))

    def test_save_requires_saved_author(self, entry_repository: DiaryEntryRepository):
        """Should refuse entries whose author has no id yet."""
        unsaved = new_author("New", "Author", "new@example.com")

        with pytest.raises(ValueError, match="author must be saved"):
            self.write(entry_repository, unsaved, "Title")

    def test_find_by_id_loads_author(self, entry_repository: DiaryEntryRepository, entry: DiaryEntry):
        """Should return the entry with its author attached."""
        found = entry_repository.find_by_id(entry.id)

        assert found == entry
        assert found.title == "First day"
        assert found.author.email == "john@example.com"
        assert found.author.id == entry.author.id

    def test_find_by_id_not_found(self, entry_repository: DiaryEntryRepository):
        assert entry_repository.find_by_id(123) is None

    def test_find_all_newest_first(self, entry_repository: DiaryEntryRepository, author: Author):
        """Should list the most recently created entry first."""
        self.write(entry_repository, author, "One")
        self.write(entry_repository, author, "Two")
        self.write(entry_repository, author, "Three")

        titles = [e.title for e in entry_repository.find_all()]

        assert titles == ["Three", "Two", "One"]

    def test_find_by_author(self, entry_repository: DiaryEntryRepository, author: Author, second_author: Author):
        """Should only return the author's own entries."""
        self.write(entry_repository, author, "Mine")
        self.write(entry_repository, second_author, "Hers")

        assert [e.title for e in entry_repository.find_by_author(author)] == ["Mine"]
        assert [e.title for e in entry_repository.find_by_author_id(second_author.id)] == ["Hers"]

    def test_search_matches_title_or_content_ignoring_case(
        self, entry_repository: DiaryEntryRepository, author: Author
    ):
        """Should match the keyword in titles and contents, newest first."""
        self.write(entry_repository, author, "Holiday plans", "Beach")
        self.write(entry_repository, author, "Groceries", "Buy milk for the HOLIDAY")
        self.write(entry_repository, author, "Work", "Meetings")

        titles = [e.title for e in entry_repository.search_by_title_or_content("holiday")]

        assert titles == ["Groceries", "Holiday plans"]

    def test_search_treats_wildcards_literally(self, entry_repository: DiaryEntryRepository, author: Author):
        """Should not treat % and _ as SQL wildcards."""
        self.write(entry_repository, author, "Progress", "Done 100% today")
        self.write(entry_repository, author, "Other", "Nothing here")

        assert [e.title for e in entry_repository.search_by_title_or_content("%")] == ["Progress"]
        assert entry_repository.search_by_title_or_content("_") == []

    def test_find_by_date(self, entry_repository: DiaryEntryRepository, entry: DiaryEntry):
        """Should find entries created on the given (UTC) day."""
        today = utcnow().date()

        assert entry_repository.find_by_date(today) == [entry]
        assert entry_repository.find_by_date(today - timedelta(days=1)) == []

    def test_find_by_date_range_inclusive(self, entry_repository: DiaryEntryRepository, entry: DiaryEntry):
        """Should include both the first and the last day of the range."""
        today = utcnow().date()

        assert entry_repository.find_by_date_range(today, today) == [entry]
        assert entry_repository.find_by_date_range(today - timedelta(days=3), today) == [entry]
        assert entry_repository.find_by_date_range(today + timedelta(days=1), today + timedelta(days=2)) == []

    def test_update(self, entry_repository: DiaryEntryRepository, entry: DiaryEntry):
        """Should persist title and content changes."""
        entry.title = "Renamed"
        entry.content = "New text"

        entry_repository.update(entry)

        reloaded = entry_repository.find_by_id(entry.id)
        assert reloaded.title == "Renamed"
        assert reloaded.content == "New text"

    def test_update_unsaved_entry(self, entry_repository: DiaryEntryRepository, author: Author):
        with pytest.raises(ValueError):
            entry_repository.update(DiaryEntry(title="T", content="C", author=author))

    def test_delete(self, entry_repository: DiaryEntryRepository, entry: DiaryEntry):
        assert entry_repository.delete(entry) is True
        assert entry_repository.find_by_id(entry.id) is None
        assert entry_repository.delete_by_id(entry.id) is False

    def test_counts(self, entry_repository: DiaryEntryRepository, author: Author, second_author: Author):
        """Should count all entries, per author id and grouped by author."""
        self.write(entry_repository, author, "A1")
        self.write(entry_repository, author, "A2")
        self.write(entry_repository, second_author, "B1")

        assert entry_repository.count() == 3
        assert entry_repository.count_by_author_id(author.id) == 2
        assert entry_repository.count_per_author() == {author.id: 2, second_author.id: 1}
