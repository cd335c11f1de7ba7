"""Entity: Author."""

import re
from typing import Any

from pydantic import Field, field_validator

from diary.entities.core._base import Entity, require_text

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


def is_valid_email(email: str | None) -> bool:
    """True when ``email`` looks like ``local@domain.tld`` after trimming."""
    if email is None:
        return False
    return EMAIL_PATTERN.match(email.strip().lower()) is not None


class Author(Entity):
    """Author of diary entries.

    Names are trimmed and must not be blank. The email is trimmed, lower-cased
    and checked against a simple ``local@domain.tld`` pattern. Two authors are
    the same author when they share an email address.
    """

    first_name: str = Field(description="Author's first name")
    last_name: str = Field(description="Author's last name")
    email: str = Field(description="Author's email address, unique across authors")

    @field_validator("first_name", mode="before")
    @classmethod
    def _check_first_name(cls, value: Any) -> str:
        return require_text(value, "First name")

    @field_validator("last_name", mode="before")
    @classmethod
    def _check_last_name(cls, value: Any) -> str:
        return require_text(value, "Last name")

    @field_validator("email", mode="before")
    @classmethod
    def _check_email(cls, value: Any) -> str:
        email = require_text(value, "Email").lower()
        if not EMAIL_PATTERN.match(email):
            raise ValueError(f"Invalid email format: {email}")
        return email

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def __str__(self) -> str:
        return f"{self.full_name} ({self.email})"

    def __eq__(self, other: Any) -> bool:
        """Compare authors by email address."""
        if not isinstance(other, Author):
            return False
        return self.email == other.email

    def __hash__(self) -> int:
        return hash(self.email)
