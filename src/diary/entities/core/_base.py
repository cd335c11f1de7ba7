from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic import Field as PydanticField
from sqlmodel import Field, SQLModel


def utcnow() -> datetime:
    return datetime.now(UTC)


def require_text(value, label: str) -> str:
    """Trim ``value``, rejecting None and blank strings."""
    if value is None or not str(value).strip():
        raise ValueError(f"{label} cannot be blank")
    return str(value).strip()


def describe_validation_error(exc: Exception) -> str:
    """Render a validation failure as one line for the console."""
    if isinstance(exc, ValidationError):
        messages = []
        for error in exc.errors():
            msg = error.get("msg", "")
            messages.append(msg.removeprefix("Value error, "))
        return "; ".join(messages)
    return str(exc)


class Entity(BaseModel):
    """Base domain entity with a database-assigned integer identifier.

    ``id`` and the timestamps stay ``None`` until the entity is first saved.
    Assignments are validated just like construction.
    """

    model_config = ConfigDict(validate_assignment=True, from_attributes=True)

    id: int | None = PydanticField(default=None, description="Database identifier")

    created_at: datetime | None = PydanticField(default=None)
    updated_at: datetime | None = PydanticField(default=None)

    @property
    def is_persisted(self) -> bool:
        return self.id is not None


class EntityTable(SQLModel, table=False):
    """Base table with an autoincrement integer key and audit timestamps."""

    id: int | None = Field(default=None, primary_key=True)

    created_at: datetime = Field(default_factory=utcnow, nullable=False)
    updated_at: datetime = Field(default_factory=utcnow, nullable=False)
