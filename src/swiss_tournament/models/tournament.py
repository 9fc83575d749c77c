import uuid
from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


class Tournament(SQLModel, table=True):
    """A Swiss tournament and its round limit."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    name: str
    description: str = ""
    total_rounds: int
    time_control: str = ""
    status: str = "draft"  # "draft", "active", "completed"
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class Entrant(SQLModel, table=True):
    """A competitor registered in one tournament."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    tournament_id: str = Field(index=True)
    name: str
    handle: str = ""
    seed: int | None = None
    status: str = "active"  # "active", "withdrawn"
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
