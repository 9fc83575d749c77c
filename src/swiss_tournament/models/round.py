import uuid
from datetime import UTC, datetime

from sqlmodel import Field, SQLModel


class Round(SQLModel, table=True):
    """One round of a tournament."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    tournament_id: str = Field(index=True)
    round_number: int
    status: str = "active"  # "active", "completed"
    start_time: datetime = Field(default_factory=lambda: datetime.now(UTC))
    end_time: datetime | None = None
