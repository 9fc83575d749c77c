import uuid

from sqlmodel import Field, SQLModel


class MatchRecord(SQLModel, table=True):
    """A board of a round, or a bye when second_id is the BYE sentinel."""

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    tournament_id: str = Field(index=True)
    round_id: str = Field(index=True)
    first_id: str  # white
    second_id: str  # black or "BYE"
    board_number: int = 0  # 0 for byes
    result: str | None = None
