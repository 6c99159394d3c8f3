from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from treegen.models.championship import Championship


class Team(SQLModel, table=True):
    __table_args__ = (
        # Enforce unique team names within a championship
        SAUniqueConstraint("championship_id", "name", name="uq_championship_team_name"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    championship_id: int = Field(foreign_key="championship.id", index=True)
    name: str
    seed: Optional[int] = Field(default=None)  # 1-based seed (1=highest); null = unseeded
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    deleted_at: Optional[datetime] = Field(default=None)

    # Relationships
    championship: "Championship" = Relationship(back_populates="teams")
