from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from treegen.models.fighters_group import FightersGroup


class Fight(SQLModel, table=True):
    __table_args__ = (SAUniqueConstraint("championship_id", "round", "sequence", name="uq_fight_round_sequence"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    fighters_group_id: int = Field(foreign_key="fighters_group.id", index=True)
    championship_id: int = Field(foreign_key="championship.id", index=True)
    round: int
    order: int  # 1-based within the group
    sequence: int  # 1-based, unique within (championship, round)
    is_bye: bool = Field(default=False)  # Auto-advance; never needs a result

    # Sides: competitor ids in individual categories, team ids in team categories.
    # Null while the side waits on an earlier fight (or is the bye side).
    entrant_a_id: Optional[int] = Field(default=None)
    entrant_b_id: Optional[int] = Field(default=None)
    entrant_kind: str  # "competitor" | "team"

    # Upstream fight feeding each side (winner advances)
    source_fight_a_id: Optional[int] = Field(default=None, foreign_key="fight.id")
    source_fight_b_id: Optional[int] = Field(default=None, foreign_key="fight.id")

    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Relationships
    fighters_group: "FightersGroup" = Relationship(back_populates="fights")
