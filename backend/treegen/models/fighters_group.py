from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import JSON
from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Column, Field, Relationship, SQLModel

if TYPE_CHECKING:
    from treegen.models.championship import Championship
    from treegen.models.fight import Fight


class FightersGroup(SQLModel, table=True):
    __tablename__ = "fighters_group"
    __table_args__ = (SAUniqueConstraint("championship_id", "round", "order", name="uq_group_round_order"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    championship_id: int = Field(foreign_key="championship.id", index=True)
    round: int = Field(index=True)
    order: int  # 1-based within the round
    name: str
    stage: str  # "PRELIMINARY" | "ELIMINATION"
    strategy: str
    # Ids of the competitors or teams placed in this group, in seed order
    entrant_ids: List[int] = Field(default_factory=list, sa_column=Column(JSON, nullable=False))
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Relationships
    championship: "Championship" = Relationship(back_populates="fighters_groups")
    fights: List["Fight"] = Relationship(back_populates="fighters_group")
