from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from treegen.models.championship import Championship


class Competitor(SQLModel, table=True):
    __table_args__ = (SAUniqueConstraint("championship_id", "user_id", name="uq_championship_user"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    championship_id: int = Field(foreign_key="championship.id", index=True)
    user_id: int  # Owned by the accounts layer
    name: str
    seed: Optional[int] = Field(default=None)  # 1-based seed (1=highest); null = unseeded
    confirmed: bool = Field(default=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    deleted_at: Optional[datetime] = Field(default=None)

    # Relationships
    championship: "Championship" = Relationship(back_populates="competitors")
