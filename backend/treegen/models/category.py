from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from treegen.models.championship import Championship


class Category(SQLModel, table=True):
    id: Optional[int] = Field(default=None, primary_key=True)
    name: str
    is_team: bool = Field(default=False)  # Team categories fight with teams, others with competitors
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))

    # Relationships
    championships: List["Championship"] = Relationship(back_populates="category")
