from datetime import datetime, timezone
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import UniqueConstraint as SAUniqueConstraint
from sqlmodel import Field, Relationship, SQLModel

if TYPE_CHECKING:
    from treegen.models.category import Category
    from treegen.models.championship_settings import ChampionshipSettings
    from treegen.models.competitor import Competitor
    from treegen.models.fighters_group import FightersGroup
    from treegen.models.team import Team


class Championship(SQLModel, table=True):
    """A category played inside a tournament; owns roster, settings and generated tree."""

    __table_args__ = (SAUniqueConstraint("tournament_id", "category_id", name="uq_tournament_category"),)

    id: Optional[int] = Field(default=None, primary_key=True)
    tournament_id: int = Field(index=True)
    category_id: int = Field(foreign_key="category.id")
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    deleted_at: Optional[datetime] = Field(default=None)  # Soft-delete marker

    # Relationships
    category: "Category" = Relationship(back_populates="championships")
    competitors: List["Competitor"] = Relationship(back_populates="championship")
    teams: List["Team"] = Relationship(back_populates="championship")
    settings: Optional["ChampionshipSettings"] = Relationship(
        back_populates="championship", sa_relationship_kwargs={"uselist": False}
    )
    fighters_groups: List["FightersGroup"] = Relationship(back_populates="championship")

    @property
    def is_team(self) -> bool:
        return bool(self.category and self.category.is_team)
