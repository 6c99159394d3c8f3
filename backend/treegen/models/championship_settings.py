from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Dict, Optional

from sqlalchemy import String
from sqlmodel import Column, Field, Relationship, SQLModel

from treegen.services.tree_types import DEFAULT_SETTINGS

if TYPE_CHECKING:
    from treegen.models.championship import Championship


class ChampionshipSettings(SQLModel, table=True):
    __tablename__ = "championship_settings"

    id: Optional[int] = Field(default=None, primary_key=True)
    championship_id: int = Field(foreign_key="championship.id", unique=True, index=True)
    tree_type: str = Field(default=DEFAULT_SETTINGS.tree_type.value, sa_column=Column(String, nullable=False))
    has_preliminary: bool = Field(default=DEFAULT_SETTINGS.has_preliminary)
    preliminary_group_size: int = Field(default=DEFAULT_SETTINGS.preliminary_group_size)
    advancing_per_group: int = Field(default=DEFAULT_SETTINGS.advancing_per_group)
    alias: Optional[str] = Field(default=None)  # Display name override
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    deleted_at: Optional[datetime] = Field(default=None)

    # Relationships
    championship: "Championship" = Relationship(back_populates="settings")

    def to_payload(self) -> Dict[str, Any]:
        """Raw settings payload, validated leniently by settings_provider.parse_settings."""
        return {
            "treeType": self.tree_type,
            "hasPreliminary": self.has_preliminary,
            "preliminaryGroupSize": self.preliminary_group_size,
            "advancingPerGroup": self.advancing_per_group,
        }
