from treegen.models.category import Category
from treegen.models.championship import Championship
from treegen.models.championship_settings import ChampionshipSettings
from treegen.models.competitor import Competitor
from treegen.models.fight import Fight
from treegen.models.fighters_group import FightersGroup
from treegen.models.team import Team

__all__ = [
    "Category",
    "Championship",
    "ChampionshipSettings",
    "Competitor",
    "Team",
    "FightersGroup",
    "Fight",
]
