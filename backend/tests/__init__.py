# Force SQLModel table registration at test discovery time
# This ensures all models are registered before any test database creation
from treegen.models.category import Category  # noqa: F401
from treegen.models.championship import Championship  # noqa: F401
from treegen.models.championship_settings import ChampionshipSettings  # noqa: F401
from treegen.models.competitor import Competitor  # noqa: F401
from treegen.models.fight import Fight  # noqa: F401
from treegen.models.fighters_group import FightersGroup  # noqa: F401
from treegen.models.team import Team  # noqa: F401
