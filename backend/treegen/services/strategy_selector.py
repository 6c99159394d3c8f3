"""
Strategy Selector — picks one of the four tree generation strategies.

Selection is an exhaustive lookup over (is_team, tree_type). Absent settings
never abort generation: they resolve to DEFAULT_SETTINGS, which selects the
individual play-off strategy.
"""

from dataclasses import replace
from enum import Enum
from typing import Dict, Optional, Tuple

from treegen.services.tree_types import DEFAULT_SETTINGS, GenerationSettings, TreeType


class Strategy(str, Enum):
    SINGLE_ELIMINATION_INDIVIDUAL = "SINGLE_ELIMINATION_INDIVIDUAL"
    SINGLE_ELIMINATION_TEAM = "SINGLE_ELIMINATION_TEAM"
    PLAY_OFF_INDIVIDUAL = "PLAY_OFF_INDIVIDUAL"
    PLAY_OFF_TEAM = "PLAY_OFF_TEAM"

    @property
    def tree_type(self) -> TreeType:
        return _STRATEGY_KEYS[self][1]

    @property
    def is_team(self) -> bool:
        return _STRATEGY_KEYS[self][0]

    @property
    def is_play_off(self) -> bool:
        return self.tree_type == TreeType.PLAY_OFF


FALLBACK_STRATEGY = Strategy.PLAY_OFF_INDIVIDUAL

_STRATEGY_TABLE: Dict[Tuple[bool, TreeType], Strategy] = {
    (False, TreeType.SINGLE_ELIMINATION): Strategy.SINGLE_ELIMINATION_INDIVIDUAL,
    (True, TreeType.SINGLE_ELIMINATION): Strategy.SINGLE_ELIMINATION_TEAM,
    (False, TreeType.PLAY_OFF): Strategy.PLAY_OFF_INDIVIDUAL,
    (True, TreeType.PLAY_OFF): Strategy.PLAY_OFF_TEAM,
}

_STRATEGY_KEYS: Dict[Strategy, Tuple[bool, TreeType]] = {v: k for k, v in _STRATEGY_TABLE.items()}


def resolve_settings(settings: Optional[GenerationSettings]) -> GenerationSettings:
    """
    Single injection point for the global default settings.

    An unmatched tree type builds as the default tree type; strategy selection
    still sees it as unmatched.
    """
    if settings is None:
        return DEFAULT_SETTINGS
    if settings.tree_type is None:
        return replace(settings, tree_type=DEFAULT_SETTINGS.tree_type)
    return settings


def select_strategy(category_is_team: bool, settings: Optional[GenerationSettings]) -> Strategy:
    """
    Choose the generation strategy for a category and settings snapshot.

    Missing settings select the individual play-off strategy regardless of
    the category kind, as does any unmatched tree type.
    """
    if settings is None or settings.tree_type is None:
        return FALLBACK_STRATEGY
    return _STRATEGY_TABLE.get((bool(category_is_team), settings.tree_type), FALLBACK_STRATEGY)
