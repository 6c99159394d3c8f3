"""
Play-Off Builder: secondary-stage bracket seeded from prior-stage results.

Standings are computed by the caller from stored results; this module only
turns them into an ordered advancing set and a bracket. The advancing set is a
pluggable input: group standings (top-K per group) or elimination survivors.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from treegen.services.bracket_builder import build_bracket
from treegen.services.generation_errors import InconsistentAdvancingCount, InsufficientEntrants
from treegen.services.tree_types import Entrant, TreeNode
from treegen.utils.bracket_seeding import seed_roster

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GroupStanding:
    """Final ranking of one preliminary group (best first)."""

    group_order: int
    ranking: Tuple[Entrant, ...]


def advancing_from_groups(
    standings: Sequence[GroupStanding],
    per_group: int = 1,
    expected_groups: Optional[int] = None,
) -> List[Entrant]:
    """
    Take the top `per_group` finishers of every group.

    Order: group rank first, then group index, so all group winners come
    before all runners-up:
        [A1, B1, C1, A2, B2, C2, ...]

    Raises:
        InconsistentAdvancingCount: standings for a different number of groups
            than declared, or a group ranking fewer than per_group entrants
    """
    if per_group < 1:
        raise ValueError(f"per_group must be >= 1, got {per_group}")

    if expected_groups is not None and len(standings) != expected_groups:
        raise InconsistentAdvancingCount(
            f"Expected standings for {expected_groups} groups, got {len(standings)}",
            advancing=len(standings),
            expected_groups=expected_groups,
        )

    ordered = sorted(standings, key=lambda s: s.group_order)
    for standing in ordered:
        if len(standing.ranking) < per_group:
            raise InconsistentAdvancingCount(
                f"Group {standing.group_order} ranks {len(standing.ranking)} entrants, "
                f"{per_group} must advance",
                advancing=len(standing.ranking),
                expected_groups=len(ordered),
            )

    advancing: List[Entrant] = []
    for rank in range(per_group):
        for standing in ordered:
            advancing.append(standing.ranking[rank])
    return advancing


def advancing_from_elimination(finishers: Sequence[Entrant]) -> List[Entrant]:
    """Elimination-stage survivors, already in finishing-position order."""
    return list(finishers)


def build_play_off(
    advancing: Sequence[Entrant],
    starting_round: int,
    expected_groups: Optional[int] = None,
) -> TreeNode:
    """
    Build the play-off bracket for an advancing set.

    Args:
        advancing: Advancing entrants ordered by prior-stage standing
        starting_round: Round number the first play-off level is emitted as
        expected_groups: Declared group count of the prior stage, if any

    Returns:
        Root node; seeds follow the advancing order (index 0 = seed 1).
    """
    if starting_round < 1:
        raise ValueError(f"starting_round must be >= 1, got {starting_round}")

    if expected_groups is not None and len(advancing) < expected_groups:
        raise InconsistentAdvancingCount(
            f"{len(advancing)} entrants advancing from {expected_groups} groups",
            advancing=len(advancing),
            expected_groups=expected_groups,
        )
    if not advancing:
        raise InsufficientEntrants(0)

    # Strip prior-stage seeds: position in the advancing order is the new seed.
    reseeded = seed_roster(
        [Entrant(entrant_id=e.entrant_id, seed=None, is_team=e.is_team, name=e.name) for e in advancing]
    )

    logger.debug(
        "Play-off from round %d: %d advancing entrants%s",
        starting_round,
        len(reseeded),
        f" out of {expected_groups} groups" if expected_groups is not None else "",
    )
    return build_bracket(reseeded)
