"""
Preliminary Grouper — balanced round-robin pools for the first stage.

Entrants are assigned to pools in contiguous seed blocks (no serpentine, no
randomization), and every pool plays a full round robin scheduled by the
circle method so each entrant's fights are spread across the pool schedule.
"""

import logging
from math import ceil
from typing import List, Sequence

from treegen.services.generation_errors import InvalidGroupSize
from treegen.services.tree_types import Entrant, Fight, Group
from treegen.utils.round_robin import round_robin_pairings

logger = logging.getLogger(__name__)

PRELIMINARY_ROUND = 1


def compute_groups_count(entrant_count: int, group_size: int) -> int:
    """
    Compute number of preliminary groups.

    Rules:
    - remainder 0 or 1: entrant_count // group_size groups (a lone leftover
      entrant joins an existing group)
    - otherwise: ceil(entrant_count / group_size) groups
    - then reduce until no group would hold a single entrant

    Examples (group_size 3):
    - 9 entrants  -> 3 groups
    - 10 entrants -> 3 groups
    - 11 entrants -> 4 groups
    - 2 entrants  -> 1 group
    """
    if entrant_count <= 0:
        return 0
    if group_size < 1:
        raise InvalidGroupSize(group_size)

    if entrant_count % group_size <= 1:
        groups_count = max(1, entrant_count // group_size)
    else:
        groups_count = ceil(entrant_count / group_size)

    while groups_count > 1 and entrant_count < 2 * groups_count:
        groups_count -= 1
    return groups_count


def compute_group_capacities(entrant_count: int, groups_count: int) -> List[int]:
    """
    Pool sizes for entrant_count entrants spread over groups_count pools.

    Sizes differ by at most one and the leftover entrants go to the first
    pools, so Pool A is never smaller than a later pool (10 over 3 -> [4, 3, 3]).
    """
    if groups_count <= 0:
        return []

    per_pool, leftover = divmod(entrant_count, groups_count)
    return [per_pool + (1 if order < leftover else 0) for order in range(groups_count)]


def group_name(order: int) -> str:
    """Pool label: 1 -> 'A', 26 -> 'Z', 27 -> 'AA'."""
    label = ""
    n = order
    while n > 0:
        n, rem = divmod(n - 1, 26)
        label = chr(ord("A") + rem) + label
    return f"Pool {label}"


def round_robin_fights(group: Group, first_sequence: int = 1) -> List[Fight]:
    """
    Schedule every unordered pair of a group's members exactly once.

    Fights follow circle-method order. `order` restarts at 1 in each group;
    `sequence` continues from first_sequence so it stays unique across all
    groups of the round.
    """
    fights: List[Fight] = []
    members = group.entrants
    for offset, (_, _, idx_a, idx_b) in enumerate(round_robin_pairings(len(members))):
        fights.append(
            Fight(
                round=group.round,
                group=group.name,
                order=offset + 1,
                sequence=first_sequence + offset,
                entrant_a=members[idx_a],
                entrant_b=members[idx_b],
            )
        )
    return fights


def group_entrants(entrants: Sequence[Entrant], group_size: int) -> List[Group]:
    """
    Partition seed-ordered entrants into round-robin groups for round 1.

    Args:
        entrants: Entrants in seed order (best first)
        group_size: Target group size (>= 1)

    Returns:
        Groups in order, each carrying its members and round-robin fights.
        An empty roster yields an empty list.
    """
    if group_size is None or group_size < 1:
        raise InvalidGroupSize(group_size)

    entrant_count = len(entrants)
    if entrant_count == 0:
        return []

    groups_count = compute_groups_count(entrant_count, group_size)
    capacities = compute_group_capacities(entrant_count, groups_count)

    groups: List[Group] = []
    start = 0
    next_sequence = 1
    for index, capacity in enumerate(capacities):
        members = tuple(entrants[start : start + capacity])
        start += capacity

        bare = Group(name=group_name(index + 1), round=PRELIMINARY_ROUND, order=index + 1, entrants=members)
        fights = round_robin_fights(bare, first_sequence=next_sequence)
        next_sequence += len(fights)
        groups.append(
            Group(
                name=bare.name,
                round=bare.round,
                order=bare.order,
                entrants=members,
                fights=tuple(fights),
            )
        )

    logger.debug(
        "Grouped %d entrants into %d groups (target size %d, sizes %s)",
        entrant_count,
        groups_count,
        group_size,
        capacities,
    )
    return groups
