"""
Bracket Builder — single-elimination tree over a seeded roster.

The roster is padded to the next power of two with byes, leaves are laid out
in classic seeding order (seed 1 vs the last slot, top seeds in opposite
halves), and leaves are paired bottom-up into match nodes. Byes always land
against the top seeds, so two byes never meet.
"""

import logging
from typing import List, Sequence

from treegen.services.generation_errors import InsufficientEntrants
from treegen.services.tree_types import BYE, Entrant, Leaf, MatchNode, TreeNode
from treegen.utils.bracket_seeding import bracket_seed_positions, bracket_size

logger = logging.getLogger(__name__)


def layout_leaves(entrants: Sequence[Entrant]) -> List[Leaf]:
    """
    Place seed-ordered entrants into bracket slots.

    Slot k holds the entrant whose 1-based rank is bracket_seed_positions(p)[k],
    or a bye when that rank exceeds the roster size.
    """
    size = bracket_size(len(entrants))
    leaves: List[Leaf] = []
    for position, rank in enumerate(bracket_seed_positions(size)):
        entrant = entrants[rank - 1] if rank <= len(entrants) else BYE
        leaves.append(Leaf(entrant=entrant, position=position))
    return leaves


def pair_up(nodes: Sequence[TreeNode], level: int) -> List[MatchNode]:
    """Pair adjacent nodes left to right into the matches of the next level."""
    return [
        MatchNode(left=nodes[i], right=nodes[i + 1], level=level, position=i // 2)
        for i in range(0, len(nodes), 2)
    ]


def build_bracket(entrants: Sequence[Entrant]) -> TreeNode:
    """
    Build a single-elimination tree.

    Args:
        entrants: Entrants in seed order (index 0 = seed 1)

    Returns:
        Root node. A single entrant yields a lone Leaf (no matches).

    Raises:
        InsufficientEntrants: empty roster
    """
    if not entrants:
        raise InsufficientEntrants(0)

    level_nodes: List[TreeNode] = list(layout_leaves(entrants))
    level = 0
    while len(level_nodes) > 1:
        level += 1
        level_nodes = list(pair_up(level_nodes, level))

    root = level_nodes[0]
    logger.debug(
        "Built bracket: %d entrants, %d slots, %d rounds",
        len(entrants),
        bracket_size(len(entrants)),
        level,
    )
    return root
