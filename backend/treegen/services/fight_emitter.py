"""
Fight Emitter: flattens a built bracket into fight records.

Matches are emitted level by level, first round to final, left to right in
bracket order. Sequence numbers come from bracket position only, so the same
tree always yields the same numbering.
"""

from typing import Dict, List, Optional, Tuple

from treegen.services.tree_types import Entrant, Fight, Group, Leaf, MatchNode, TreeNode


def round_label(matches_in_round: int) -> str:
    """Name of an elimination round by its number of matches."""
    if matches_in_round == 1:
        return "Final"
    if matches_in_round == 2:
        return "Semifinal"
    if matches_in_round == 4:
        return "Quarterfinal"
    return f"Round of {matches_in_round * 2}"


def matches_by_level(root: TreeNode) -> Dict[int, List[MatchNode]]:
    """Collect match nodes per level, each level ordered left to right."""
    levels: Dict[int, List[MatchNode]] = {}

    def visit(node: TreeNode) -> None:
        if isinstance(node, Leaf):
            return
        visit(node.left)
        visit(node.right)
        levels.setdefault(node.level, []).append(node)

    visit(root)
    for nodes in levels.values():
        nodes.sort(key=lambda m: m.position)
    return levels


def _side(child: TreeNode) -> Tuple[Optional[Entrant], Optional[int]]:
    """(known entrant, feeding fight sequence) for one side of a match."""
    if isinstance(child, Leaf):
        return child.entrant, None
    # A bye match advances its real entrant without a contest.
    return child.advancing_entrant(), child.position + 1


def emit_fights(root: TreeNode, round: int, group: str) -> List[Fight]:
    """
    Emit every match of a bracket as a Fight.

    Args:
        root: Bracket root
        round: Round number of the first level
        group: Stage label used as prefix of each round's group name

    Returns:
        Fights ordered by round, then sequence. A lone-leaf tree has none.
    """
    fights: List[Fight] = []
    levels = matches_by_level(root)
    for level in sorted(levels):
        nodes = levels[level]
        round_number = round + level - 1
        name = f"{group} {round_label(len(nodes))}"
        for node in nodes:
            entrant_a, source_a = _side(node.left)
            entrant_b, source_b = _side(node.right)
            fights.append(
                Fight(
                    round=round_number,
                    group=name,
                    order=node.position + 1,
                    sequence=node.position + 1,
                    entrant_a=entrant_a,
                    entrant_b=entrant_b,
                    is_bye=node.is_bye,
                    source_a=source_a,
                    source_b=source_b,
                )
            )
    return fights


def group_fights_by_round(fights: List[Fight]) -> List[Group]:
    """
    Wrap emitted elimination fights into one Group per round.

    A group's entrants are the real entrants already known to play in that
    round: everyone in the first round, bye beneficiaries afterwards.
    """
    by_round: Dict[int, List[Fight]] = {}
    for fight in fights:
        by_round.setdefault(fight.round, []).append(fight)

    groups: List[Group] = []
    for round_number in sorted(by_round):
        round_fights = sorted(by_round[round_number], key=lambda f: f.sequence)
        members: List[Entrant] = []
        for fight in round_fights:
            for entrant in fight.entrants:
                if entrant is not None and not entrant.is_bye:
                    members.append(entrant)
        groups.append(
            Group(
                name=round_fights[0].group,
                round=round_number,
                order=1,
                entrants=tuple(members),
                fights=tuple(round_fights),
            )
        )
    return groups
