"""
Tree Types: immutable value objects shared by every generation stage.

Entrants, tree nodes, groups and fights are built fresh for one generation run
and never mutated afterwards. Equality is structural, so two runs over the same
roster and settings compare equal field by field.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Iterator, List, Optional, Tuple, Union

if TYPE_CHECKING:
    from treegen.services.strategy_selector import Strategy


class TreeType(str, Enum):
    SINGLE_ELIMINATION = "SINGLE_ELIMINATION"
    PLAY_OFF = "PLAY_OFF"


class Stage(str, Enum):
    PRELIMINARY = "PRELIMINARY"
    ELIMINATION = "ELIMINATION"


# =============================================================================
# Entrants
# =============================================================================


@dataclass(frozen=True)
class Entrant:
    """
    A competitor or a team, seen by the generator as an opaque seedable unit.

    entrant_id: competitor id or team id (None only for the bye placeholder)
    seed: 1-based rank, unique within a generation run once the roster has
          been seeded (None on raw roster input, 0 for the bye)
    """

    entrant_id: Optional[int]
    seed: Optional[int]
    is_team: bool = False
    name: Optional[str] = field(default=None, compare=False)
    is_bye: bool = False


BYE = Entrant(entrant_id=None, seed=0, is_bye=True, name="BYE")


# =============================================================================
# Settings
# =============================================================================


@dataclass(frozen=True)
class GenerationSettings:
    tree_type: Optional[TreeType] = TreeType.PLAY_OFF  # None: stored value matched no known tree type
    has_preliminary: bool = False
    preliminary_group_size: int = 2
    advancing_per_group: int = 1  # K: finishers per group entering the play-off


DEFAULT_SETTINGS = GenerationSettings()


# =============================================================================
# Tree nodes
# =============================================================================


@dataclass(frozen=True)
class Leaf:
    """Bracket slot holding one entrant or the bye placeholder."""

    entrant: Entrant
    position: int  # 0-based slot index in bracket order
    level: int = 0

    @property
    def is_bye(self) -> bool:
        return self.entrant.is_bye


@dataclass(frozen=True)
class MatchNode:
    """
    Future match between the winners of two subtrees.

    level: 1 for first-round matches, increasing toward the final
    position: 0-based index of the match within its level, left to right
    """

    left: "TreeNode"
    right: "TreeNode"
    level: int
    position: int

    @property
    def is_bye(self) -> bool:
        # Only first-round matches can hold a bye; seeding never pairs two byes.
        return isinstance(self.left, Leaf) and isinstance(self.right, Leaf) and (
            self.left.is_bye or self.right.is_bye
        )

    def advancing_entrant(self) -> Optional[Entrant]:
        """Entrant known to come out of this match without a contest, if any."""
        left, right = self.left, self.right
        if isinstance(left, Leaf) and isinstance(right, Leaf) and (left.is_bye or right.is_bye):
            return right.entrant if left.is_bye else left.entrant
        return None


TreeNode = Union[Leaf, MatchNode]


def iter_leaves(node: TreeNode) -> Iterator[Leaf]:
    """Yield leaves left to right."""
    if isinstance(node, Leaf):
        yield node
        return
    yield from iter_leaves(node.left)
    yield from iter_leaves(node.right)


# =============================================================================
# Emitted structure
# =============================================================================


@dataclass(frozen=True)
class Fight:
    round: int
    group: str
    order: int  # 1-based within its group
    sequence: int  # 1-based, unique within the round
    entrant_a: Optional[Entrant]
    entrant_b: Optional[Entrant]
    is_bye: bool = False
    source_a: Optional[int] = None  # sequence of the previous-round fight feeding side A
    source_b: Optional[int] = None

    @property
    def entrants(self) -> Tuple[Optional[Entrant], Optional[Entrant]]:
        return (self.entrant_a, self.entrant_b)


@dataclass(frozen=True)
class Group:
    name: str
    round: int
    order: int  # 1-based within the round
    entrants: Tuple[Entrant, ...]
    fights: Tuple[Fight, ...] = ()

    @property
    def size(self) -> int:
        return len(self.entrants)


@dataclass(frozen=True)
class GenerationResult:
    """Complete, internally consistent output of one generation run."""

    strategy: "Strategy"
    stage: Stage
    groups: Tuple[Group, ...]

    @property
    def fights(self) -> List[Fight]:
        return [fight for group in self.groups for fight in group.fights]

    @property
    def rounds(self) -> List[int]:
        return sorted({group.round for group in self.groups})

    @property
    def first_round(self) -> Optional[int]:
        rounds = self.rounds
        return rounds[0] if rounds else None

    def groups_in_round(self, round_number: int) -> List[Group]:
        return [group for group in self.groups if group.round == round_number]

    def fights_in_round(self, round_number: int) -> List[Fight]:
        return [fight for fight in self.fights if fight.round == round_number]

