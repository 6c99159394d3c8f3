"""
Generation Engine — single entry point for building championship trees.

Control flow:
1. Resolve settings (absent -> DEFAULT_SETTINGS) and select a strategy
2. Seed and validate the roster
3. Preliminary stage configured: round-robin groups in round 1
   Otherwise: the strategy's elimination bracket from round 1
4. Later stages (generate_next_stage) build from an advancing set supplied by
   the caller, with rounds continuing after the previous stage

Generation is pure: no I/O, no clock, no randomness. The same inputs always
produce equal GenerationResult objects.
"""

import logging
from typing import Optional, Sequence

from treegen.services.bracket_builder import build_bracket
from treegen.services.fight_emitter import emit_fights, group_fights_by_round
from treegen.services.generation_errors import InsufficientEntrants, InvalidGroupSize, InvalidRoster
from treegen.services.playoff_builder import build_play_off
from treegen.services.preliminary_grouper import group_entrants
from treegen.services.strategy_selector import Strategy, resolve_settings, select_strategy
from treegen.services.tree_types import (
    Entrant,
    GenerationResult,
    GenerationSettings,
    Stage,
    TreeNode,
)
from treegen.utils.bracket_seeding import seed_roster

logger = logging.getLogger(__name__)

STAGE_LABELS = {
    Strategy.SINGLE_ELIMINATION_INDIVIDUAL: "Bracket",
    Strategy.SINGLE_ELIMINATION_TEAM: "Team Bracket",
    Strategy.PLAY_OFF_INDIVIDUAL: "Play-off",
    Strategy.PLAY_OFF_TEAM: "Team Play-off",
}


def validate_roster(entrants: Sequence[Entrant], is_team_category: bool) -> None:
    """Every entrant must be of the category's kind, and none may be a bye."""
    for entrant in entrants:
        if entrant.is_bye:
            raise InvalidRoster("Roster must not contain bye placeholders")
        if entrant.is_team != bool(is_team_category):
            expected = "teams" if is_team_category else "competitors"
            raise InvalidRoster(
                f"Category expects {expected}, got entrant {entrant.entrant_id} "
                f"({'team' if entrant.is_team else 'competitor'})"
            )

    ids = [e.entrant_id for e in entrants if e.entrant_id is not None]
    if len(set(ids)) != len(ids):
        raise InvalidRoster("Roster lists the same entrant more than once")


def _build_elimination(strategy: Strategy, entrants: Sequence[Entrant]) -> TreeNode:
    if strategy.is_play_off:
        return build_play_off(entrants, starting_round=1)
    return build_bracket(entrants)


def _elimination_result(strategy: Strategy, root: TreeNode, starting_round: int) -> GenerationResult:
    fights = emit_fights(root, starting_round, STAGE_LABELS[strategy])
    return GenerationResult(
        strategy=strategy,
        stage=Stage.ELIMINATION,
        groups=tuple(group_fights_by_round(fights)),
    )


def generate(
    roster: Sequence[Entrant],
    settings: Optional[GenerationSettings],
    is_team_category: bool,
) -> GenerationResult:
    """
    Generate the first stage of a championship.

    Args:
        roster: Entrants in input order; declared seeds are honored, ties and
            missing seeds fall back to input order
        settings: Settings snapshot, or None when no settings record exists
        is_team_category: Read from the owning category

    Returns:
        GenerationResult with preliminary groups or elimination rounds

    Raises:
        InsufficientEntrants, InvalidGroupSize, InvalidRoster
    """
    resolved = resolve_settings(settings)
    strategy = select_strategy(is_team_category, settings)

    if not roster:
        raise InsufficientEntrants(0)
    validate_roster(roster, is_team_category)
    entrants = seed_roster(roster)

    if resolved.has_preliminary:
        if resolved.preliminary_group_size is None or resolved.preliminary_group_size < 1:
            raise InvalidGroupSize(resolved.preliminary_group_size)
        groups = group_entrants(entrants, resolved.preliminary_group_size)
        result = GenerationResult(strategy=strategy, stage=Stage.PRELIMINARY, groups=tuple(groups))
    else:
        root = _build_elimination(strategy, entrants)
        result = _elimination_result(strategy, root, starting_round=1)

    logger.debug(
        "Generated %s stage with %s: %d entrants, %d groups, %d fights",
        result.stage.value,
        strategy.value,
        len(entrants),
        len(result.groups),
        len(result.fights),
    )
    return result


def generate_next_stage(
    advancing: Sequence[Entrant],
    settings: Optional[GenerationSettings],
    is_team_category: bool,
    starting_round: int,
    expected_groups: Optional[int] = None,
) -> GenerationResult:
    """
    Generate the elimination stage that follows a previous stage.

    Args:
        advancing: Advancing entrants ordered by prior-stage standing (see
            playoff_builder.advancing_from_groups / advancing_from_elimination)
        settings: Settings snapshot, or None
        is_team_category: Read from the owning category
        starting_round: Round number of the first generated round
        expected_groups: Declared group count of the prior stage, if any

    Raises:
        InsufficientEntrants, InconsistentAdvancingCount, InvalidRoster
    """
    strategy = select_strategy(is_team_category, settings)

    if starting_round < 1:
        raise ValueError(f"starting_round must be >= 1, got {starting_round}")
    validate_roster(advancing, is_team_category)

    # Any later stage is seeded from the advancing order, whatever the tree type.
    root = build_play_off(advancing, starting_round, expected_groups=expected_groups)

    result = _elimination_result(strategy, root, starting_round)
    logger.debug(
        "Generated next stage with %s from round %d: %d advancing, %d fights",
        strategy.value,
        starting_round,
        len(advancing),
        len(result.fights),
    )
    return result
