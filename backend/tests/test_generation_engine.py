"""
End-to-end generation over in-memory rosters (no database).
"""

import pytest

from treegen.services.generation_engine import generate, generate_next_stage, validate_roster
from treegen.services.generation_errors import (
    InconsistentAdvancingCount,
    InsufficientEntrants,
    InvalidGroupSize,
    InvalidRoster,
)
from treegen.services.playoff_builder import GroupStanding, advancing_from_groups
from treegen.services.strategy_selector import Strategy
from treegen.services.tree_types import BYE, Entrant, GenerationSettings, Stage, TreeType

SINGLE_ELIMINATION = GenerationSettings(tree_type=TreeType.SINGLE_ELIMINATION)


def _roster(n: int, is_team: bool = False) -> list:
    return [Entrant(entrant_id=100 + i, seed=None, is_team=is_team, name=f"E{i}") for i in range(1, n + 1)]


def _ids(fight):
    return tuple(e.entrant_id if e is not None else None for e in fight.entrants)


class TestSingleElimination:
    def test_five_competitors(self):
        result = generate(_roster(5), SINGLE_ELIMINATION, is_team_category=False)

        assert result.strategy == Strategy.SINGLE_ELIMINATION_INDIVIDUAL
        assert result.stage == Stage.ELIMINATION
        assert result.rounds == [1, 2, 3]
        assert [len(result.fights_in_round(r)) for r in result.rounds] == [4, 2, 1]
        assert [_ids(f) for f in result.fights_in_round(1)] == [
            (101, None), (104, 105), (102, None), (103, None),
        ]
        assert sum(1 for f in result.fights if f.is_bye) == 3
        assert sum(1 for f in result.fights if not f.is_bye) == 4

    def test_round_two_carries_bye_winners(self):
        result = generate(_roster(5), SINGLE_ELIMINATION, is_team_category=False)
        semis = result.fights_in_round(2)
        assert [_ids(f) for f in semis] == [(101, None), (102, 103)]
        assert [(f.source_a, f.source_b) for f in semis] == [(1, 2), (3, 4)]

    def test_declared_seeds_are_honored(self):
        roster = [
            Entrant(entrant_id=10, seed=3),
            Entrant(entrant_id=11, seed=1),
            Entrant(entrant_id=12, seed=2),
        ]
        result = generate(roster, SINGLE_ELIMINATION, is_team_category=False)
        assert [_ids(f) for f in result.fights_in_round(1)] == [(11, None), (12, 10)]

    def test_single_entrant_has_no_fights(self):
        result = generate(_roster(1), SINGLE_ELIMINATION, is_team_category=False)
        assert result.groups == ()
        assert result.fights == []

    def test_team_category(self):
        result = generate(
            _roster(6, is_team=True),
            GenerationSettings(tree_type=TreeType.SINGLE_ELIMINATION),
            is_team_category=True,
        )
        assert result.strategy == Strategy.SINGLE_ELIMINATION_TEAM
        assert result.groups[0].name == "Team Bracket Quarterfinal"


class TestDefaults:
    def test_missing_settings_build_individual_play_off(self):
        result = generate(_roster(4), None, is_team_category=False)
        assert result.strategy == Strategy.PLAY_OFF_INDIVIDUAL
        assert result.stage == Stage.ELIMINATION
        assert [g.name for g in result.groups] == ["Play-off Semifinal", "Play-off Final"]

    def test_missing_settings_in_team_category(self):
        result = generate(_roster(4, is_team=True), None, is_team_category=True)
        assert result.strategy == Strategy.PLAY_OFF_INDIVIDUAL
        assert all(e.is_team for g in result.groups for e in g.entrants)

    def test_group_size_ignored_without_preliminary(self):
        settings = GenerationSettings(has_preliminary=False, preliminary_group_size=0)
        result = generate(_roster(3), settings, is_team_category=False)
        assert result.stage == Stage.ELIMINATION


class TestPreliminaryAndPlayOff:
    SETTINGS = GenerationSettings(
        tree_type=TreeType.SINGLE_ELIMINATION, has_preliminary=True, preliminary_group_size=3
    )

    def test_nine_entrants_in_three_pools(self):
        result = generate(_roster(9), self.SETTINGS, is_team_category=False)

        assert result.stage == Stage.PRELIMINARY
        assert result.rounds == [1]
        assert [g.name for g in result.groups] == ["Pool A", "Pool B", "Pool C"]
        assert [[e.entrant_id for e in g.entrants] for g in result.groups] == [
            [101, 102, 103], [104, 105, 106], [107, 108, 109],
        ]
        assert [f.sequence for f in result.fights] == list(range(1, 10))

    def test_group_winners_play_off_from_round_two(self):
        first = generate(_roster(9), self.SETTINGS, is_team_category=False)
        standings = [
            GroupStanding(group_order=g.order, ranking=g.entrants) for g in first.groups
        ]
        advancing = advancing_from_groups(standings, per_group=1, expected_groups=len(first.groups))

        second = generate_next_stage(
            advancing, self.SETTINGS, is_team_category=False, starting_round=2, expected_groups=3
        )

        assert second.stage == Stage.ELIMINATION
        assert second.rounds == [2, 3]
        assert [_ids(f) for f in second.fights_in_round(2)] == [(101, None), (104, 107)]
        assert second.fights_in_round(2)[0].is_bye
        assert sum(1 for f in second.fights if not f.is_bye) == 2
        assert second.groups[-1].name == "Bracket Final"

    def test_next_stage_with_missing_group_fails(self):
        advancing = _roster(2)
        with pytest.raises(InconsistentAdvancingCount):
            generate_next_stage(advancing, self.SETTINGS, False, starting_round=2, expected_groups=3)

    def test_next_stage_rejects_round_zero(self):
        with pytest.raises(ValueError):
            generate_next_stage(_roster(2), self.SETTINGS, False, starting_round=0)

    def test_group_size_one_never_leaves_singletons(self):
        settings = GenerationSettings(has_preliminary=True, preliminary_group_size=1)
        result = generate(_roster(5), settings, is_team_category=False)
        assert [g.size for g in result.groups] == [3, 2]

    def test_invalid_group_size(self):
        settings = GenerationSettings(has_preliminary=True, preliminary_group_size=0)
        with pytest.raises(InvalidGroupSize):
            generate(_roster(5), settings, is_team_category=False)


class TestFailures:
    def test_empty_roster(self):
        with pytest.raises(InsufficientEntrants):
            generate([], SINGLE_ELIMINATION, is_team_category=False)

    def test_roster_kind_must_match_category(self):
        with pytest.raises(InvalidRoster):
            generate(_roster(4, is_team=True), SINGLE_ELIMINATION, is_team_category=False)

    def test_mixed_roster(self):
        roster = _roster(2) + _roster(2, is_team=True)[:1]
        with pytest.raises(InvalidRoster):
            validate_roster(roster, is_team_category=False)

    def test_duplicate_entrant(self):
        roster = _roster(3) + _roster(1)
        with pytest.raises(InvalidRoster):
            generate(roster, SINGLE_ELIMINATION, is_team_category=False)

    def test_bye_in_roster(self):
        with pytest.raises(InvalidRoster):
            generate(_roster(3) + [BYE], SINGLE_ELIMINATION, is_team_category=False)


def test_generation_is_deterministic():
    settings = GenerationSettings(has_preliminary=True, preliminary_group_size=4)
    assert generate(_roster(17), settings, False) == generate(_roster(17), settings, False)
    assert generate(_roster(17), SINGLE_ELIMINATION, False) == generate(_roster(17), SINGLE_ELIMINATION, False)
