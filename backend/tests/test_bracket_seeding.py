"""
Tests for bracket sizing, seed placement and roster seeding.
"""

import pytest

from treegen.services.tree_types import Entrant
from treegen.utils.bracket_seeding import (
    bracket_seed_positions,
    bracket_size,
    bye_count,
    round_count,
    seed_roster,
)


def _meeting_round(positions, seed_i, seed_j):
    """Earliest round two seeds can meet: smallest r whose 2^r-slot block holds both."""
    idx_i = positions.index(seed_i)
    idx_j = positions.index(seed_j)
    r = 0
    while idx_i != idx_j:
        idx_i //= 2
        idx_j //= 2
        r += 1
    return r


class TestBracketSize:
    def test_powers_of_two(self):
        assert [bracket_size(n) for n in (1, 2, 3, 4, 5, 8, 9, 16, 17)] == [1, 2, 4, 4, 8, 8, 16, 16, 32]

    def test_empty(self):
        assert bracket_size(0) == 0

    def test_byes_and_rounds(self):
        assert bye_count(5) == 3
        assert round_count(5) == 3
        assert round_count(1) == 0
        assert round_count(2) == 1


class TestBracketSeedPositions:
    def test_2_slots(self):
        assert bracket_seed_positions(2) == [1, 2]

    def test_4_slots(self):
        assert bracket_seed_positions(4) == [1, 4, 2, 3]

    def test_8_slots(self):
        assert bracket_seed_positions(8) == [1, 8, 4, 5, 2, 7, 3, 6]

    def test_16_slots(self):
        expected = [1, 16, 8, 9, 4, 13, 5, 12, 2, 15, 7, 10, 3, 14, 6, 11]
        assert bracket_seed_positions(16) == expected

    def test_all_seeds_present(self):
        for n in (1, 2, 4, 8, 16, 32, 64):
            assert sorted(bracket_seed_positions(n)) == list(range(1, n + 1))

    def test_first_round_pairs_sum(self):
        """Seed s always opens against seed n + 1 - s."""
        for n in (2, 4, 8, 16, 32):
            positions = bracket_seed_positions(n)
            for k in range(0, n, 2):
                assert positions[k] + positions[k + 1] == n + 1

    def test_rejects_non_power_of_two(self):
        with pytest.raises(ValueError):
            bracket_seed_positions(6)

    @pytest.mark.parametrize("n", [2, 4, 8, 16, 32])
    def test_top_seeds_separated(self, n):
        """Seeds i < j both within the top 2^k meet no earlier than round log2(n) - k + 1."""
        positions = bracket_seed_positions(n)
        total_rounds = n.bit_length() - 1
        for j in range(2, n + 1):
            k = (j - 1).bit_length()  # ceil(log2(j))
            for i in range(1, j):
                assert _meeting_round(positions, i, j) >= total_rounds - k + 1

    def test_top_two_meet_only_in_final(self):
        positions = bracket_seed_positions(32)
        assert _meeting_round(positions, 1, 2) == 5


class TestSeedRoster:
    def test_input_order_when_unseeded(self):
        roster = [Entrant(entrant_id=i, seed=None) for i in (30, 10, 20)]
        seeded = seed_roster(roster)
        assert [(e.entrant_id, e.seed) for e in seeded] == [(30, 1), (10, 2), (20, 3)]

    def test_declared_seeds_first_then_unseeded(self):
        roster = [
            Entrant(entrant_id=1, seed=None),
            Entrant(entrant_id=2, seed=2),
            Entrant(entrant_id=3, seed=1),
            Entrant(entrant_id=4, seed=None),
        ]
        seeded = seed_roster(roster)
        assert [e.entrant_id for e in seeded] == [3, 2, 1, 4]
        assert [e.seed for e in seeded] == [1, 2, 3, 4]

    def test_duplicate_seeds_break_by_input_order(self):
        roster = [Entrant(entrant_id=i, seed=1) for i in (7, 8, 9)]
        assert [e.entrant_id for e in seed_roster(roster)] == [7, 8, 9]

    def test_input_not_mutated(self):
        roster = [Entrant(entrant_id=1, seed=5, name="Ana")]
        seeded = seed_roster(roster)
        assert roster[0].seed == 5
        assert seeded[0].seed == 1
        assert seeded[0].name == "Ana"
