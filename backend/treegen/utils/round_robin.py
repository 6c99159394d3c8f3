"""
Round-robin scheduling by the circle method.

Members are 0-based indices into a pool's seed-ordered entrant list.
"""

from typing import List, Optional, Tuple


def rr_matches_per_group(group_size: int) -> int:
    """Fights in a full round robin of group_size entrants."""
    return (group_size * (group_size - 1)) // 2


def rr_round_count(group_size: int) -> int:
    """
    Rounds needed for a pool to play everyone once.

    An even pool plays in group_size - 1 rounds; an odd pool needs group_size
    rounds because one entrant rests each round.
    """
    if group_size < 2:
        return 0
    return group_size - 1 if group_size % 2 == 0 else group_size


def round_robin_pairings(group_size: int) -> List[Tuple[int, int, int, int]]:
    """
    Every pairing of a pool, round by round, as
    (round, sequence_in_round, member_a, member_b) with member_a < member_b.

    Member 0 keeps its seat while the others move one seat on each round, and
    seat i faces seat (last - i). An odd pool gets an empty seat; whoever
    faces it rests that round.

    Pool of 4: round 1 -> (0,3) (1,2); round 2 -> (0,2) (1,3); round 3 -> (0,1) (2,3)
    """
    if group_size < 2:
        return []

    seats: List[Optional[int]] = list(range(group_size))
    if group_size % 2:
        seats.append(None)
    last = len(seats) - 1

    pairings: List[Tuple[int, int, int, int]] = []
    for round_number in range(1, len(seats)):
        sequence = 0
        for i in range(len(seats) // 2):
            a, b = seats[i], seats[last - i]
            if a is None or b is None:
                continue
            sequence += 1
            pairings.append((round_number, sequence, min(a, b), max(a, b)))
        seats = [seats[0], seats[-1]] + seats[1:-1]

    return pairings
