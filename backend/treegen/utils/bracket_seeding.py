"""
Bracket seeding helpers.

Deterministic rules for numbering a roster, sizing a bracket and placing
seeds into bracket slots. Nothing here depends on wall-clock time or on the
iteration order of unordered containers.
"""

from typing import List, Optional, Sequence

from treegen.services.tree_types import Entrant


def bracket_size(entrant_count: int) -> int:
    """Smallest power of two >= entrant_count (0 for an empty roster)."""
    if entrant_count <= 0:
        return 0
    size = 1
    while size < entrant_count:
        size *= 2
    return size


def bye_count(entrant_count: int) -> int:
    return bracket_size(entrant_count) - entrant_count


def round_count(entrant_count: int) -> int:
    """Number of elimination rounds: log2 of the padded bracket size."""
    size = bracket_size(entrant_count)
    rounds = 0
    while size > 1:
        size //= 2
        rounds += 1
    return rounds


def bracket_seed_positions(n: int) -> List[int]:
    """Classic seeded-bracket placement for *n* slots (n a power of two).

    Returns a flat list of seed numbers in bracket position order.
    Consecutive pairs meet in the first round; seed 1 meets seed n, and the
    two top seeds sit in opposite halves so they can only meet in the final:
      2-slot  -> [1, 2]
      4-slot  -> [1, 4, 2, 3]
      8-slot  -> [1, 8, 4, 5, 2, 7, 3, 6]
    """
    if n < 1 or n & (n - 1):
        raise ValueError(f"bracket_seed_positions: n must be a power of two, got {n}")
    if n == 1:
        return [1]

    half = bracket_seed_positions(n // 2)

    expanded: List[int] = []
    for s in half:
        expanded.append(s)
        expanded.append(n + 1 - s)
    return expanded


def seed_roster(entrants: Sequence[Entrant]) -> List[Entrant]:
    """
    Assign final 1-based seeds to a roster.

    Order: declared seed ASC (missing seeds last), then input position, so
    duplicate or missing seeds are broken by stable input order. Returns new
    Entrant objects; the input is left untouched.
    """
    indexed = list(enumerate(entrants))
    indexed.sort(key=lambda pair: (_seed_sort_value(pair[1].seed), pair[0]))

    seeded: List[Entrant] = []
    for rank, (_, entrant) in enumerate(indexed, start=1):
        seeded.append(
            Entrant(
                entrant_id=entrant.entrant_id,
                seed=rank,
                is_team=entrant.is_team,
                name=entrant.name,
            )
        )
    return seeded


def _seed_sort_value(seed: Optional[int]) -> float:
    if seed is None or seed < 1:
        return float("inf")
    return seed
