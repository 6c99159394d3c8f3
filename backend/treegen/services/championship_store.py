"""
Championship Store: persistence collaborator of the generation engine.

Provides the roster and settings snapshots the engine consumes, writes a
GenerationResult as one unit of work, and owns the soft-delete/restore
lifecycle of championship records. The engine itself never imports this
module.

Guarantees:
- persist_result is all-or-nothing (single commit, rollback on failure)
- Re-persisting the same result leaves identical rows (groups and fights from
  the result's first round onward are replaced, never appended)
- generate_for_championship / advance_championship are serialized per
  championship
"""

import logging
import threading
import weakref
from datetime import datetime, timezone
from typing import Dict, List, Optional, Sequence, Tuple

from sqlmodel import Session, select

from treegen.models.championship import Championship
from treegen.models.championship_settings import ChampionshipSettings
from treegen.models.competitor import Competitor
from treegen.models.fight import Fight
from treegen.models.fighters_group import FightersGroup
from treegen.models.team import Team
from treegen.services.generation_engine import generate, generate_next_stage
from treegen.services.playoff_builder import (
    GroupStanding,
    advancing_from_elimination,
    advancing_from_groups,
)
from treegen.services.settings_provider import parse_settings
from treegen.services.strategy_selector import resolve_settings
from treegen.services.tree_types import Entrant, GenerationResult, GenerationSettings

logger = logging.getLogger(__name__)

KIND_COMPETITOR = "competitor"
KIND_TEAM = "team"

_locks_guard = threading.Lock()
# Entries live only while some caller holds the lock object
_championship_locks: "weakref.WeakValueDictionary[int, threading.Lock]" = weakref.WeakValueDictionary()


def championship_lock(championship_id: int) -> threading.Lock:
    """
    Lock serializing generation runs of one championship.

    Callers sharing an id get the same lock for as long as any of them holds
    a reference to it; idle championships keep no entry.
    """
    with _locks_guard:
        lock = _championship_locks.get(championship_id)
        if lock is None:
            lock = threading.Lock()
            _championship_locks[championship_id] = lock
        return lock


# =============================================================================
# Providers
# =============================================================================


def get_championship(session: Session, championship_id: int, include_deleted: bool = False) -> Championship:
    championship = session.get(Championship, championship_id)
    if not championship or (championship.deleted_at is not None and not include_deleted):
        raise ValueError(f"Championship {championship_id} not found")
    return championship


def entrant_kind(championship: Championship) -> str:
    return KIND_TEAM if championship.is_team else KIND_COMPETITOR


def load_roster(session: Session, championship: Championship) -> List[Entrant]:
    """
    Roster of a championship: teams in team categories, competitors otherwise.

    Soft-deleted rows are excluded. Rows come in id order; declared seeds are
    applied later by the engine, which breaks ties by this order.
    """
    if championship.is_team:
        teams = session.exec(
            select(Team)
            .where(Team.championship_id == championship.id, Team.deleted_at.is_(None))
            .order_by(Team.id)
        ).all()
        return [Entrant(entrant_id=t.id, seed=t.seed, is_team=True, name=t.name) for t in teams]

    competitors = session.exec(
        select(Competitor)
        .where(Competitor.championship_id == championship.id, Competitor.deleted_at.is_(None))
        .order_by(Competitor.id)
    ).all()
    return [Entrant(entrant_id=c.id, seed=c.seed, is_team=False, name=c.name) for c in competitors]


def load_settings(session: Session, championship_id: int) -> Optional[GenerationSettings]:
    """Settings snapshot, or None when the championship has no (live) settings record."""
    row = session.exec(
        select(ChampionshipSettings).where(
            ChampionshipSettings.championship_id == championship_id,
            ChampionshipSettings.deleted_at.is_(None),
        )
    ).first()
    if row is None:
        return None
    return parse_settings(row.to_payload())


# =============================================================================
# Round queries
# =============================================================================


def groups_by_round(session: Session, championship_id: int, round_number: int) -> List[FightersGroup]:
    return session.exec(
        select(FightersGroup)
        .where(FightersGroup.championship_id == championship_id, FightersGroup.round == round_number)
        .order_by(FightersGroup.order)
    ).all()


def groups_from_round(session: Session, championship_id: int, round_number: int) -> List[FightersGroup]:
    return session.exec(
        select(FightersGroup)
        .where(FightersGroup.championship_id == championship_id, FightersGroup.round >= round_number)
        .order_by(FightersGroup.round, FightersGroup.order)
    ).all()


def fights_by_round(session: Session, championship_id: int, round_number: int) -> List[Fight]:
    return session.exec(
        select(Fight)
        .where(Fight.championship_id == championship_id, Fight.round == round_number)
        .order_by(Fight.sequence)
    ).all()


def first_round_fights(session: Session, championship_id: int) -> List[Fight]:
    return fights_by_round(session, championship_id, 1)


def last_round(session: Session, championship_id: int) -> Optional[int]:
    groups = session.exec(
        select(FightersGroup)
        .where(FightersGroup.championship_id == championship_id)
        .order_by(FightersGroup.round.desc())
    ).first()
    return groups.round if groups else None


# =============================================================================
# Writer
# =============================================================================


def _delete_from_round(session: Session, championship_id: int, round_number: int) -> int:
    fights = session.exec(
        select(Fight).where(Fight.championship_id == championship_id, Fight.round >= round_number)
    ).all()
    for fight in fights:
        session.delete(fight)
    session.flush()

    groups = groups_from_round(session, championship_id, round_number)
    for group in groups:
        session.delete(group)
    session.flush()
    return len(groups)


def persist_result(session: Session, championship_id: int, result: GenerationResult, kind: str) -> Dict:
    """
    Write a generation result in one transaction.

    Existing groups and fights from the result's first round onward are
    removed first, so persisting the same result twice is idempotent.
    Side sources are wired to the ids of the previous-round fights.

    Returns:
        Dict with groups_deleted, groups_created, fights_created
    """
    first_round = result.first_round
    if first_round is None:
        return {"groups_deleted": 0, "groups_created": 0, "fights_created": 0}

    try:
        groups_deleted = _delete_from_round(session, championship_id, first_round)

        fight_ids: Dict[Tuple[int, int], int] = {}
        fights_created = 0
        for group in sorted(result.groups, key=lambda g: (g.round, g.order)):
            group_row = FightersGroup(
                championship_id=championship_id,
                round=group.round,
                order=group.order,
                name=group.name,
                stage=result.stage.value,
                strategy=result.strategy.value,
                entrant_ids=[e.entrant_id for e in group.entrants],
            )
            session.add(group_row)
            session.flush()

            for fight in group.fights:
                fight_row = Fight(
                    fighters_group_id=group_row.id,
                    championship_id=championship_id,
                    round=fight.round,
                    order=fight.order,
                    sequence=fight.sequence,
                    is_bye=fight.is_bye,
                    entrant_a_id=_side_id(fight.entrant_a),
                    entrant_b_id=_side_id(fight.entrant_b),
                    entrant_kind=kind,
                    source_fight_a_id=fight_ids.get((fight.round - 1, fight.source_a)) if fight.source_a else None,
                    source_fight_b_id=fight_ids.get((fight.round - 1, fight.source_b)) if fight.source_b else None,
                )
                session.add(fight_row)
                session.flush()
                fight_ids[(fight.round, fight.sequence)] = fight_row.id
                fights_created += 1

        session.commit()
    except Exception:
        session.rollback()
        logger.exception("Failed to persist tree for championship %d", championship_id)
        raise

    logger.info(
        "Persisted %s stage for championship %d: %d groups, %d fights (replaced %d groups)",
        result.stage.value,
        championship_id,
        len(result.groups),
        fights_created,
        groups_deleted,
    )
    return {
        "groups_deleted": groups_deleted,
        "groups_created": len(result.groups),
        "fights_created": fights_created,
    }


def _side_id(entrant: Optional[Entrant]) -> Optional[int]:
    if entrant is None or entrant.is_bye:
        return None
    return entrant.entrant_id


# =============================================================================
# Orchestration
# =============================================================================


def generate_for_championship(session: Session, championship_id: int) -> GenerationResult:
    """Generate and persist the first stage of a championship."""
    with championship_lock(championship_id):
        championship = get_championship(session, championship_id)
        roster = load_roster(session, championship)
        settings = load_settings(session, championship_id)

        result = generate(roster, settings, championship.is_team)
        persist_result(session, championship_id, result, entrant_kind(championship))
        return result


def advance_championship(
    session: Session,
    championship_id: int,
    standings: Optional[Sequence[GroupStanding]] = None,
    finishers: Optional[Sequence[Entrant]] = None,
) -> GenerationResult:
    """
    Generate and persist the next stage from prior-stage results.

    Exactly one advancing source must be given:
    - standings: per-group rankings of the preliminary stage (top-K advance,
      K = advancing_per_group)
    - finishers: elimination survivors in finishing order

    Rounds continue after the last persisted round.
    """
    if (standings is None) == (finishers is None):
        raise ValueError("Provide exactly one of standings or finishers")

    with championship_lock(championship_id):
        championship = get_championship(session, championship_id)
        settings = load_settings(session, championship_id)
        previous_round = last_round(session, championship_id)
        if previous_round is None:
            raise ValueError(f"Championship {championship_id} has no generated stage to advance from")

        expected_groups: Optional[int] = None
        if standings is not None:
            previous_groups = groups_by_round(session, championship_id, previous_round)
            expected_groups = len(previous_groups)
            advancing = advancing_from_groups(
                standings,
                per_group=resolve_settings(settings).advancing_per_group,
                expected_groups=expected_groups,
            )
        else:
            advancing = advancing_from_elimination(finishers)

        result = generate_next_stage(
            advancing,
            settings,
            championship.is_team,
            starting_round=previous_round + 1,
            expected_groups=expected_groups,
        )
        persist_result(session, championship_id, result, entrant_kind(championship))
        return result


# =============================================================================
# Lifecycle hooks
# =============================================================================


def soft_delete_championship(session: Session, championship_id: int) -> Dict:
    """
    Soft-delete a championship with its competitors, teams and settings.

    Children share the championship's deletion timestamp, which lets restore
    bring back exactly this cascade and not rows deleted on their own earlier.
    """
    championship = get_championship(session, championship_id)
    now = datetime.now(timezone.utc)

    cascaded = 0
    for row in _live_children(session, championship_id):
        row.deleted_at = now
        session.add(row)
        cascaded += 1

    championship.deleted_at = now
    session.add(championship)
    session.commit()

    logger.info("Soft-deleted championship %d (%d related rows)", championship_id, cascaded)
    return {"championship_id": championship_id, "rows_deleted": cascaded}


def restore_championship(session: Session, championship_id: int) -> Dict:
    """Undo soft_delete_championship, restoring the rows deleted with it."""
    championship = get_championship(session, championship_id, include_deleted=True)
    if championship.deleted_at is None:
        return {"championship_id": championship_id, "rows_restored": 0}

    deleted_at = _as_utc(championship.deleted_at)
    restored = 0
    for row in _deleted_children(session, championship_id):
        if _as_utc(row.deleted_at) == deleted_at:
            row.deleted_at = None
            session.add(row)
            restored += 1

    championship.deleted_at = None
    session.add(championship)
    session.commit()

    logger.info("Restored championship %d (%d related rows)", championship_id, restored)
    return {"championship_id": championship_id, "rows_restored": restored}


def _as_utc(value: datetime) -> datetime:
    # SQLite drops tzinfo on round-trip
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)


def _live_children(session: Session, championship_id: int) -> list:
    rows: list = []
    for model in (Competitor, Team, ChampionshipSettings):
        rows.extend(
            session.exec(
                select(model).where(model.championship_id == championship_id, model.deleted_at.is_(None))
            ).all()
        )
    return rows


def _deleted_children(session: Session, championship_id: int) -> list:
    rows: list = []
    for model in (Competitor, Team, ChampionshipSettings):
        rows.extend(
            session.exec(
                select(model).where(model.championship_id == championship_id, model.deleted_at.is_not(None))
            ).all()
        )
    return rows
