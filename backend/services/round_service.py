"""Live rounds and the hook that stores each finished hole.

Trackers live in process memory keyed by the database round id; only
finished holes reach storage.
"""

import logging
import time
from datetime import date
from typing import Optional

from backend.config import settings
from backend.constants import DEFAULT_COURSE
from backend.services.models import Hole as LiveHole
from backend.services.models import ShotRecord
from backend.services.stats_service import hole_summary
from backend.services.tracker import RoundTracker
from backend.storage.database import Hole, Round, Shot, get_session

logger = logging.getLogger(__name__)

_trackers: dict[int, RoundTracker] = {}
# round id -> monotonic time the last hole was completed
_finished_at: dict[int, float] = {}


def save_completed_hole(round_id: int, hole: LiveHole, shots: tuple[ShotRecord, ...]) -> int:
    """Write a finished hole and its shots. Returns the new hole id."""
    summary = hole_summary(hole.par, shots)
    with get_session() as session:
        row = Hole(
            round_id=round_id,
            hole_number=hole.number,
            par=hole.par,
            yardage=hole.yardage,
            score=hole.score,
            putts=summary["putts"],
            fairway_hit=summary["fairway_hit"],
            gir=summary["gir"],
        )
        session.add(row)
        session.flush()
        hole_id = row.id

        for s in shots:
            session.add(
                Shot(
                    hole_id=hole_id,
                    shot_number=s.shot_number,
                    shot_type=s.shot_type,
                    distance_before=s.distance_to_hole_before,
                    distance_after=s.distance_to_hole_after,
                    distance_unit=s.distance_unit,
                    shot_distance=s.shot_distance,
                    used_driver=s.used_driver,
                    result=s.result_of_shot,
                    miss_direction=s.miss_direction,
                    putt_break=s.putt_break,
                    putt_slope=s.putt_slope,
                )
            )
        session.commit()

    logger.info(f"Saved hole {hole.number} of round {round_id} ({len(shots)} shots)")
    return hole_id


def start_round(
    layout=None,
    start_hole: int = 1,
    user_id: str = "",
    course_name: Optional[str] = None,
    is_seed: bool = False,
    round_date: Optional[date] = None,
) -> tuple[int, RoundTracker]:
    """Create a round row and a live tracker that persists finished holes.

    Raises ValueError for an invalid layout, before anything is stored.
    """
    evict_finished_rounds()
    layout = layout if layout is not None else DEFAULT_COURSE
    tracker = RoundTracker(layout, start_hole=start_hole)

    with get_session() as session:
        round_obj = Round(
            telegram_user_id=user_id,
            date=round_date or date.today(),
            course_name=course_name or settings.default_course_name,
            start_hole=start_hole,
            is_seed=is_seed,
        )
        session.add(round_obj)
        session.commit()
        session.refresh(round_obj)
        round_id = round_obj.id

    def on_hole_complete(hole: LiveHole, shots: tuple[ShotRecord, ...]) -> None:
        if tracker.is_finished:
            _finished_at[round_id] = time.monotonic()
        save_completed_hole(round_id, hole, shots)

    tracker.on_hole_complete = on_hole_complete
    _trackers[round_id] = tracker
    logger.info(f"Round {round_id} started on hole {start_hole}")
    return round_id, tracker


def get_tracker(round_id: int) -> Optional[RoundTracker]:
    evict_finished_rounds()
    return _trackers.get(round_id)


def evict_finished_rounds() -> None:
    """End finished rounds whose trackers have outlived `finished_round_ttl`."""
    now = time.monotonic()
    for round_id, finished_at in list(_finished_at.items()):
        if now - finished_at >= settings.finished_round_ttl:
            end_round(round_id)


def end_round(round_id: int) -> int:
    """Drop the live tracker. Returns how many holes were stored.

    A round with no stored holes is deleted outright.
    """
    _trackers.pop(round_id, None)
    _finished_at.pop(round_id, None)

    with get_session() as session:
        round_obj = session.get(Round, round_id)
        if round_obj is None:
            return 0
        holes_saved = len(round_obj.holes)
        if holes_saved == 0:
            session.delete(round_obj)
            session.commit()
            logger.info(f"Round {round_id} cancelled with no holes, deleted")
        else:
            logger.info(f"Round {round_id} ended with {holes_saved} holes saved")
    return holes_saved


def end_all_rounds() -> None:
    """End every live round, e.g. on shutdown when trackers would be lost."""
    for round_id in list(_trackers):
        end_round(round_id)
