from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from backend.services import round_service
from backend.services.models import ShotCapture
from backend.services.tracker import RoundTracker

# A finished round stays readable for `finished_round_ttl` seconds, then is
# ended automatically. DELETE ends it (or abandons it) right away.
router = APIRouter(prefix="/api/rounds")


class HoleIn(BaseModel):
    number: int
    par: int
    yardage: int


class StartRoundRequest(BaseModel):
    course_name: Optional[str] = None
    holes: Optional[list[HoleIn]] = None
    start_hole: int = 1


class ShotRequest(BaseModel):
    distance: str = Field("", description="Distance to the hole after the shot, in the current unit")
    result: Optional[str] = None
    used_driver: Optional[bool] = None
    miss_direction: Optional[str] = None
    putt_break: Optional[str] = None
    putt_slope: Optional[str] = None


def _not_found(round_id: int) -> JSONResponse:
    return JSONResponse({"error": f"Round {round_id} not in progress"}, status_code=404)


def _round_view(round_id: int, tracker: RoundTracker) -> dict:
    tracking = tracker.state.tracking
    hole = tracker.hole
    return {
        "round_id": round_id,
        "finished": tracker.is_finished,
        "current_hole": asdict(hole) if hole else None,
        "shot_number": tracking.current_shot_number,
        "shot_type": tracker.shot_type,
        "distance_to_hole": tracking.distance_to_hole,
        "distance_unit": tracking.distance_unit,
        "has_been_on_green": tracking.has_been_on_green,
        "shots": [asdict(s) for s in tracking.shots],
        "missing_fields": list(tracker.missing_fields),
        "scorecard": asdict(tracker.scorecard()),
    }


@router.post("")
def start_round(body: StartRoundRequest):
    layout = [(h.number, h.par, h.yardage) for h in body.holes] if body.holes else None
    try:
        round_id, tracker = round_service.start_round(
            layout, start_hole=body.start_hole, course_name=body.course_name
        )
    except ValueError as e:
        return JSONResponse({"error": str(e)}, status_code=422)
    return _round_view(round_id, tracker)


@router.get("/{round_id}")
def get_round(round_id: int):
    tracker = round_service.get_tracker(round_id)
    if tracker is None:
        return _not_found(round_id)
    return _round_view(round_id, tracker)


@router.get("/{round_id}/scorecard")
def get_scorecard(round_id: int):
    tracker = round_service.get_tracker(round_id)
    if tracker is None:
        return _not_found(round_id)
    return asdict(tracker.scorecard())


@router.post("/{round_id}/shots")
def submit_shot(round_id: int, body: ShotRequest):
    tracker = round_service.get_tracker(round_id)
    if tracker is None:
        return _not_found(round_id)

    capture = ShotCapture(
        distance_input=body.distance,
        used_driver=body.used_driver,
        result_of_shot=body.result,
        miss_direction=body.miss_direction,
        putt_break=body.putt_break,
        putt_slope=body.putt_slope,
    )
    transition = tracker.submit(capture)
    if not transition.accepted:
        error = "Round is finished" if tracker.is_finished else "Shot is incomplete"
        return JSONResponse(
            {"accepted": False, "error": error, "missing_fields": list(transition.missing)},
            status_code=422,
        )

    completed = transition.completed
    return {
        "accepted": True,
        "shot": asdict(transition.record),
        "completed_hole": asdict(completed) if completed else None,
        "round": _round_view(round_id, tracker),
    }


@router.delete("/{round_id}")
def end_round(round_id: int):
    if round_service.get_tracker(round_id) is None:
        return _not_found(round_id)
    holes_saved = round_service.end_round(round_id)
    return {"round_id": round_id, "holes_saved": holes_saved}
