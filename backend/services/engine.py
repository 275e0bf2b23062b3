"""Shot transition engine.

`submit_shot` is a reducer: it takes a RoundState and returns a Transition
holding the next RoundState. Nothing here mutates its input or touches
storage; the caller decides what to do with a completed hole.
"""

from dataclasses import replace
from typing import Optional

from backend.constants import FAIRWAY, GREEN, HOLE, OTHER, PUTTING, ROUGH, SAND
from backend.services.classifier import classify_shot
from backend.services.models import (
    CompletedHole,
    Hole,
    RoundState,
    ShotCapture,
    ShotRecord,
    TrackingState,
    Transition,
)
from backend.services.progression import build_holes, current_hole, finalize_current_hole
from backend.services.units import next_distance, parse_distance, shot_distance
from backend.services.validation import MISS_DIRECTION, missing_fields, needs_driver, required_fields

# Putts that roll off the green onto these put the player back in yards
_OFF_GREEN_RESULTS = (FAIRWAY, ROUGH, SAND, OTHER)


def start_round(layout, start_hole: int = 1) -> RoundState:
    holes = build_holes(layout, start_hole)
    return RoundState(holes=holes, tracking=_fresh_tracking(current_hole(holes)))


def _fresh_tracking(hole: Optional[Hole]) -> TrackingState:
    return TrackingState(distance_to_hole=hole.yardage if hole else 0)


def resolve_shot_type(state: RoundState) -> Optional[str]:
    """Shot type for the shot in progress, or None once the round is over."""
    hole = current_hole(state.holes)
    if hole is None:
        return None
    tracking = state.tracking
    return classify_shot(
        has_been_on_green=tracking.has_been_on_green,
        shot_number=tracking.current_shot_number,
        par=hole.par,
        distance_to_hole=tracking.distance_to_hole,
    )


def pending_fields(state: RoundState) -> tuple[str, ...]:
    hole = current_hole(state.holes)
    if hole is None:
        return ()
    return missing_fields(state.tracking, resolve_shot_type(state), hole.par)


def _build_record(tracking: TrackingState, hole: Hole, shot_type: str) -> ShotRecord:
    capture = tracking.capture
    after = parse_distance(capture.distance_input)
    required = required_fields(capture, shot_type, tracking.current_shot_number, hole.par)
    putting = shot_type == PUTTING
    return ShotRecord(
        shot_number=tracking.current_shot_number,
        distance_to_hole_before=tracking.distance_to_hole,
        distance_to_hole_after=after,
        distance_unit=tracking.distance_unit,
        shot_distance=shot_distance(tracking.distance_to_hole, after),
        used_driver=capture.used_driver if needs_driver(tracking.current_shot_number, hole.par) else None,
        result_of_shot=capture.result_of_shot,
        miss_direction=capture.miss_direction if MISS_DIRECTION in required else None,
        shot_type=shot_type,
        putt_break=capture.putt_break if putting else None,
        putt_slope=capture.putt_slope if putting else None,
    )


def submit_shot(state: RoundState, capture: Optional[ShotCapture] = None) -> Transition:
    """Apply one submitted shot.

    A shot that fails validation (or arrives after the last hole) is
    rejected and the state is returned unchanged apart from `capture`.
    """
    if capture is not None:
        state = replace(state, tracking=replace(state.tracking, capture=capture))

    hole = current_hole(state.holes)
    if hole is None:
        return Transition(accepted=False, state=state)

    tracking = state.tracking
    shot_type = resolve_shot_type(state)
    missing = missing_fields(tracking, shot_type, hole.par)
    if missing:
        return Transition(accepted=False, state=state, missing=missing)

    record = _build_record(tracking, hole, shot_type)
    shots = tracking.shots + (record,)

    if record.result_of_shot == HOLE:
        holes, next_hole = finalize_current_hole(state.holes, score=record.shot_number)
        finished = next(h for h in holes if h.number == hole.number)
        return Transition(
            accepted=True,
            state=RoundState(holes=holes, tracking=_fresh_tracking(next_hole)),
            record=record,
            completed=CompletedHole(hole=finished, shots=shots),
        )

    on_green = tracking.has_been_on_green
    if record.result_of_shot == GREEN:
        on_green = True
    elif shot_type == PUTTING and record.result_of_shot in _OFF_GREEN_RESULTS:
        on_green = False

    distance, unit = next_distance(record.distance_to_hole_after, tracking.distance_unit, record.result_of_shot)

    next_tracking = TrackingState(
        distance_to_hole=distance,
        current_shot_number=tracking.current_shot_number + 1,
        has_been_on_green=on_green,
        distance_unit=unit,
        shots=shots,
    )
    return Transition(accepted=True, state=replace(state, tracking=next_tracking), record=record)
