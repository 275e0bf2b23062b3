import pytest

from backend.constants import (
    AROUND_GREEN,
    APPROACH,
    BIRDIE,
    DEFAULT_COURSE,
    FAIRWAY,
    FEET,
    GREEN,
    HOLE,
    PUTTING,
    ROUGH,
    TEE,
    YARDS,
)
from backend.services.engine import resolve_shot_type, start_round, submit_shot
from backend.services.models import ShotCapture
from backend.services.progression import current_hole
from backend.services.scorecard import score_category
from backend.services.validation import RESULT_OF_SHOT, USED_DRIVER


def _play(state, **capture):
    transition = submit_shot(state, ShotCapture(**capture))
    assert transition.accepted, transition.missing
    return transition


def _tee_and_approach_to_green(state):
    """Hole 1 of the default course: 400 -> 150 -> 20 yards on the green."""
    state = _play(state, distance_input="150", used_driver=True, result_of_shot=FAIRWAY).state
    return _play(state, distance_input="20", result_of_shot=GREEN).state


def test_scenario_birdie_on_par_four():
    state = start_round(DEFAULT_COURSE)
    assert current_hole(state.holes).par == 4
    assert state.tracking.distance_to_hole == 400

    assert resolve_shot_type(state) == TEE
    tee = _play(state, distance_input="150", used_driver=True, result_of_shot=FAIRWAY)
    assert tee.record.shot_type == TEE
    assert tee.record.shot_distance == 250
    assert tee.record.used_driver is True
    state = tee.state
    assert state.tracking.current_shot_number == 2
    assert state.tracking.distance_to_hole == 150
    assert state.tracking.distance_unit == YARDS

    assert resolve_shot_type(state) == APPROACH
    approach = _play(state, distance_input="20", result_of_shot=GREEN)
    assert approach.record.shot_type == APPROACH
    assert approach.record.shot_distance == 130
    assert approach.record.distance_unit == YARDS
    state = approach.state
    assert state.tracking.distance_unit == FEET
    assert state.tracking.distance_to_hole == 60
    assert state.tracking.has_been_on_green is True

    assert resolve_shot_type(state) == PUTTING
    putt = _play(state, distance_input="0", result_of_shot=HOLE, putt_break="straight", putt_slope="flat")
    assert putt.record.shot_type == PUTTING
    assert putt.record.shot_distance == 60
    assert putt.record.distance_unit == FEET
    assert putt.record.miss_direction is None

    completed = putt.completed
    assert completed.hole.number == 1
    assert completed.hole.score == 3
    assert completed.hole.is_current is False
    assert [s.shot_number for s in completed.shots] == [1, 2, 3]
    assert score_category(completed.hole.score, completed.hole.par) == BIRDIE


def test_scenario_par_three_opener_is_an_approach():
    state = start_round(DEFAULT_COURSE, start_hole=3)
    hole = current_hole(state.holes)
    assert (hole.par, hole.yardage) == (3, 165)
    assert resolve_shot_type(state) == APPROACH

    transition = _play(state, distance_input="10", result_of_shot=GREEN)
    assert transition.record.shot_type == APPROACH
    assert transition.record.used_driver is None
    assert transition.state.tracking.distance_to_hole == 30
    assert transition.state.tracking.distance_unit == FEET


def test_scenario_putt_off_the_green_returns_to_yards():
    state = _tee_and_approach_to_green(start_round(DEFAULT_COURSE))

    putt = _play(
        state,
        distance_input="12",
        result_of_shot=ROUGH,
        miss_direction="long",
        putt_break="left_to_right",
        putt_slope="downhill",
    )
    assert putt.record.shot_type == PUTTING
    assert putt.record.distance_unit == FEET
    assert putt.record.shot_distance == 48
    assert putt.record.miss_direction == "long"

    tracking = putt.state.tracking
    assert tracking.has_been_on_green is False
    assert tracking.distance_unit == YARDS
    assert tracking.distance_to_hole == 4
    assert resolve_shot_type(putt.state) == AROUND_GREEN


def test_missed_putt_on_the_green_stays_in_feet():
    state = _tee_and_approach_to_green(start_round(DEFAULT_COURSE))
    putt = _play(
        state,
        distance_input="5",
        result_of_shot=GREEN,
        miss_direction="short_low",
        putt_break="right_to_left",
        putt_slope="uphill",
    )
    assert putt.state.tracking.distance_unit == FEET
    assert putt.state.tracking.distance_to_hole == 5
    assert putt.state.tracking.has_been_on_green is True


def test_rejected_submission_leaves_progress_untouched():
    state = start_round(DEFAULT_COURSE)
    transition = submit_shot(state, ShotCapture(distance_input="150"))

    assert transition.accepted is False
    assert transition.record is None
    assert transition.completed is None
    assert transition.missing == (USED_DRIVER, RESULT_OF_SHOT)
    assert transition.state.holes == state.holes
    assert transition.state.tracking.current_shot_number == 1
    assert transition.state.tracking.shots == ()
    assert transition.state.tracking.distance_to_hole == 400


def test_submit_does_not_mutate_input_state():
    state = start_round(DEFAULT_COURSE)
    _play(state, distance_input="150", used_driver=False, result_of_shot=FAIRWAY)
    assert state.tracking.current_shot_number == 1
    assert state.tracking.shots == ()


@pytest.mark.parametrize("finish_in_feet", [True, False])
def test_holing_out_resets_tracking(finish_in_feet):
    state = start_round(DEFAULT_COURSE)
    if finish_in_feet:
        state = _tee_and_approach_to_green(state)
        transition = _play(state, distance_input="0", result_of_shot=HOLE, putt_break="straight", putt_slope="flat")
    else:
        state = _play(state, distance_input="150", used_driver=True, result_of_shot=FAIRWAY).state
        transition = _play(state, distance_input="0", result_of_shot=HOLE)

    tracking = transition.state.tracking
    assert tracking.current_shot_number == 1
    assert tracking.has_been_on_green is False
    assert tracking.distance_unit == YARDS
    assert tracking.shots == ()
    assert tracking.capture == ShotCapture()

    next_hole = current_hole(transition.state.holes)
    assert next_hole.number == 2
    assert tracking.distance_to_hole == next_hole.yardage


def test_capture_is_cleared_between_shots():
    state = start_round(DEFAULT_COURSE)
    state = _play(state, distance_input="150", used_driver=True, result_of_shot=FAIRWAY).state
    assert state.tracking.capture == ShotCapture()


def test_unrequired_fields_are_not_recorded():
    state = start_round(DEFAULT_COURSE)
    state = _play(state, distance_input="150", used_driver=True, result_of_shot=FAIRWAY).state
    record = _play(
        state,
        distance_input="40",
        used_driver=True,
        result_of_shot=FAIRWAY,
        miss_direction="left",
        putt_break="straight",
        putt_slope="flat",
    ).record
    assert record.used_driver is None
    assert record.miss_direction is None
    assert record.putt_break is None
    assert record.putt_slope is None


def test_no_ceiling_on_shots_per_hole():
    state = start_round(DEFAULT_COURSE)
    state = _play(state, distance_input="150", used_driver=True, result_of_shot=FAIRWAY).state
    for _ in range(25):
        state = _play(state, distance_input="150", result_of_shot=FAIRWAY).state
    assert state.tracking.current_shot_number == 27
    assert len(state.tracking.shots) == 26
    assert current_hole(state.holes).number == 1


def test_finishing_last_hole_ends_the_round():
    state = start_round(DEFAULT_COURSE, start_hole=18)
    transition = _play(state, distance_input="0", used_driver=False, result_of_shot=HOLE)

    assert transition.completed.hole.number == 18
    assert transition.completed.hole.score == 1
    assert current_hole(transition.state.holes) is None
    assert transition.state.tracking.current_shot_number == 1
    assert transition.state.tracking.distance_unit == YARDS
    assert resolve_shot_type(transition.state) is None

    after = submit_shot(transition.state, ShotCapture(distance_input="0", result_of_shot=HOLE))
    assert after.accepted is False
    assert after.missing == ()
    assert after.state.holes == transition.state.holes


def test_negative_and_huge_distances_are_accepted():
    state = start_round(DEFAULT_COURSE)
    record = _play(state, distance_input="-20", used_driver=True, result_of_shot=FAIRWAY).record
    assert record.distance_to_hole_after == -20
    assert record.shot_distance == 420

    record = _play(state, distance_input="99999", used_driver=True, result_of_shot=ROUGH, miss_direction="left").record
    assert record.shot_distance == 400 - 99999
