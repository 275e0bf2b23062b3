from backend.constants import (
    AROUND_GREEN,
    APPROACH,
    HOLE,
    MISS_DIRECTIONS,
    MISS_RESULTS,
    PUTT_BREAKS,
    PUTT_SLOPES,
    PUTTING,
    SHOT_RESULTS,
    SHOT_TYPES,
    TEE,
)
from backend.services.models import ShotCapture, TrackingState
from backend.services.units import parse_distance

DISTANCE_INPUT = "distance_input"
USED_DRIVER = "used_driver"
RESULT_OF_SHOT = "result_of_shot"
MISS_DIRECTION = "miss_direction"
PUTT_BREAK = "putt_break"
PUTT_SLOPE = "putt_slope"

# Order in which missing fields are reported (and prompted for by the bot)
FIELD_ORDER = [DISTANCE_INPUT, USED_DRIVER, PUTT_BREAK, PUTT_SLOPE, RESULT_OF_SHOT, MISS_DIRECTION]

ALWAYS_REQUIRED = (DISTANCE_INPUT, RESULT_OF_SHOT)

# None stands for "no result picked yet"
_ANY_RESULT = (*SHOT_RESULTS, None)
_FULL_SHOTS = (TEE, APPROACH, AROUND_GREEN)
_MISSED_PUTT_RESULTS = tuple(r for r in SHOT_RESULTS if r != HOLE)

# (shot types, results, fields those combinations require)
REQUIREMENT_RULES = [
    ((PUTTING,), _ANY_RESULT, (PUTT_BREAK, PUTT_SLOPE)),
    (_FULL_SHOTS, tuple(MISS_RESULTS), (MISS_DIRECTION,)),
    ((PUTTING,), _MISSED_PUTT_RESULTS, (MISS_DIRECTION,)),
]


def _build_required_fields() -> dict[tuple[str, str | None], tuple[str, ...]]:
    table: dict[tuple[str, str | None], tuple[str, ...]] = {}
    for shot_type in SHOT_TYPES:
        for result in _ANY_RESULT:
            required: list[str] = []
            for types, results, fields in REQUIREMENT_RULES:
                if shot_type in types and result in results:
                    required.extend(f for f in fields if f not in required)
            table[(shot_type, result)] = tuple(required)
    return table


# (shot type, result) -> conditionally required fields
REQUIRED_FIELDS = _build_required_fields()


def needs_driver(shot_number: int, par: int) -> bool:
    return shot_number == 1 and par != 3


def field_options(field_name: str, shot_type: str) -> list:
    """Choices offered for a selectable field on this kind of shot."""
    if field_name == USED_DRIVER:
        return [True, False]
    if field_name == RESULT_OF_SHOT:
        return SHOT_RESULTS
    if field_name == MISS_DIRECTION:
        return MISS_DIRECTIONS[shot_type]
    if field_name == PUTT_BREAK:
        return PUTT_BREAKS
    if field_name == PUTT_SLOPE:
        return PUTT_SLOPES
    raise KeyError(field_name)


def is_selected(capture: ShotCapture, field_name: str, shot_type: str) -> bool:
    value = getattr(capture, field_name)
    if field_name == DISTANCE_INPUT:
        return parse_distance(value) is not None
    return value in field_options(field_name, shot_type)


def required_fields(capture: ShotCapture, shot_type: str, shot_number: int, par: int) -> list[str]:
    required = list(ALWAYS_REQUIRED)
    if needs_driver(shot_number, par):
        required.append(USED_DRIVER)
    result = capture.result_of_shot if is_selected(capture, RESULT_OF_SHOT, shot_type) else None
    required.extend(REQUIRED_FIELDS[(shot_type, result)])
    return sorted(required, key=FIELD_ORDER.index)


def missing_fields(state: TrackingState, shot_type: str, par: int) -> tuple[str, ...]:
    """Fields that still block submitting the shot in progress."""
    capture = state.capture
    return tuple(
        name
        for name in required_fields(capture, shot_type, state.current_shot_number, par)
        if not is_selected(capture, name, shot_type)
    )


def can_submit(state: TrackingState, shot_type: str, par: int) -> bool:
    return not missing_fields(state, shot_type, par)
