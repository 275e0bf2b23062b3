from backend.constants import AROUND_GREEN, AROUND_GREEN_MAX_YARDS, APPROACH, PUTTING, TEE


def classify_shot(
    *,
    has_been_on_green: bool,
    shot_number: int,
    par: int,
    distance_to_hole: int,
) -> str:
    """Resolve the shot type for the shot about to be played.

    Priority: putting > par-3 opener > other openers > long shots > the rest.
    """
    if has_been_on_green:
        return PUTTING
    if shot_number == 1 and par == 3:
        # A par 3's first shot goes at the green, so it is an approach
        return APPROACH
    if shot_number == 1:
        return TEE
    if distance_to_hole > AROUND_GREEN_MAX_YARDS:
        return APPROACH
    return AROUND_GREEN
