# Distance units: yards off the green, feet once on it
YARDS = "yards"
FEET = "feet"
FEET_PER_YARD = 3

# Beyond this many yards a non-opening shot is an approach
AROUND_GREEN_MAX_YARDS = 30

HOLES_PER_ROUND = 18
MIN_PAR = 3
MAX_PAR = 6

# Shot types, in the order the player meets them on a hole
TEE = "tee"
APPROACH = "approach"
AROUND_GREEN = "around_green"
PUTTING = "putting"
SHOT_TYPES = [TEE, APPROACH, AROUND_GREEN, PUTTING]

# Where the ball finished
FAIRWAY = "fairway"
ROUGH = "rough"
SAND = "sand"
GREEN = "green"
HOLE = "hole"
OTHER = "other"
SHOT_RESULTS = [FAIRWAY, ROUGH, SAND, GREEN, HOLE, OTHER]

# Results that need a miss direction on a full shot
MISS_RESULTS = [ROUGH, SAND, OTHER]

# Miss direction choices offered per shot type
MISS_DIRECTIONS: dict[str, list[str]] = {
    TEE: ["left", "right"],
    APPROACH: [
        "long_left", "left", "short_left",
        "long", "short",
        "long_right", "right", "short_right",
    ],
    AROUND_GREEN: [
        "long_left", "left", "short_left",
        "long", "short",
        "long_right", "right", "short_right",
    ],
    PUTTING: [
        "short_low", "long_low",
        "short", "long",
        "short_high", "long_high",
    ],
}

PUTT_BREAKS = ["right_to_left", "left_to_right", "double_breaker", "straight"]
PUTT_SLOPES = ["downhill", "uphill", "flat", "multiple_slopes"]

# Score-to-par categories used by the scorecard
DOUBLE_EAGLE_OR_BETTER = "double_eagle_or_better"
BIRDIE = "birdie"
PAR = "par"
BOGEY = "bogey"
DOUBLE_BOGEY_OR_WORSE = "double_bogey_or_worse"
SCORE_CATEGORIES = [DOUBLE_EAGLE_OR_BETTER, BIRDIE, PAR, BOGEY, DOUBLE_BOGEY_OR_WORSE]

# Built-in layout used when no course is supplied: (number, par, yardage)
DEFAULT_COURSE = [
    (1, 4, 400), (2, 5, 530), (3, 3, 165), (4, 4, 385), (5, 4, 420),
    (6, 3, 190), (7, 5, 545), (8, 4, 360), (9, 4, 410),
    (10, 4, 395), (11, 3, 175), (12, 5, 510), (13, 4, 430), (14, 4, 370),
    (15, 3, 205), (16, 5, 560), (17, 4, 405), (18, 4, 440),
]
