"""
Generate seed rounds by playing simulated shots through the tracker.

Usage: python -m scripts.seed_dummy_data
"""

import random
from datetime import date, timedelta

from sqlmodel import select

from backend.constants import (
    AROUND_GREEN,
    FAIRWAY,
    GREEN,
    HOLE,
    MISS_DIRECTIONS,
    OTHER,
    PUTT_BREAKS,
    PUTT_SLOPES,
    PUTTING,
    ROUGH,
    SAND,
    TEE,
)
from backend.services import round_service
from backend.services.stats_service import compute_stats
from backend.services.tracker import RoundTracker
from backend.storage.database import Round, get_session, init_db

# Where a full shot that misses the green ends up
TEE_RESULT_WEIGHTS: dict[str, float] = {
    FAIRWAY: 0.55,
    ROUGH: 0.30,
    SAND: 0.10,
    OTHER: 0.05,
}
MISSED_GREEN_WEIGHTS: dict[str, float] = {
    ROUGH: 0.55,
    SAND: 0.30,
    OTHER: 0.15,
}

# Chance of hitting the green from the given distance (yards)
GREEN_HIT_PCT = [(30, 0.75), (100, 0.65), (150, 0.50), (200, 0.35), (250, 0.15)]


def _pick_weighted(items: dict[str, float]) -> str:
    """Pick a random item based on weights."""
    labels = list(items.keys())
    weights = list(items.values())
    return random.choices(labels, weights=weights, k=1)[0]


def _green_chance(yards: int) -> float:
    for limit, pct in GREEN_HIT_PCT:
        if yards <= limit:
            return pct
    return 0.0


def _putt_make_pct(feet: int) -> float:
    if feet <= 2:
        return 0.99
    return max(0.05, 1.0 - feet / 12)


def _full_shot(shot_type: str, yards: int) -> tuple[str, int]:
    """Result and yards left after a non-putting shot."""
    if shot_type == AROUND_GREEN and random.random() < 0.03:
        return HOLE, 0

    if shot_type != TEE and random.random() < _green_chance(yards):
        # Left somewhere on the green, in yards; the engine converts to feet
        return GREEN, random.randint(2, max(3, min(15, yards // 8)))

    if shot_type == TEE or yards > 250:
        left = max(yards - random.randint(200, 270), random.randint(20, 60))
        return _pick_weighted(TEE_RESULT_WEIGHTS), left

    return _pick_weighted(MISSED_GREEN_WEIGHTS), random.randint(5, 30)


def play_shot(tracker: RoundTracker) -> None:
    tracking = tracker.state.tracking
    shot_type = tracker.shot_type
    distance = tracking.distance_to_hole
    fields: dict = {}

    if shot_type == PUTTING:
        fields["putt_break"] = random.choice(PUTT_BREAKS)
        fields["putt_slope"] = random.choice(PUTT_SLOPES)
        if random.random() < _putt_make_pct(distance):
            result, left = HOLE, 0
        else:
            result, left = GREEN, max(1, round(distance * random.uniform(0.05, 0.3)))
            fields["miss_direction"] = random.choice(MISS_DIRECTIONS[PUTTING])
    else:
        result, left = _full_shot(shot_type, distance)
        if result in (ROUGH, SAND, OTHER):
            fields["miss_direction"] = random.choice(MISS_DIRECTIONS[shot_type])

    if tracking.current_shot_number == 1 and tracker.hole.par != 3:
        fields["used_driver"] = random.random() < 0.8

    tracker.update_capture(distance_input=str(left), result_of_shot=result, **fields)
    transition = tracker.submit()
    assert transition.accepted, transition.missing


def generate_round(round_date: date, round_num: int) -> None:
    """Play a single seed round on the default course."""
    round_id, tracker = round_service.start_round(
        user_id="seed",
        course_name=f"Seed Round {round_num}",
        is_seed=True,
        round_date=round_date,
    )
    while not tracker.is_finished:
        play_shot(tracker)
    round_service.end_round(round_id)


def seed(num_rounds: int = 24) -> None:
    """Generate seed rounds spread across the past 6 months."""
    init_db()

    # Check if seed data already exists
    with get_session() as session:
        existing = session.exec(
            select(Round).where(Round.is_seed == True)
        ).all()
        if existing:
            print(f"Seed data already exists ({len(existing)} rounds). Skipping.")
            return

    today = date.today()
    days_span = 180  # 6 months

    random.seed(42)  # Reproducible

    for i in range(num_rounds):
        days_ago = int(days_span * (1 - i / max(1, num_rounds - 1)))
        round_date = today - timedelta(days=days_ago)
        generate_round(round_date, i + 1)
        print(f"  Generated round {i + 1}: {round_date}")

    stats = compute_stats()
    print(f"\nSeeded {stats['total_rounds']} rounds")
    print(f"Scoring average: {stats['scoring_average']}")
    print(f"Average putts per round: {stats['putts_per_round']}")


if __name__ == "__main__":
    seed()
