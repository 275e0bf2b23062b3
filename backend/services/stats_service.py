from collections import defaultdict
from typing import Iterable, Optional

from sqlmodel import select

from backend.constants import FAIRWAY, GREEN, HOLE, HOLES_PER_ROUND, PUTTING, SCORE_CATEGORIES
from backend.services.models import ShotRecord
from backend.services.scorecard import score_category
from backend.storage.database import Hole, Round, get_session


def _pct(hits: int, chances: int) -> float:
    return round(hits / chances * 100, 1) if chances else 0


def hole_summary(par: int, shots: Iterable[ShotRecord]) -> dict:
    """Per-hole stats derived from the shots of a finished hole."""
    shots = sorted(shots, key=lambda s: s.shot_number)
    score = len(shots)
    putts = sum(1 for s in shots if s.shot_type == PUTTING)

    fairway_hit: Optional[bool] = None
    if par != 3 and shots:
        fairway_hit = shots[0].result_of_shot == FAIRWAY

    # Green in regulation: on (or in) the hole with two putts to spare
    gir = any(
        s.result_of_shot in (GREEN, HOLE) and s.shot_number <= par - 2
        for s in shots
    )

    return {
        "score": score,
        "score_to_par": score - par,
        "putts": putts,
        "fairway_hit": fairway_hit,
        "gir": gir,
    }


def compute_stats(include_seed: bool = True) -> dict:
    """Compute all dashboard statistics from the database."""
    query = select(Round)
    if not include_seed:
        query = query.where(Round.is_seed == False)  # noqa: E712
    with get_session() as session:
        rounds = session.exec(query).all()
        if not rounds:
            return _empty_stats()

        round_ids = [r.id for r in rounds]
        holes = session.exec(select(Hole).where(Hole.round_id.in_(round_ids))).all()

    if not holes:
        return _empty_stats()

    holes_by_round: dict[int, list[Hole]] = defaultdict(list)
    for h in holes:
        holes_by_round[h.round_id].append(h)

    # Scoring and putting averages only use full rounds
    complete = [r for r in rounds if len(holes_by_round[r.id]) == HOLES_PER_ROUND]
    round_scores = [sum(h.score for h in holes_by_round[r.id]) for r in complete]
    round_putts = [sum(h.putts for h in holes_by_round[r.id]) for r in complete]

    # --- Score categories ---
    categories = {c: 0 for c in SCORE_CATEGORIES}
    for h in holes:
        categories[score_category(h.score, h.par)] += 1

    # --- Driving & greens ---
    fairway_chances = [h for h in holes if h.fairway_hit is not None]
    fairways_hit = sum(1 for h in fairway_chances if h.fairway_hit)
    greens_hit = sum(1 for h in holes if h.gir)

    return {
        "total_rounds": len(complete),
        "holes_played": len(holes),
        "scoring_average": round(sum(round_scores) / len(round_scores), 1) if round_scores else 0,
        "best_round": min(round_scores) if round_scores else None,
        "worst_round": max(round_scores) if round_scores else None,
        "putts_per_round": round(sum(round_putts) / len(round_putts), 1) if round_putts else 0,
        "putts_per_hole": round(sum(h.putts for h in holes) / len(holes), 2),
        "fairways_hit": fairways_hit,
        "fairway_opportunities": len(fairway_chances),
        "fairway_pct": _pct(fairways_hit, len(fairway_chances)),
        "gir": greens_hit,
        "gir_pct": _pct(greens_hit, len(holes)),
        "score_categories": categories,
    }


def _empty_stats() -> dict:
    """Return empty stats structure when no data exists."""
    return {
        "total_rounds": 0,
        "holes_played": 0,
        "scoring_average": 0,
        "best_round": None,
        "worst_round": None,
        "putts_per_round": 0,
        "putts_per_hole": 0,
        "fairways_hit": 0,
        "fairway_opportunities": 0,
        "fairway_pct": 0,
        "gir": 0,
        "gir_pct": 0,
        "score_categories": {c: 0 for c in SCORE_CATEGORIES},
    }
