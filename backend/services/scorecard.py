from dataclasses import dataclass, field
from typing import Iterable, Optional

from backend.constants import (
    BIRDIE,
    BOGEY,
    DOUBLE_BOGEY_OR_WORSE,
    DOUBLE_EAGLE_OR_BETTER,
    PAR,
)
from backend.services.models import Hole


def score_category(score: Optional[int], par: int) -> Optional[str]:
    """Presentation bucket for a hole, or None if it hasn't been played."""
    if score is None:
        return None
    diff = score - par
    if diff <= -2:
        return DOUBLE_EAGLE_OR_BETTER
    if diff == -1:
        return BIRDIE
    if diff == 0:
        return PAR
    if diff == 1:
        return BOGEY
    return DOUBLE_BOGEY_OR_WORSE


def score_to_par_label(diff: int) -> str:
    if diff == 0:
        return "E"
    return f"+{diff}" if diff > 0 else str(diff)


@dataclass(frozen=True)
class ScorecardRow:
    number: int
    par: int
    yardage: int
    score: Optional[int]
    is_current: bool
    category: Optional[str]
    to_par: Optional[str]


@dataclass(frozen=True)
class Totals:
    total_par: int = 0
    total_yardage: int = 0
    total_score: int = 0
    score_to_par: int = 0
    holes_completed: int = 0


@dataclass(frozen=True)
class Scorecard:
    rows: list[ScorecardRow] = field(default_factory=list)
    front_nine: Totals = field(default_factory=Totals)
    back_nine: Totals = field(default_factory=Totals)
    totals: Totals = field(default_factory=Totals)


def compute_totals(holes: Iterable[Hole]) -> Totals:
    holes = list(holes)
    completed = [h for h in holes if h.score is not None]
    total_score = sum(h.score for h in completed)
    return Totals(
        total_par=sum(h.par for h in holes),
        total_yardage=sum(h.yardage for h in holes),
        total_score=total_score,
        score_to_par=total_score - sum(h.par for h in completed),
        holes_completed=len(completed),
    )


def build_scorecard(holes: Iterable[Hole]) -> Scorecard:
    holes = list(holes)
    rows = []
    for h in holes:
        rows.append(
            ScorecardRow(
                number=h.number,
                par=h.par,
                yardage=h.yardage,
                score=h.score,
                is_current=h.is_current,
                category=score_category(h.score, h.par),
                to_par=score_to_par_label(h.score - h.par) if h.score is not None else None,
            )
        )
    return Scorecard(
        rows=rows,
        front_nine=compute_totals(h for h in holes if h.number <= 9),
        back_nine=compute_totals(h for h in holes if h.number > 9),
        totals=compute_totals(holes),
    )
