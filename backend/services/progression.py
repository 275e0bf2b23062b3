from dataclasses import replace
from typing import Iterable, Optional

from backend.constants import HOLES_PER_ROUND, MAX_PAR, MIN_PAR
from backend.services.models import Hole, HoleSetup


def build_holes(layout: Iterable[HoleSetup | tuple[int, int, int]], start_hole: int = 1) -> tuple[Hole, ...]:
    """Validate an 18-hole layout and mark the starting hole current."""
    setups = [s if isinstance(s, HoleSetup) else HoleSetup(*s) for s in layout]
    setups.sort(key=lambda s: s.number)

    numbers = [s.number for s in setups]
    if numbers != list(range(1, HOLES_PER_ROUND + 1)):
        raise ValueError(f"Round needs holes numbered 1-{HOLES_PER_ROUND}, got {numbers}")
    for s in setups:
        if not MIN_PAR <= s.par <= MAX_PAR:
            raise ValueError(f"Hole {s.number}: par {s.par} outside {MIN_PAR}-{MAX_PAR}")
    if start_hole not in numbers:
        raise ValueError(f"Starting hole {start_hole} is not on the course")

    return tuple(
        Hole(number=s.number, par=s.par, yardage=s.yardage, is_current=s.number == start_hole)
        for s in setups
    )


def current_index(holes: tuple[Hole, ...]) -> Optional[int]:
    for i, hole in enumerate(holes):
        if hole.is_current:
            return i
    return None


def current_hole(holes: tuple[Hole, ...]) -> Optional[Hole]:
    index = current_index(holes)
    return holes[index] if index is not None else None


def finalize_current_hole(holes: tuple[Hole, ...], score: int) -> tuple[tuple[Hole, ...], Optional[Hole]]:
    """Score the current hole and move the pointer forward.

    Returns the updated holes and the new current hole, or None once the
    last hole is done. The pointer never wraps back to hole 1.
    """
    index = current_index(holes)
    if index is None:
        return holes, None

    updated = list(holes)
    updated[index] = replace(holes[index], score=score, is_current=False)

    next_hole = None
    if index + 1 < len(updated):
        next_hole = replace(updated[index + 1], is_current=True)
        updated[index + 1] = next_hole
    return tuple(updated), next_hole
