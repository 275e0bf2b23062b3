"""In-memory types for a round being played.

These are separate from the SQLModel tables in backend.storage.database:
they describe live tracking state, which is never stored as-is.
"""

from dataclasses import dataclass, field
from typing import Optional

from backend.constants import YARDS


@dataclass(frozen=True)
class HoleSetup:
    number: int
    par: int
    yardage: int


@dataclass(frozen=True)
class Hole:
    number: int
    par: int
    yardage: int
    score: Optional[int] = None
    is_current: bool = False


@dataclass(frozen=True)
class ShotRecord:
    shot_number: int
    distance_to_hole_before: int
    distance_to_hole_after: int
    distance_unit: str
    shot_distance: int
    used_driver: Optional[bool]
    result_of_shot: str
    miss_direction: Optional[str]
    shot_type: str
    putt_break: Optional[str] = None
    putt_slope: Optional[str] = None


@dataclass(frozen=True)
class ShotCapture:
    """Fields entered so far for the shot being captured."""

    distance_input: str = ""
    used_driver: Optional[bool] = None
    result_of_shot: Optional[str] = None
    miss_direction: Optional[str] = None
    putt_break: Optional[str] = None
    putt_slope: Optional[str] = None


@dataclass(frozen=True)
class TrackingState:
    distance_to_hole: int
    current_shot_number: int = 1
    has_been_on_green: bool = False
    distance_unit: str = YARDS
    capture: ShotCapture = field(default_factory=ShotCapture)
    shots: tuple[ShotRecord, ...] = ()


@dataclass(frozen=True)
class RoundState:
    holes: tuple[Hole, ...]
    tracking: TrackingState


@dataclass(frozen=True)
class CompletedHole:
    hole: Hole
    shots: tuple[ShotRecord, ...]


@dataclass(frozen=True)
class Transition:
    accepted: bool
    state: RoundState
    record: Optional[ShotRecord] = None
    completed: Optional[CompletedHole] = None
    missing: tuple[str, ...] = ()
