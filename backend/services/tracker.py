import logging
import threading
from dataclasses import replace
from typing import Callable, Optional

from backend.services import engine
from backend.services.models import CompletedHole, Hole, RoundState, ShotCapture, ShotRecord, Transition
from backend.services.progression import current_hole
from backend.services.scorecard import Scorecard, build_scorecard

logger = logging.getLogger(__name__)

HoleCompleteCallback = Callable[[Hole, tuple[ShotRecord, ...]], None]


class RoundTracker:
    """Holds the live state of one round and feeds shots through the engine.

    `on_hole_complete` is called with the finished hole and its shots right
    after the state has moved on. Its outcome never affects progression.
    State changes are serialized, so one tracker can be shared across request
    threads.
    """

    def __init__(
        self,
        layout,
        start_hole: int = 1,
        on_hole_complete: Optional[HoleCompleteCallback] = None,
    ) -> None:
        self.state: RoundState = engine.start_round(layout, start_hole)
        self.on_hole_complete = on_hole_complete
        self._lock = threading.RLock()

    @property
    def hole(self) -> Optional[Hole]:
        return current_hole(self.state.holes)

    @property
    def is_finished(self) -> bool:
        return self.hole is None

    @property
    def shot_type(self) -> Optional[str]:
        return engine.resolve_shot_type(self.state)

    @property
    def capture(self) -> ShotCapture:
        return self.state.tracking.capture

    @property
    def missing_fields(self) -> tuple[str, ...]:
        return engine.pending_fields(self.state)

    @property
    def can_submit(self) -> bool:
        return not self.is_finished and not self.missing_fields

    def update_capture(self, **fields) -> ShotCapture:
        with self._lock:
            capture = replace(self.capture, **fields)
            self.state = replace(self.state, tracking=replace(self.state.tracking, capture=capture))
            return capture

    def clear_capture(self) -> None:
        self.update_capture(**vars(ShotCapture()))

    def submit(self, capture: Optional[ShotCapture] = None) -> Transition:
        with self._lock:
            transition = engine.submit_shot(self.state, capture)
            if not transition.accepted:
                return transition

            self.state = transition.state
            # Inside the lock so a hole is reported exactly once
            if transition.completed is not None:
                self._notify(transition.completed)
            return transition

    def scorecard(self) -> Scorecard:
        return build_scorecard(self.state.holes)

    def _notify(self, completed: CompletedHole) -> None:
        hole = completed.hole
        logger.info(f"Hole {hole.number} complete: {hole.score} on a par {hole.par}")
        if self.on_hole_complete is None:
            return
        try:
            self.on_hole_complete(hole, completed.shots)
        except Exception:
            logger.exception(f"Hole-complete handler failed for hole {hole.number}")
