"""
Consumer-side session handling: holds the rep state for one movement,
picks audio cues and builds the feedback banner text.
"""
import logging
import time
from typing import List, NamedTuple, Optional

from ejudge.rep_logic import (
    DEFAULT_THRESHOLDS,
    ClassifyResult,
    MovementKind,
    PoseSample,
    classify,
    create_initial_state,
)

logger = logging.getLogger(__name__)


class Cue(NamedTuple):
    frequency_hz: float
    duration_ms: int


# Short high tone for a counted rep, longer low tone for a likely no-rep
REP_CUE = Cue(frequency_hz=880.0, duration_ms=80)
INVALID_CUE = Cue(frequency_hz=330.0, duration_ms=180)

DEFAULT_WARN_TEXT = "Watch your movement standard."
OK_TEXT = "Standards look good on recent reps."


class SessionEvent(NamedTuple):
    result: ClassifyResult
    cues: List[Cue]


class Feedback(NamedTuple):
    severity: str  # "ok" or "warn"
    title: str
    text: str


class RepSession:
    """
    Owns the rep state of a single sample stream.

    The state is recreated whenever the session is reset or the movement
    changes, since phase semantics differ between movements.
    """

    def __init__(self, movement=MovementKind.AIR_SQUAT, thresholds=DEFAULT_THRESHOLDS,
                 clock=time.time):
        """
        Initialize session.

        Args:
            movement: MovementKind or its string value
            thresholds: Thresholds passed through to the classifier
            clock: Callable returning the current time in seconds
        """
        self.movement = MovementKind(movement)
        self.thresholds = thresholds
        self.clock = clock
        self.state = create_initial_state()
        self.last_rep_at: Optional[float] = None
        self.last_invalid_at: Optional[float] = None
        self.last_rep_invalid = False

    def reset(self):
        """Start over with zeroed counters."""
        self.state = create_initial_state()
        self.last_rep_at = None
        self.last_invalid_at = None
        self.last_rep_invalid = False
        logger.debug("Session reset for %s", self.movement.label)

    def switch_movement(self, movement):
        """Select another movement; counters restart only if it changed."""
        movement = MovementKind(movement)
        if movement is self.movement:
            return
        logger.info("Switching movement %s -> %s", self.movement.label, movement.label)
        self.movement = movement
        self.reset()

    def feed(self, sample: PoseSample, t: Optional[float] = None) -> SessionEvent:
        """
        Classify one sample and replace the held state.

        Args:
            sample: Pose sample from the stream
            t: Sample timestamp in seconds (clock() if None)

        Returns:
            SessionEvent with the classifier result and the cues to play
        """
        result = classify(self.movement, self.state, sample, self.thresholds)
        previous_phase = self.state.last_phase
        self.state = result.state

        if result.state.last_phase is not previous_phase:
            logger.debug("Phase %s -> %s", previous_phase.value, result.state.last_phase.value)

        cues = []
        if result.rep_completed or result.invalid_rep:
            now = self.clock() if t is None else t
            if result.rep_completed:
                self.last_rep_at = now
                self.last_rep_invalid = result.invalid_rep
                cues.append(REP_CUE)
                logger.info("%s rep %d completed", self.movement.label, self.state.rep_count)
            if result.invalid_rep:
                self.last_invalid_at = now
                cues.append(INVALID_CUE)
                logger.info("%s rep %d likely invalid: %s", self.movement.label,
                            self.state.rep_count, self.state.last_invalid_reason)
        return SessionEvent(result, cues)

    def feedback(self) -> Feedback:
        """Banner shown under the counters."""
        if self.last_rep_invalid:
            return Feedback("warn", "Standard reminder",
                            self.state.last_invalid_reason or DEFAULT_WARN_TEXT)
        return Feedback("ok", "Form OK", OK_TEXT)
