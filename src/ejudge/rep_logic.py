"""
Rep classification state machines for air squat, wall ball and deadlift.
"""
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, NamedTuple, Optional


class MovementKind(Enum):
    """Movements the classifier knows how to judge."""

    AIR_SQUAT = "air_squat"
    WALL_BALL = "wall_ball"
    DEADLIFT = "deadlift"

    @property
    def label(self):
        return MOVEMENT_LABELS[self]


MOVEMENT_LABELS = {
    MovementKind.AIR_SQUAT: "Air Squat",
    MovementKind.WALL_BALL: "Wall Ball",
    MovementKind.DEADLIFT: "Deadlift",
}


class RepPhase(Enum):
    """Where in the movement cycle the performer is believed to be."""

    TOP = "top"
    BOTTOM = "bottom"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class PoseSample:
    """
    Vertical landmark positions at one instant.

    Image coordinates: larger values are visually lower in the frame.

    Args:
        hip_y: Hip midpoint y
        knee_y: Knee midpoint y
        shoulder_y: Shoulder midpoint y
        bar_y: Bar / hands y, deadlift only (None when not tracked)
    """

    hip_y: float
    knee_y: float
    shoulder_y: float
    bar_y: Optional[float] = None


@dataclass(frozen=True)
class RepState:
    """Session counters and current phase, replaced after every sample."""

    rep_count: int = 0
    last_phase: RepPhase = RepPhase.UNKNOWN
    invalid_count: int = 0
    last_invalid_reason: Optional[str] = None


@dataclass(frozen=True)
class Thresholds:
    # hip_y - knee_y above this means the hip is visually below the knee
    squat_depth_threshold: float = 0.04
    # bar (and shoulders) must sit this far above the hip at lockout
    deadlift_lockout_delta: float = 0.03


DEFAULT_THRESHOLDS = Thresholds()


class ClassifyResult(NamedTuple):
    state: RepState
    rep_completed: bool
    invalid_rep: bool


class PhaseReading(NamedTuple):
    """Predicates computed from a single sample."""

    at_top: bool
    at_bottom: bool
    standard_met: bool


def read_squat(sample: PoseSample, thresholds: Thresholds) -> PhaseReading:
    at_bottom = sample.hip_y - sample.knee_y > thresholds.squat_depth_threshold
    at_top = sample.hip_y <= sample.knee_y
    # Depth is re-checked on the sample that completes the rep, so a rep
    # detected at the top frame can never satisfy it.
    return PhaseReading(at_top=at_top, at_bottom=at_bottom, standard_met=at_bottom)


def read_deadlift(sample: PoseSample, thresholds: Thresholds) -> PhaseReading:
    # Without a tracked bar, hip height stands in and bottom is never reached.
    bar_y = sample.bar_y if sample.bar_y is not None else sample.hip_y
    lockout_y = sample.hip_y - thresholds.deadlift_lockout_delta
    return PhaseReading(
        at_top=bar_y <= lockout_y,
        at_bottom=bar_y > sample.hip_y,
        standard_met=sample.shoulder_y <= lockout_y,
    )


class MovementRule(NamedTuple):
    read: Callable[[PoseSample, Thresholds], PhaseReading]
    violation: str


SQUAT_DEPTH_VIOLATION = "Squat depth likely too shallow"
DEADLIFT_LOCKOUT_VIOLATION = "Deadlift lockout: stand taller and open hips fully"

RULES = {
    MovementKind.AIR_SQUAT: MovementRule(read_squat, SQUAT_DEPTH_VIOLATION),
    MovementKind.WALL_BALL: MovementRule(read_squat, SQUAT_DEPTH_VIOLATION),
    MovementKind.DEADLIFT: MovementRule(read_deadlift, DEADLIFT_LOCKOUT_VIOLATION),
}


def create_initial_state() -> RepState:
    """Fresh state for a new session or movement selection."""
    return RepState()


def classify(kind, state: RepState, sample: PoseSample,
             thresholds: Thresholds = DEFAULT_THRESHOLDS) -> ClassifyResult:
    """
    Advance the rep state machine by one pose sample.

    A rep is counted only on a Bottom -> Top transition. The returned state
    always has last_invalid_reason cleared unless this very sample completed
    a rep that failed the movement standard.

    Args:
        kind: MovementKind (or its string value) the state belongs to
        state: State returned by the previous call, or create_initial_state()
        sample: Current pose sample, used as-is
        thresholds: Numeric constants for the movement predicates

    Returns:
        ClassifyResult of (next state, rep completed, rep invalid)

    Raises:
        ValueError: kind is not a MovementKind value
    """
    rule = RULES[MovementKind(kind)]
    reading = rule.read(sample, thresholds)
    next_state = replace(state, last_invalid_reason=None)

    if state.last_phase is RepPhase.TOP:
        if reading.at_bottom:
            next_state = replace(next_state, last_phase=RepPhase.BOTTOM)
        return ClassifyResult(next_state, False, False)

    if state.last_phase is RepPhase.BOTTOM:
        if not reading.at_top:
            return ClassifyResult(next_state, False, False)
        invalid = not reading.standard_met
        next_state = replace(
            next_state,
            rep_count=state.rep_count + 1,
            last_phase=RepPhase.TOP,
            invalid_count=state.invalid_count + (1 if invalid else 0),
            last_invalid_reason=rule.violation if invalid else None,
        )
        return ClassifyResult(next_state, True, invalid)

    # Unknown: top wins when both predicates hold
    if reading.at_top:
        next_state = replace(next_state, last_phase=RepPhase.TOP)
    elif reading.at_bottom:
        next_state = replace(next_state, last_phase=RepPhase.BOTTOM)
    return ClassifyResult(next_state, False, False)
