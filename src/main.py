"""
Replay a recorded pose-sample stream through the rep classifier.
"""
import argparse
import logging

from pydantic import ValidationError

from ejudge.config import get_settings
from ejudge.filters import PoseSmoother
from ejudge.rep_logic import MovementKind
from ejudge.samples import load_samples
from ejudge.session import RepSession

logger = logging.getLogger(__name__)


def build_parser(settings):
    parser = argparse.ArgumentParser(
        description="HIIT e-judge rep counter replaying recorded pose samples"
    )
    parser.add_argument(
        "samples",
        help="CSV file with hip_y, knee_y, shoulder_y and optional bar_y, t columns"
    )
    parser.add_argument(
        "--movement",
        choices=[m.value for m in MovementKind],
        default=MovementKind.AIR_SQUAT.value,
        help="Movement being judged"
    )
    parser.add_argument(
        "--fps",
        type=float,
        default=settings.sample_fps,
        help="Sample rate used when the recording has no t column"
    )
    parser.add_argument(
        "--smooth",
        action="store_true",
        help="Apply One Euro smoothing before classification"
    )
    parser.add_argument(
        "--min_cutoff",
        type=float,
        default=settings.filter_min_cutoff,
        help="One Euro filter minimum cutoff frequency"
    )
    parser.add_argument(
        "--beta",
        type=float,
        default=settings.filter_beta,
        help="One Euro filter beta (speed coefficient)"
    )
    parser.add_argument(
        "--d_cutoff",
        type=float,
        default=settings.filter_d_cutoff,
        help="One Euro filter derivative cutoff"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Log phase changes"
    )
    return parser


def main(argv=None):
    try:
        settings = get_settings()
    except ValidationError as e:
        raise SystemExit(f"Invalid EJUDGE_* settings: {e}")
    args = build_parser(settings).parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    try:
        recording = load_samples(args.samples, fps=args.fps)
    except (OSError, ValueError) as e:
        raise SystemExit(f"Could not load samples from {args.samples}: {e}")

    session = RepSession(args.movement, thresholds=settings.thresholds())
    smoother = None
    if args.smooth:
        smoother = PoseSmoother(
            freq=args.fps,
            min_cutoff=args.min_cutoff,
            beta=args.beta,
            d_cutoff=args.d_cutoff
        )

    print(f"Replaying {len(recording)} samples for {session.movement.label}")
    logger.debug("Thresholds: %s", session.thresholds)

    for t, sample in recording:
        if smoother is not None:
            sample = smoother(sample, t=t)
        event = session.feed(sample, t=t)

        if event.result.rep_completed:
            state = event.result.state
            if event.result.invalid_rep:
                print(f"[Rep {state.rep_count}] t={t:.2f}s likely no-rep: {state.last_invalid_reason}")
            else:
                print(f"[Rep {state.rep_count}] t={t:.2f}s")

    state = session.state
    feedback = session.feedback()
    print(f"\nSession complete! Total reps: {state.rep_count}, likely no-reps: {state.invalid_count}")
    print(f"{feedback.title}: {feedback.text}")
    return state


if __name__ == "__main__":
    main()
