"""
Replay of recorded pose samples from CSV.

Expected header columns: hip_y, knee_y, shoulder_y, and optionally bar_y
(empty when the bar is not tracked) and t (seconds).
"""
from typing import List, NamedTuple

import numpy as np
import pandas as pd

from ejudge.rep_logic import PoseSample

REQUIRED_COLUMNS = ("hip_y", "knee_y", "shoulder_y")


class TimedSample(NamedTuple):
    t: float
    sample: PoseSample


def load_samples(path, fps=30.0) -> List[TimedSample]:
    """
    Load a recorded sample stream.

    Args:
        path: CSV file path
        fps: Rate used to generate timestamps when there is no t column

    Returns:
        List of TimedSample in file order

    Raises:
        ValueError: Empty file or missing required columns
    """
    df = pd.read_csv(path, skipinitialspace=True)
    df.columns = [str(c).strip() for c in df.columns]

    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ValueError(f"{path}: missing required column(s): {', '.join(missing)}")

    if "t" in df.columns:
        ts = df["t"].astype(float).to_numpy()
    else:
        ts = np.arange(len(df)) / fps
    bars = df["bar_y"].astype(float).to_numpy() if "bar_y" in df.columns else np.full(len(df), np.nan)

    samples = []
    for t, hip_y, knee_y, shoulder_y, bar_y in zip(
            ts, df["hip_y"].astype(float), df["knee_y"].astype(float),
            df["shoulder_y"].astype(float), bars):
        samples.append(TimedSample(float(t), PoseSample(
            hip_y=float(hip_y),
            knee_y=float(knee_y),
            shoulder_y=float(shoulder_y),
            bar_y=None if np.isnan(bar_y) else float(bar_y),
        )))
    return samples
