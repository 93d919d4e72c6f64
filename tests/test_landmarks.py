import numpy as np
import pytest

from ejudge.landmarks import NAME_TO_IDX, get_keypoint, sample_from_keypoints
from ejudge.rep_logic import MovementKind


def frame(**ys):
    kps = np.zeros((17, 2))
    conf = np.full(17, 0.9)
    for name, y in ys.items():
        kps[NAME_TO_IDX[name], 0] = y
    return kps, conf


BODY = dict(
    left_shoulder=0.20, right_shoulder=0.22,
    left_hip=0.50, right_hip=0.52,
    left_knee=0.70, right_knee=0.72,
    left_wrist=0.60, right_wrist=0.64,
)


def test_midpoints():
    kps, conf = frame(**BODY)
    sample = sample_from_keypoints(kps, conf, MovementKind.AIR_SQUAT)
    assert sample.shoulder_y == pytest.approx(0.21)
    assert sample.hip_y == pytest.approx(0.51)
    assert sample.knee_y == pytest.approx(0.71)
    assert sample.bar_y is None


def test_deadlift_uses_wrists_for_bar():
    kps, conf = frame(**BODY)
    sample = sample_from_keypoints(kps, conf, "deadlift")
    assert sample.bar_y == pytest.approx(0.62)


def test_deadlift_bar_missing_when_wrist_hidden():
    kps, conf = frame(**BODY)
    conf[NAME_TO_IDX["left_wrist"]] = 0.1
    assert sample_from_keypoints(kps, conf, MovementKind.DEADLIFT).bar_y is None


def test_low_confidence_body_point_skips_frame():
    kps, conf = frame(**BODY)
    conf[NAME_TO_IDX["right_knee"]] = 0.29
    assert sample_from_keypoints(kps, conf, MovementKind.AIR_SQUAT) is None
    assert sample_from_keypoints(kps, conf, MovementKind.AIR_SQUAT, min_conf=0.2) is not None


def test_get_keypoint():
    kps, conf = frame(**BODY)
    yx, c = get_keypoint("left_hip", kps, conf)
    assert yx[0] == pytest.approx(0.5)
    assert c == pytest.approx(0.9)


def test_wrong_shape_rejected():
    with pytest.raises(ValueError):
        sample_from_keypoints(np.zeros((13, 2)), np.ones(13), MovementKind.AIR_SQUAT)
