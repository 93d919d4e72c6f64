"""
Adapter from estimated body keypoints to classifier pose samples.
"""
import numpy as np

from ejudge.rep_logic import MovementKind, PoseSample

# MoveNet SinglePose keypoint order
KEYPOINT_NAMES = [
    "nose", "left_eye", "right_eye", "left_ear", "right_ear",
    "left_shoulder", "right_shoulder", "left_elbow", "right_elbow",
    "left_wrist", "right_wrist", "left_hip", "right_hip",
    "left_knee", "right_knee", "left_ankle", "right_ankle"
]

NAME_TO_IDX = {name: i for i, name in enumerate(KEYPOINT_NAMES)}

BODY_PAIRS = {
    "shoulder_y": ("left_shoulder", "right_shoulder"),
    "hip_y": ("left_hip", "right_hip"),
    "knee_y": ("left_knee", "right_knee"),
}
BAR_PAIR = ("left_wrist", "right_wrist")


def get_keypoint(name, keypoints_yx, confidences):
    """
    Get a specific keypoint by name.

    Args:
        name: Keypoint name (e.g., "left_hip")
        keypoints_yx: Array of normalized (y, x) coordinates, shape (17, 2)
        confidences: Array of confidence scores, shape (17,)

    Returns:
        Tuple of (position, confidence) where position is a (y, x) array
    """
    idx = NAME_TO_IDX[name]
    return keypoints_yx[idx], float(confidences[idx])


def _mid_y(pair, keypoints_yx, confidences, min_conf):
    """Mean y of a left/right pair, or None if either side is not confident."""
    ys = []
    for name in pair:
        yx, conf = get_keypoint(name, keypoints_yx, confidences)
        if conf < min_conf:
            return None
        ys.append(float(yx[0]))
    return float(np.mean(ys))


def sample_from_keypoints(keypoints_yx, confidences, movement, min_conf=0.3):
    """
    Build a PoseSample from one frame of keypoints.

    The bar is approximated by the wrist midpoint and is only filled in for
    the deadlift.

    Args:
        keypoints_yx: (17, 2) array of (y, x) coordinates, y growing downward
        confidences: (17,) array of confidence scores
        movement: MovementKind (or its string value) being judged
        min_conf: Minimum confidence for a keypoint to be used

    Returns:
        PoseSample, or None when shoulders, hips or knees are not all visible
    """
    keypoints_yx = np.asarray(keypoints_yx, dtype=float)
    confidences = np.asarray(confidences, dtype=float)
    n = len(KEYPOINT_NAMES)
    if keypoints_yx.shape != (n, 2) or confidences.shape != (n,):
        raise ValueError(
            f"Expected keypoints of shape ({n}, 2) and confidences of shape ({n},), "
            f"got {keypoints_yx.shape} and {confidences.shape}"
        )

    values = {}
    for field, pair in BODY_PAIRS.items():
        y = _mid_y(pair, keypoints_yx, confidences, min_conf)
        if y is None:
            return None
        values[field] = y

    bar_y = None
    if MovementKind(movement) is MovementKind.DEADLIFT:
        bar_y = _mid_y(BAR_PAIR, keypoints_yx, confidences, min_conf)

    return PoseSample(bar_y=bar_y, **values)
