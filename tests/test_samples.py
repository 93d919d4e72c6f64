import pytest

from ejudge.rep_logic import PoseSample
from ejudge.samples import load_samples


def write(tmp_path, text):
    path = tmp_path / "samples.csv"
    path.write_text(text)
    return path


def test_load_with_timestamps_and_bar(tmp_path):
    path = write(tmp_path, "t,hip_y,knee_y,shoulder_y,bar_y\n"
                           "0.0,0.5,0.7,0.2,0.4\n"
                           "0.5,0.5,0.7,0.2,\n")
    samples = load_samples(path)
    assert [s.t for s in samples] == [0.0, 0.5]
    assert samples[0].sample == PoseSample(0.5, 0.7, 0.2, bar_y=0.4)
    assert samples[1].sample.bar_y is None


def test_generated_timestamps(tmp_path):
    path = write(tmp_path, "hip_y,knee_y,shoulder_y\n0.3,0.5,0.1\n0.6,0.5,0.4\n0.3,0.5,0.1\n")
    samples = load_samples(path, fps=10.0)
    assert [s.t for s in samples] == pytest.approx([0.0, 0.1, 0.2])
    assert all(s.sample.bar_y is None for s in samples)


def test_single_row(tmp_path):
    path = write(tmp_path, "hip_y,knee_y,shoulder_y\n0.3,0.5,0.1\n")
    samples = load_samples(path)
    assert len(samples) == 1
    assert samples[0].sample.hip_y == 0.3


def test_missing_column(tmp_path):
    path = write(tmp_path, "hip_y,shoulder_y\n0.3,0.1\n")
    with pytest.raises(ValueError, match="knee_y"):
        load_samples(path)


def test_missing_file(tmp_path):
    with pytest.raises(OSError):
        load_samples(tmp_path / "nope.csv")


def test_empty_file(tmp_path):
    path = write(tmp_path, "")
    with pytest.raises(ValueError):
        load_samples(path)


def test_header_only(tmp_path):
    path = write(tmp_path, "t,hip_y,knee_y,shoulder_y,bar_y\n")
    assert load_samples(path) == []
