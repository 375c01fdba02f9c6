from decimal import Decimal

import pandas as pd

from asc_parser.domain.experiment import Experiment, Trial
from asc_parser.export import (
    CAMERA_FRAME_COLUMNS,
    EVENT_COLUMNS,
    SAMPLE_COLUMNS,
    experiment_samples_frame,
    trial_camera_frames_frame,
    trial_events_frame,
    trial_samples_frame,
    trial_variables_frame,
)
from asc_parser.io import write_tsv


def test_samples_frame(experiment):
    df = trial_samples_frame(experiment.trial(1))
    assert list(df.columns) == SAMPLE_COLUMNS
    assert len(df) == 2
    assert df.loc[0, "left_pos_x"] == Decimal("512.3")
    assert df.loc[0, "left_cr"] == "FOUND"
    assert pd.isna(df.loc[1, "left_pos_x"])
    assert df.loc[1, "right_area"] == Decimal("1181.0")


def test_events_frame(experiment):
    df = trial_events_frame(experiment.trial(1))
    assert list(df.columns) == EVENT_COLUMNS
    assert list(df["kind"]) == ["fixation", "saccade", "blink"]
    assert df.loc[0, "average_pupil_area"] == Decimal(1200)
    assert df.loc[1, "peak_velocity"] == Decimal("312.0")
    assert pd.isna(df.loc[2, "res_x"])


def test_camera_frames_frame(experiment):
    df = trial_camera_frames_frame(experiment.trial(1))
    assert list(df.columns) == CAMERA_FRAME_COLUMNS
    assert list(df["version"]) == ["V1", "V2"]
    assert pd.isna(df.loc[0, "eyelink_time"])
    assert df.loc[1, "eyelink_time"] == Decimal("1015.5")


def test_variables_frame(experiment):
    df = trial_variables_frame(experiment)
    assert list(df.columns) == ["trial_id", "condition", "target_side"]
    assert list(df["condition"]) == ["congruent", "incongruent"]


def test_experiment_samples_frame(experiment):
    df = experiment_samples_frame(experiment)
    assert list(df["trial_id"]) == [1, 1, 2]
    assert list(df.columns) == ["trial_id", *SAMPLE_COLUMNS]


def test_empty_experiment_frames():
    assert experiment_samples_frame(Experiment()).empty
    assert list(trial_variables_frame(Experiment()).columns) == ["trial_id"]


def test_write_tsv(tmp_path, experiment):
    path = tmp_path / "samples.tsv"
    write_tsv(trial_samples_frame(experiment.trial(1)), path)
    header, first, second = path.read_text(encoding="utf-8").splitlines()
    assert header.split("\t") == SAMPLE_COLUMNS
    assert first.split("\t")[1] == "512.3"
    assert second.split("\t")[1] == ""


def test_variables_frame_with_repeated_labels():
    trial = Trial(id=7, variables=["a", "b", "c"])
    short = Trial(id=8, variables=["x"])
    experiment = Experiment(variable_labels=["trial_id", "side", "side"], trials=[trial, short])
    df = trial_variables_frame(experiment)
    assert list(df.columns) == ["trial_id", "trial_id", "side", "side"]
    assert df.iloc[0].tolist() == [7, "a", "b", "c"]
    assert df.iloc[1, 0] == 8
    assert df.iloc[1, 1] == "x"
    assert pd.isna(df.iloc[1, 3])
