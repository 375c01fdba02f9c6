# asc_parser/export.py
"""Row-oriented pandas views of a parsed experiment.

Decimal fields stay ``decimal.Decimal`` objects (object dtype) so values are
exact; absent optionals are ``None``.
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional

import pandas as pd

from .domain.experiment import (
    Blink,
    Experiment,
    EyeSampleData,
    Fixation,
    Saccade,
    Trial,
)

SAMPLE_COLUMNS = [
    "time",
    "left_pos_x",
    "left_pos_y",
    "left_area",
    "left_velocity_x",
    "left_velocity_y",
    "left_cr",
    "right_pos_x",
    "right_pos_y",
    "right_area",
    "right_velocity_x",
    "right_velocity_y",
    "right_cr",
    "res_x",
    "res_y",
]

CAMERA_FRAME_COLUMNS = [
    "name",
    "version",
    "idx",
    "cam_time",
    "sys_time",
    "process_time",
    "eyelink_time",
]

EVENT_COLUMNS = [
    "kind",
    "eye",
    "start",
    "end",
    "res_x",
    "res_y",
    "average_pos_x",
    "average_pos_y",
    "average_pupil_area",
    "start_pos_x",
    "start_pos_y",
    "end_pos_x",
    "end_pos_y",
    "movement_angle",
    "peak_velocity",
]


def _component(pair, index: int):
    return None if pair is None else pair[index]


def _eye_columns(prefix: str, data: Optional[EyeSampleData]) -> Dict[str, Any]:
    if data is None:
        return {
            f"{prefix}_pos_x": None,
            f"{prefix}_pos_y": None,
            f"{prefix}_area": None,
            f"{prefix}_velocity_x": None,
            f"{prefix}_velocity_y": None,
            f"{prefix}_cr": None,
        }
    return {
        f"{prefix}_pos_x": data.position[0],
        f"{prefix}_pos_y": data.position[1],
        f"{prefix}_area": data.area,
        f"{prefix}_velocity_x": _component(data.velocity, 0),
        f"{prefix}_velocity_y": _component(data.velocity, 1),
        f"{prefix}_cr": data.cr.name,
    }


def _frame(rows: List[Dict[str, Any]], columns: List[str]) -> pd.DataFrame:
    # object dtype keeps Decimal and None untouched
    return pd.DataFrame(rows, columns=columns, dtype=object)


def trial_samples_frame(trial: Trial) -> pd.DataFrame:
    """One row per sample of ``trial``."""
    rows = []
    for sample in trial.samples:
        row: Dict[str, Any] = {"time": sample.time}
        row.update(_eye_columns("left", sample.left))
        row.update(_eye_columns("right", sample.right))
        row["res_x"] = _component(sample.resolution, 0)
        row["res_y"] = _component(sample.resolution, 1)
        rows.append(row)
    return _frame(rows, SAMPLE_COLUMNS)


def trial_camera_frames_frame(trial: Trial) -> pd.DataFrame:
    rows = [
        {
            "name": f.name,
            "version": f.version.name,
            "idx": f.idx,
            "cam_time": f.cam_time,
            "sys_time": f.sys_time,
            "process_time": f.process_time,
            "eyelink_time": f.eyelink_time,
        }
        for f in trial.camera_frames
    ]
    return _frame(rows, CAMERA_FRAME_COLUMNS)


def trial_events_frame(trial: Trial) -> pd.DataFrame:
    """One row per event; payload columns not used by an event kind are ``None``."""
    rows = []
    for event in trial.events:
        row: Dict[str, Any] = dict.fromkeys(EVENT_COLUMNS)
        row.update(
            eye=event.eye.name,
            start=event.time_record.start,
            end=event.time_record.end,
            res_x=_component(event.resolution, 0),
            res_y=_component(event.resolution, 1),
        )
        info = event.info
        if isinstance(info, Fixation):
            row.update(
                kind="fixation",
                average_pos_x=info.average_position[0],
                average_pos_y=info.average_position[1],
                average_pupil_area=info.average_pupil_area,
            )
        elif isinstance(info, Saccade):
            row.update(
                kind="saccade",
                start_pos_x=_component(info.start_position, 0),
                start_pos_y=_component(info.start_position, 1),
                end_pos_x=_component(info.end_position, 0),
                end_pos_y=_component(info.end_position, 1),
                movement_angle=info.movement_angle,
                peak_velocity=info.peak_velocity,
            )
        elif isinstance(info, Blink):
            row["kind"] = "blink"
        rows.append(row)
    return _frame(rows, EVENT_COLUMNS)


def trial_variables_frame(experiment: Experiment) -> pd.DataFrame:
    """``trial_id`` plus one column per declared variable label."""
    labels = experiment.variable_labels
    # positional rows: labels are not guaranteed unique
    rows = []
    for trial in experiment.trials:
        values = list(trial.variables[:len(labels)])
        values += [None] * (len(labels) - len(values))
        rows.append([trial.id, *values])
    return pd.DataFrame(rows, columns=["trial_id", *labels], dtype=object)


def experiment_samples_frame(experiment: Experiment) -> pd.DataFrame:
    """Samples of all trials, prefixed by a ``trial_id`` column."""
    frames = []
    for trial in experiment.trials:
        df = trial_samples_frame(trial)
        df.insert(0, "trial_id", trial.id)
        frames.append(df)
    if not frames:
        return _frame([], ["trial_id", *SAMPLE_COLUMNS])
    return pd.concat(frames, ignore_index=True)
