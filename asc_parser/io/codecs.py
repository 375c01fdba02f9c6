# asc_parser/io/codecs.py
"""Persisted encodings of a parsed ``Experiment``.

Two interchangeable codecs are provided:

- ``json``:   human-readable text built on ``experiment_to_dict``; Decimals are
              written as strings so no precision is lost
- ``pickle``: compact binary encoding of the dataclass tree

Both round-trip every field, including enum tags, absent optionals and the
target-name keyed map.
"""
from __future__ import annotations

import json
import pickle
from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..domain.common import CameraFrameVersion, CRStatus, Eye
from ..domain.experiment import (
    Blink,
    CameraFrame,
    EventInfo,
    EventRecord,
    Experiment,
    EyeSampleData,
    Fixation,
    MetaData,
    RawEyeSampleData,
    RawSample,
    Saccade,
    Sample,
    TargetInfo,
    TimeRecord,
    Trial,
)

FORMAT_VERSION = 1


# ---------------------------------------------------------------------------
# plain-data view
# ---------------------------------------------------------------------------

def _dec(value: Optional[Decimal]) -> Optional[str]:
    return None if value is None else str(value)


def _undec(value: Optional[str]) -> Optional[Decimal]:
    return None if value is None else Decimal(value)


def _pair(value) -> Optional[List[str]]:
    return None if value is None else [str(value[0]), str(value[1])]


def _unpair(value) -> Optional[tuple]:
    return None if value is None else (Decimal(value[0]), Decimal(value[1]))


def _eye_to_dict(data: Optional[EyeSampleData]) -> Optional[Dict[str, Any]]:
    if data is None:
        return None
    return {
        "position": _pair(data.position),
        "area": _dec(data.area),
        "velocity": _pair(data.velocity),
        "cr": data.cr.name,
    }


def _eye_from_dict(data: Optional[Dict[str, Any]]) -> Optional[EyeSampleData]:
    if data is None:
        return None
    return EyeSampleData(
        position=_unpair(data["position"]),
        area=Decimal(data["area"]),
        velocity=_unpair(data["velocity"]),
        cr=CRStatus[data["cr"]],
    )


def _raw_eye_to_dict(data: RawEyeSampleData) -> Dict[str, Any]:
    return {
        "pupil_position": _pair(data.pupil_position),
        "pupil_area": _dec(data.pupil_area),
        "pupil_size": _pair(data.pupil_size),
        "cr_position": _pair(data.cr_position),
        "cr_area": _dec(data.cr_area),
    }


def _raw_eye_from_dict(data: Dict[str, Any]) -> RawEyeSampleData:
    return RawEyeSampleData(
        pupil_position=_unpair(data["pupil_position"]),
        pupil_area=Decimal(data["pupil_area"]),
        pupil_size=_unpair(data["pupil_size"]),
        cr_position=_unpair(data["cr_position"]),
        cr_area=Decimal(data["cr_area"]),
    )


def _time_record_to_dict(record: TimeRecord) -> Dict[str, str]:
    return {"start": str(record.start), "end": str(record.end)}


def _time_record_from_dict(data: Dict[str, str]) -> TimeRecord:
    return TimeRecord(start=Decimal(data["start"]), end=Decimal(data["end"]))


def event_info_to_dict(info: EventInfo) -> Dict[str, Any]:
    if isinstance(info, Fixation):
        return {
            "kind": "fixation",
            "average_position": _pair(info.average_position),
            "average_pupil_area": _dec(info.average_pupil_area),
        }
    if isinstance(info, Saccade):
        return {
            "kind": "saccade",
            "start_position": _pair(info.start_position),
            "end_position": _pair(info.end_position),
            "movement_angle": _dec(info.movement_angle),
            "peak_velocity": _dec(info.peak_velocity),
        }
    if isinstance(info, Blink):
        return {"kind": "blink"}
    raise TypeError(f"Unknown event info: {info!r}")


def event_info_from_dict(data: Dict[str, Any]) -> EventInfo:
    kind = data["kind"]
    if kind == "fixation":
        return Fixation(
            average_position=_unpair(data["average_position"]),
            average_pupil_area=Decimal(data["average_pupil_area"]),
        )
    if kind == "saccade":
        return Saccade(
            start_position=_unpair(data["start_position"]),
            end_position=_unpair(data["end_position"]),
            movement_angle=_undec(data["movement_angle"]),
            peak_velocity=Decimal(data["peak_velocity"]),
        )
    if kind == "blink":
        return Blink()
    raise ValueError(f"Unknown event kind: {kind!r}")


def _trial_to_dict(trial: Trial) -> Dict[str, Any]:
    return {
        "id": trial.id,
        "time_record": _time_record_to_dict(trial.time_record),
        "samples": [
            {
                "time": str(s.time),
                "left": _eye_to_dict(s.left),
                "right": _eye_to_dict(s.right),
                "resolution": _pair(s.resolution),
            }
            for s in trial.samples
        ],
        "raw_samples": [
            {
                "time": str(r.time),
                "left": _raw_eye_to_dict(r.left),
                "right": _raw_eye_to_dict(r.right),
            }
            for r in trial.raw_samples
        ],
        "events": [
            {
                "eye": e.eye.name,
                "time_record": _time_record_to_dict(e.time_record),
                "resolution": _pair(e.resolution),
                "info": event_info_to_dict(e.info),
            }
            for e in trial.events
        ],
        "camera_frames": [
            {
                "name": f.name,
                "idx": f.idx,
                "cam_time": f.cam_time,
                "sys_time": f.sys_time,
                "process_time": str(f.process_time),
                "eyelink_time": _dec(f.eyelink_time),
                "version": f.version.name,
            }
            for f in trial.camera_frames
        ],
        "variables": list(trial.variables),
        "targets": {
            name: [{"time": str(t.time), "position": list(t.position)} for t in infos]
            for name, infos in trial.targets.items()
        },
    }


def _trial_from_dict(data: Dict[str, Any]) -> Trial:
    return Trial(
        id=int(data["id"]),
        time_record=_time_record_from_dict(data["time_record"]),
        samples=[
            Sample(
                time=Decimal(s["time"]),
                left=_eye_from_dict(s["left"]),
                right=_eye_from_dict(s["right"]),
                resolution=_unpair(s["resolution"]),
            )
            for s in data["samples"]
        ],
        raw_samples=[
            RawSample(
                time=Decimal(r["time"]),
                left=_raw_eye_from_dict(r["left"]),
                right=_raw_eye_from_dict(r["right"]),
            )
            for r in data["raw_samples"]
        ],
        events=[
            EventRecord(
                eye=Eye[e["eye"]],
                time_record=_time_record_from_dict(e["time_record"]),
                info=event_info_from_dict(e["info"]),
                resolution=_unpair(e["resolution"]),
            )
            for e in data["events"]
        ],
        camera_frames=[
            CameraFrame(
                name=f["name"],
                idx=int(f["idx"]),
                cam_time=int(f["cam_time"]),
                sys_time=int(f["sys_time"]),
                process_time=Decimal(f["process_time"]),
                eyelink_time=_undec(f["eyelink_time"]),
                version=CameraFrameVersion[f["version"]],
            )
            for f in data["camera_frames"]
        ],
        variables=list(data["variables"]),
        targets={
            name: [
                TargetInfo(time=Decimal(t["time"]), position=(int(t["position"][0]), int(t["position"][1])))
                for t in infos
            ]
            for name, infos in data["targets"].items()
        },
    )


def experiment_to_dict(experiment: Experiment) -> Dict[str, Any]:
    """Lossless plain-data (JSON compatible) view of ``experiment``."""
    recorded = experiment.meta.recording_datetime
    return {
        "format_version": FORMAT_VERSION,
        "meta": {
            "recording_datetime": recorded.isoformat() if recorded is not None else None,
            "preamble_lines": list(experiment.meta.preamble_lines),
        },
        "variable_labels": list(experiment.variable_labels),
        "trials": [_trial_to_dict(t) for t in experiment.trials],
    }


def experiment_from_dict(data: Dict[str, Any]) -> Experiment:
    """Inverse of ``experiment_to_dict``."""
    version = data.get("format_version", FORMAT_VERSION)
    if version != FORMAT_VERSION:
        raise ValueError(f"Unsupported experiment format version: {version}")
    recorded = data["meta"]["recording_datetime"]
    return Experiment(
        meta=MetaData(
            recording_datetime=datetime.fromisoformat(recorded) if recorded is not None else None,
            preamble_lines=list(data["meta"]["preamble_lines"]),
        ),
        variable_labels=list(data["variable_labels"]),
        trials=[_trial_from_dict(t) for t in data["trials"]],
    )


# ---------------------------------------------------------------------------
# codecs
# ---------------------------------------------------------------------------

class ExperimentCodec(ABC):
    """Encodes an ``Experiment`` to bytes and back."""

    name: str = ""
    suffixes: tuple = ()

    @abstractmethod
    def encode(self, experiment: Experiment) -> bytes:
        raise NotImplementedError

    @abstractmethod
    def decode(self, payload: bytes) -> Experiment:
        raise NotImplementedError


class JsonCodec(ExperimentCodec):
    name = "json"
    suffixes = (".json",)

    def __init__(self, indent: Optional[int] = None) -> None:
        self.indent = indent

    def encode(self, experiment: Experiment) -> bytes:
        text = json.dumps(experiment_to_dict(experiment), indent=self.indent, ensure_ascii=False)
        return text.encode("utf-8")

    def decode(self, payload: bytes) -> Experiment:
        return experiment_from_dict(json.loads(payload.decode("utf-8")))


class PickleCodec(ExperimentCodec):
    name = "pickle"
    suffixes = (".pkl", ".pickle")

    def encode(self, experiment: Experiment) -> bytes:
        return pickle.dumps(experiment, protocol=pickle.HIGHEST_PROTOCOL)

    def decode(self, payload: bytes) -> Experiment:
        experiment = pickle.loads(payload)
        if not isinstance(experiment, Experiment):
            raise ValueError(f"Pickle payload holds {type(experiment).__name__}, not Experiment")
        return experiment


CODECS: Dict[str, ExperimentCodec] = {
    JsonCodec.name: JsonCodec(),
    PickleCodec.name: PickleCodec(),
}


def get_codec(fmt: Optional[str] = None, path: Union[str, Path, None] = None) -> ExperimentCodec:
    """Pick a codec by explicit name, else by file suffix."""
    if fmt is not None:
        try:
            return CODECS[fmt]
        except KeyError:
            raise ValueError(f"Unknown experiment format: {fmt!r} (known: {', '.join(CODECS)})") from None
    if path is not None:
        suffix = Path(path).suffix.lower()
        for codec in CODECS.values():
            if suffix in codec.suffixes:
                return codec
        raise ValueError(f"Cannot infer experiment format from suffix {suffix!r}")
    raise ValueError("Either fmt or path must be given")
