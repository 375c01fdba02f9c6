"""Domain models for parsed ASC experiments."""

from .common import Eye, CRStatus, CameraFrameVersion
from .experiment import (
    Experiment,
    MetaData,
    Trial,
    TimeRecord,
    Sample,
    EyeSampleData,
    RawSample,
    RawEyeSampleData,
    CameraFrame,
    EventRecord,
    EventInfo,
    Fixation,
    Saccade,
    Blink,
    TargetInfo,
    Position,
    Vector,
)

__all__ = [
    "Eye",
    "CRStatus",
    "CameraFrameVersion",
    "Experiment",
    "MetaData",
    "Trial",
    "TimeRecord",
    "Sample",
    "EyeSampleData",
    "RawSample",
    "RawEyeSampleData",
    "CameraFrame",
    "EventRecord",
    "EventInfo",
    "Fixation",
    "Saccade",
    "Blink",
    "TargetInfo",
    "Position",
    "Vector",
]
