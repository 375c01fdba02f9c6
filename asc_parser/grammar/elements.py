"""Closed set of classified ASC lines.

``classify_line`` maps every line onto exactly one of the record types below;
``Element`` is their union.
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple, Union

from ..domain.common import Eye
from .messages import FilterType, MessagePayload, TrackingMode


class DataType(Enum):
    GAZE = "GAZE"
    HREF = "HREF"
    PUPIL = "PUPIL"


@dataclass(frozen=True)
class DataOptions:
    """``RATE``/``TRACKING``/``FILTER`` options of EVENTS and SAMPLES lines."""

    res: bool = False
    rate: Optional[Decimal] = None
    tracking: Optional[TrackingMode] = None
    filter: Optional[FilterType] = None


@dataclass(frozen=True)
class PreambleDateTime:
    value: datetime


@dataclass(frozen=True)
class PreambleOther:
    text: str


@dataclass(frozen=True)
class PreambleEmpty:
    pass


PreamblePayload = Union[PreambleDateTime, PreambleOther, PreambleEmpty]


@dataclass(frozen=True)
class Preamble:
    payload: PreamblePayload


@dataclass(frozen=True)
class Msg:
    time: Decimal
    payload: MessagePayload


@dataclass(frozen=True)
class Comment:
    text: str


@dataclass(frozen=True)
class Other:
    """Line that matches no known keyword and has no numeric timestamp."""

    text: str


@dataclass(frozen=True)
class Input:
    time: Decimal
    value: int


@dataclass(frozen=True)
class SampleLine:
    """15-field binocular sample line with velocity and resolution."""

    time: Decimal
    left_pos_x: Optional[Decimal]
    left_pos_y: Optional[Decimal]
    left_area: Optional[Decimal]
    right_pos_x: Optional[Decimal]
    right_pos_y: Optional[Decimal]
    right_area: Optional[Decimal]
    left_velocity_x: Optional[Decimal]
    left_velocity_y: Optional[Decimal]
    right_velocity_x: Optional[Decimal]
    right_velocity_y: Optional[Decimal]
    res_x: Optional[Decimal]
    res_y: Optional[Decimal]
    unknown: Optional[Decimal]
    interpolated: bool
    left_cr_missing: bool
    left_cr_recovering: bool
    right_cr_missing: bool
    right_cr_recovering: bool


@dataclass(frozen=True)
class StartBlock:
    time: Decimal
    eye_left: bool
    eye_right: bool
    samples: bool
    events: bool


@dataclass(frozen=True)
class EndBlock:
    time: Decimal
    samples: bool
    events: bool
    resolution: Optional[Tuple[Decimal, Decimal]] = None


@dataclass(frozen=True)
class FixationStart:
    eye: Eye
    time: Decimal


@dataclass(frozen=True)
class SaccadeStart:
    eye: Eye
    time: Decimal


@dataclass(frozen=True)
class BlinkStart:
    eye: Eye
    time: Decimal


@dataclass(frozen=True)
class FixationEnd:
    eye: Eye
    start_time: Decimal
    end_time: Decimal
    duration: Decimal
    average_pos_x: Decimal
    average_pos_y: Decimal
    average_pupil_size: Decimal
    res_x: Decimal
    res_y: Decimal


@dataclass(frozen=True)
class SaccadeEnd:
    eye: Eye
    start_time: Decimal
    end_time: Decimal
    duration: Decimal
    start_pos_x: Optional[Decimal]
    start_pos_y: Optional[Decimal]
    end_pos_x: Optional[Decimal]
    end_pos_y: Optional[Decimal]
    movement_angle: Optional[Decimal]
    peak_velocity: Decimal
    res_x: Decimal
    res_y: Decimal


@dataclass(frozen=True)
class BlinkEnd:
    eye: Eye
    start_time: Decimal
    end_time: Decimal
    duration: Decimal


@dataclass(frozen=True)
class PrescalerPosition:
    value: Decimal


@dataclass(frozen=True)
class PrescalerVelocity:
    value: Decimal


@dataclass(frozen=True)
class EventSpec:
    data_type: DataType
    left_eye: bool
    right_eye: bool
    options: DataOptions


@dataclass(frozen=True)
class SampleSpec:
    data_type: DataType
    left_eye: bool
    right_eye: bool
    velocity: bool
    options: DataOptions


@dataclass(frozen=True)
class Blank:
    pass


Element = Union[
    Preamble,
    Msg,
    Comment,
    Other,
    Input,
    SampleLine,
    StartBlock,
    EndBlock,
    FixationStart,
    FixationEnd,
    SaccadeStart,
    SaccadeEnd,
    BlinkStart,
    BlinkEnd,
    PrescalerPosition,
    PrescalerVelocity,
    EventSpec,
    SampleSpec,
    Blank,
]
