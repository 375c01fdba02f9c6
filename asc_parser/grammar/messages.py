"""Closed set of decoded ``MSG`` payloads.

Every payload kind is a frozen dataclass; ``MessagePayload`` is the union of
all of them and is what ``decode_message`` returns.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import List, Optional, Tuple, Union

from ..domain.common import CameraFrameVersion


class TrackingMode(Enum):
    PUPIL = "P"
    CR = "CR"


class FilterType(Enum):
    OFF = "0"
    STANDARD = "1"
    EXTRA = "2"


class EyeSpecification(Enum):
    L = "L"
    R = "R"
    LR = "LR"


class MountConfiguration(Enum):
    MTABLER = "MTABLER"
    BTABLER = "BTABLER"
    RTABLER = "RTABLER"
    RBTABLER = "RBTABLER"
    AMTABLER = "AMTABLER"
    ARTABLER = "ARTABLER"
    BTOWER = "BTOWER"
    TOWER = "TOWER"
    MPRIM = "MPRIM"
    BPRIM = "BPRIM"
    MLRR = "MLRR"
    BLRR = "BLRR"


class TrackingAlgorithm(Enum):
    ELLIPSE = "ELLIPSE"
    CENTROID = "CENTROID"


@dataclass(frozen=True)
class ThresholdSpec:
    pupil: int
    cr: int


@dataclass(frozen=True)
class Target:
    """One target group of a ``TARGET_POS`` payload."""

    name: str
    position: Tuple[int, int]
    visible: bool
    interpolate: bool


@dataclass(frozen=True)
class RawEyeBlock:
    """One 8-field eye block of a raw binocular sample message."""

    pupil_pos_x: Decimal
    pupil_pos_y: Decimal
    pupil_area: Decimal
    pupil_size_x: Decimal
    pupil_size_y: Decimal
    cr_pos_x: Decimal
    cr_pos_y: Decimal
    cr_area: Decimal


@dataclass(frozen=True)
class TrialIdMsg:
    trial_id: int


@dataclass(frozen=True)
class TrialResultMsg:
    code: int


@dataclass(frozen=True)
class RecordingConfigurationMsg:
    tracking_mode: TrackingMode
    sampling_rate: Decimal
    file_sample_filter: FilterType
    link_sample_filter: FilterType
    eyes: EyeSpecification


@dataclass(frozen=True)
class MountConfigurationMsg:
    mount: MountConfiguration


@dataclass(frozen=True)
class GazeCoordinatesMsg:
    left: Decimal
    top: Decimal
    right: Decimal
    bottom: Decimal


@dataclass(frozen=True)
class ThresholdsMsg:
    left: ThresholdSpec
    right: ThresholdSpec


@dataclass(frozen=True)
class TrackingAlgorithmMsg:
    algorithm: TrackingAlgorithm


@dataclass(frozen=True)
class PcrParameterMsg:
    index: int
    value: Decimal


@dataclass(frozen=True)
class CameraLensFocalLengthMsg:
    focal_length: Decimal


@dataclass(frozen=True)
class WindowSizesMsg:
    sizes: Tuple[int, int, int, int]


@dataclass(frozen=True)
class PupilDataTypeMsg:
    data_type: str


@dataclass(frozen=True)
class TrialVarLabelsMsg:
    labels: List[str]


@dataclass(frozen=True)
class TrialVarValuesMsg:
    values: List[str]


@dataclass(frozen=True)
class TargetPositionsMsg:
    targets: List[Target]


@dataclass(frozen=True)
class TrialDataOtherMsg:
    """``!V`` command that carries no trial data we keep."""

    text: str


@dataclass(frozen=True)
class RawDataMsg:
    time: Decimal
    left: RawEyeBlock
    right: RawEyeBlock


@dataclass(frozen=True)
class CameraFrameMsg:
    name: str
    version: CameraFrameVersion
    frame_idx: int
    cam_time: int
    sys_time: int
    process_time: Decimal
    eyelink_time: Optional[Decimal]


@dataclass(frozen=True)
class OtherMsg:
    text: str


TrialDataMsg = Union[TrialVarValuesMsg, TargetPositionsMsg, TrialDataOtherMsg]

MessagePayload = Union[
    TrialIdMsg,
    TrialResultMsg,
    RecordingConfigurationMsg,
    MountConfigurationMsg,
    GazeCoordinatesMsg,
    ThresholdsMsg,
    TrackingAlgorithmMsg,
    PcrParameterMsg,
    CameraLensFocalLengthMsg,
    WindowSizesMsg,
    PupilDataTypeMsg,
    TrialVarLabelsMsg,
    TrialVarValuesMsg,
    TargetPositionsMsg,
    TrialDataOtherMsg,
    RawDataMsg,
    CameraFrameMsg,
    OtherMsg,
]
