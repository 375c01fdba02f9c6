"""Data structures describing one parsed ASC experiment.

The tree is built once by ``ExperimentBuilder`` and then treated as a value:
leaf records are frozen, containers are only appended to during building.
Timestamps and measurements stay ``decimal.Decimal`` so the values written by
the instrument survive exactly.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Tuple, Union

from ..errors import StructuralError
from .common import CameraFrameVersion, CRStatus, Eye

Position = Tuple[Decimal, Decimal]
Vector = Tuple[Decimal, Decimal]


def optional_pair(x: Optional[Decimal], y: Optional[Decimal]) -> Optional[Tuple[Decimal, Decimal]]:
    """Pair two optional components; absent unless both are present."""
    if x is None or y is None:
        return None
    return (x, y)


@dataclass(frozen=True)
class TimeRecord:
    """Open/close timestamps of a trial or event."""

    start: Decimal = Decimal(0)
    end: Decimal = Decimal(0)

    @classmethod
    def checked(cls, start: Decimal, end: Decimal, duration: Decimal) -> "TimeRecord":
        """Build a record whose reported ``duration`` must equal ``end - start``."""
        if end - start != duration:
            raise StructuralError(
                f"Duration ({duration}) does not match start and end time points {start}, {end}"
            )
        return cls(start=start, end=end)

    @property
    def duration(self) -> Decimal:
        return self.end - self.start


@dataclass(frozen=True)
class EyeSampleData:
    """Filtered position/pupil data of one eye in one sample."""

    position: Position
    area: Decimal
    velocity: Optional[Vector]
    cr: CRStatus

    @classmethod
    def from_fields(
        cls,
        pos_x: Optional[Decimal],
        pos_y: Optional[Decimal],
        area: Optional[Decimal],
        velocity_x: Optional[Decimal],
        velocity_y: Optional[Decimal],
        cr_missing: bool,
        cr_recovering: bool,
    ) -> Optional["EyeSampleData"]:
        """Return ``None`` unless position and area are all present."""
        if pos_x is None or pos_y is None or area is None:
            return None
        return cls(
            position=(pos_x, pos_y),
            area=area,
            velocity=optional_pair(velocity_x, velocity_y),
            cr=CRStatus.from_flags(cr_missing, cr_recovering),
        )


@dataclass(frozen=True)
class Sample:
    """Single binocular observation."""

    time: Decimal
    left: Optional[EyeSampleData] = None
    right: Optional[EyeSampleData] = None
    resolution: Optional[Vector] = None


@dataclass(frozen=True)
class RawEyeSampleData:
    """Unsmoothed pupil and corneal reflection geometry of one eye."""

    pupil_position: Position
    pupil_area: Decimal
    pupil_size: Vector
    cr_position: Position
    cr_area: Decimal


@dataclass(frozen=True)
class RawSample:
    time: Decimal
    left: RawEyeSampleData
    right: RawEyeSampleData


@dataclass(frozen=True)
class CameraFrame:
    """Camera frame bookkeeping reported through ``CAM_FRAME`` messages."""

    name: str
    idx: int
    cam_time: int
    sys_time: int
    process_time: Decimal
    eyelink_time: Optional[Decimal] = None
    version: CameraFrameVersion = CameraFrameVersion.V1


@dataclass(frozen=True)
class Fixation:
    average_position: Position
    average_pupil_area: Decimal


@dataclass(frozen=True)
class Saccade:
    start_position: Optional[Position]
    end_position: Optional[Position]
    movement_angle: Optional[Decimal]
    peak_velocity: Decimal


@dataclass(frozen=True)
class Blink:
    pass


EventInfo = Union[Fixation, Saccade, Blink]


@dataclass(frozen=True)
class EventRecord:
    """Fixation, saccade or blink detected by the tracker."""

    eye: Eye
    time_record: TimeRecord
    info: EventInfo
    resolution: Optional[Vector] = None


@dataclass(frozen=True)
class TargetInfo:
    time: Decimal
    position: Tuple[int, int]


@dataclass
class Trial:
    """One recording interval between ``TRIALID`` and ``TRIAL_RESULT``."""

    id: int
    time_record: TimeRecord = field(default_factory=TimeRecord)
    samples: List[Sample] = field(default_factory=list)
    raw_samples: List[RawSample] = field(default_factory=list)
    events: List[EventRecord] = field(default_factory=list)
    camera_frames: List[CameraFrame] = field(default_factory=list)
    variables: List[str] = field(default_factory=list)
    targets: Dict[str, List[TargetInfo]] = field(default_factory=dict)

    @classmethod
    def from_trial_start(cls, trial_id: int, start_time: Decimal) -> "Trial":
        return cls(id=trial_id, time_record=TimeRecord(start=start_time))

    def add_target(self, name: str, info: TargetInfo) -> None:
        self.targets.setdefault(name, []).append(info)


@dataclass
class MetaData:
    """Recording date and the remaining preamble lines, verbatim."""

    recording_datetime: Optional[datetime] = None
    preamble_lines: List[str] = field(default_factory=list)


@dataclass
class Experiment:
    """Root of the parsed tree."""

    meta: MetaData = field(default_factory=MetaData)
    variable_labels: List[str] = field(default_factory=list)
    trials: List[Trial] = field(default_factory=list)

    def trial(self, trial_id: int) -> Trial:
        """Return the first trial with ``trial_id``."""
        for trial in self.trials:
            if trial.id == trial_id:
                return trial
        raise KeyError(f"Trial {trial_id} not found")
