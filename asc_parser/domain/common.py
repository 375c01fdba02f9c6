"""Enumerations shared by the line grammar and the experiment model."""
from __future__ import annotations

from enum import Enum, auto


class Eye(Enum):
    """Eye a record refers to."""

    LEFT = auto()
    RIGHT = auto()


class CRStatus(Enum):
    """Corneal reflection detection state of one eye in one sample."""

    MISSING = auto()
    RECOVERING = auto()
    FOUND = auto()

    @classmethod
    def from_flags(cls, cr_missing: bool, cr_recovering: bool) -> "CRStatus":
        if cr_missing:
            return cls.MISSING
        if cr_recovering:
            return cls.RECOVERING
        return cls.FOUND


class CameraFrameVersion(Enum):
    """Layout revision of a ``CAM_FRAME`` message."""

    V1 = auto()  # no version marker in the file
    V2 = auto()  # "V2" marker, trailing eyelink time always present
