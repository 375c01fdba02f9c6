# asc_parser/config/constants.py
"""Keyword tables and literals of the ASC line grammar."""

from __future__ import annotations


class LineKeywords:
    """First tokens that select a line kind."""

    PREAMBLE = "**"
    MSG = "MSG"
    COMMENTS = frozenset({"#", ";", "//"})
    INPUT = "INPUT"

    SACCADE_START = "SSACC"
    FIXATION_START = "SFIX"
    BLINK_START = "SBLINK"
    SACCADE_END = "ESACC"
    FIXATION_END = "EFIX"
    BLINK_END = "EBLINK"

    BLOCK_START = "START"
    BLOCK_END = "END"
    PRESCALER = "PRESCALER"
    VPRESCALER = "VPRESCALER"
    EVENT_SPEC = "EVENTS"
    SAMPLE_SPEC = "SAMPLES"


class MessageKeywords:
    """First tokens of a ``MSG`` payload."""

    TRIAL_ID = "TRIALID"
    TRIAL_RESULT = "TRIAL_RESULT"
    RECORDING_CONFIG = "RECCFG"
    MOUNT_CONFIG = "ELCLCFG"
    GAZE_COORDS = "GAZE_COORDS"
    THRESHOLDS = "THRESHOLDS"
    TRACKING_ALGORITHM = "ELCL_PROC"
    PCR_PARAM = "ELCL_PCR_PARAM"
    FOCAL_LENGTH = "CAMERA_LENS_FOCAL_LENGTH"
    WINDOW_SIZES = "ELCL_WINDOW_SIZES"
    PUPIL_DATA_TYPE = "PUPIL_DATA_TYPE"
    TRIAL_VAR_LABELS = "TRIAL_VAR_LABELS"
    TRIAL_DATA = "!V"
    RAW_DATA = "L"
    CAMERA_FRAME = "CAM_FRAME"

    # second level, after "!V"
    TRIAL_VAR_DATA = "TRIAL_VAR_DATA"
    TARGET_POS = "TARGET_POS"

    CAMERA_FRAME_V2 = "V2"


class FieldCounts:
    """Token counts of the fixed positional layouts (keyword included)."""

    SACCADE_END = 13
    FIXATION_END = 10
    BLINK_END = 5
    EVENT_START = 3
    SAMPLE = 15
    SAMPLE_OPTIONS = 5
    TARGET_GROUP = 5
    RAW_EYE_BLOCK = 8
    # "L" time <8 left> <separator> <8 right>
    RAW_DATA = 2 + 2 * RAW_EYE_BLOCK + 1


class SampleOptions:
    """Characters marking a set flag in the 5-character sample option string."""

    INTERPOLATED = "I"
    CR_MISSING = "C"
    CR_RECOVERING = "R"


OPTIONAL_FIELD = "."

# "** DATE: Wed Mar  8 09:25:20 2023"
# Names are matched against fixed English tables, never the host locale.
PREAMBLE_DATE_TAG = "DATE:"
PREAMBLE_DATE_PATTERN = r"([A-Za-z]{3})\s+([A-Za-z]{3})\s+(\d{1,2})\s+(\d{1,2}):(\d{2}):(\d{2})\s+(\d{4})"
WEEKDAY_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MONTH_NAMES = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
