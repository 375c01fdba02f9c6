"""Line classifier: one raw ASC line in, one ``Element`` out.

Classification is pure and keeps no state between lines, so the engine may
run it on any number of workers.
"""
from __future__ import annotations

import re
from datetime import datetime
from typing import Callable, Dict, List, Optional

from ..config.constants import (
    MONTH_NAMES,
    PREAMBLE_DATE_PATTERN,
    PREAMBLE_DATE_TAG,
    WEEKDAY_NAMES,
    FieldCounts,
    LineKeywords as K,
    SampleOptions,
)
from ..domain.common import Eye
from ..errors import GrammarError
from .elements import (
    Blank,
    BlinkEnd,
    BlinkStart,
    Comment,
    DataOptions,
    DataType,
    Element,
    EndBlock,
    EventSpec,
    FixationEnd,
    FixationStart,
    Input,
    Msg,
    Other,
    Preamble,
    PreambleDateTime,
    PreambleEmpty,
    PreambleOther,
    PreamblePayload,
    PrescalerPosition,
    PrescalerVelocity,
    SaccadeEnd,
    SaccadeStart,
    SampleLine,
    SampleSpec,
    StartBlock,
)
from .message_decoder import decode_enum, decode_message, require_fields
from .messages import FilterType, TrackingMode
from .numeric import decode_decimal, decode_optional_decimal, decode_unsigned, is_decimal

_EYES = {"L": Eye.LEFT, "R": Eye.RIGHT}
_DATE = re.compile(PREAMBLE_DATE_PATTERN)


def decode_eye(token: str) -> Eye:
    try:
        return _EYES[token]
    except KeyError:
        raise GrammarError(f"Invalid eye specification string: {token!r}") from None


def _remainder(line: str, skip: int) -> str:
    """Text after the first ``skip`` whitespace-delimited tokens."""
    pieces = line.split(None, skip)
    return pieces[skip] if len(pieces) > skip else ""


def _after_token(line: str, token: str) -> str:
    """Raw text following ``token`` and its single separator character."""
    return line[line.index(token) + len(token) + 1:]


def decode_recording_date(text: str) -> datetime:
    """Parse ``Wed Mar  8 09:25:20 2023`` independently of the host locale."""
    match = _DATE.fullmatch(text)
    if match is None:
        raise GrammarError(f"Invalid recording date: {text!r}")
    weekday, month, day, hour, minute, second, year = match.groups()
    if weekday not in WEEKDAY_NAMES or month not in MONTH_NAMES:
        raise GrammarError(f"Invalid recording date: {text!r}")
    try:
        return datetime(
            int(year), MONTH_NAMES.index(month) + 1, int(day), int(hour), int(minute), int(second)
        )
    except ValueError:
        raise GrammarError(f"Invalid recording date: {text!r}") from None


def decode_preamble(text: str) -> PreamblePayload:
    tokens = text.split(None, 1)
    if not tokens:
        return PreambleEmpty()
    if tokens[0] == PREAMBLE_DATE_TAG:
        date_text = tokens[1].strip() if len(tokens) > 1 else ""
        return PreambleDateTime(decode_recording_date(date_text))
    return PreambleOther(text)


def _preamble(parts: List[str], line: str) -> Element:
    return Preamble(decode_preamble(_after_token(line, K.PREAMBLE)))


def _msg(parts: List[str], line: str) -> Element:
    require_fields(parts, 2, K.MSG)
    return Msg(time=decode_decimal(parts[1]), payload=decode_message(_remainder(line, 2)))


def _comment(parts: List[str], line: str) -> Element:
    return Comment(_remainder(line, 1))


def _input(parts: List[str], line: str) -> Element:
    require_fields(parts, 3, K.INPUT)
    return Input(time=decode_decimal(parts[1]), value=decode_unsigned(parts[2]))


def _event_start(cls, keyword: str) -> Callable[[List[str], str], Element]:
    def parse(parts: List[str], line: str) -> Element:
        require_fields(parts, FieldCounts.EVENT_START, keyword)
        return cls(eye=decode_eye(parts[1]), time=decode_decimal(parts[2]))

    return parse


def _saccade_end(parts: List[str], line: str) -> Element:
    require_fields(parts, FieldCounts.SACCADE_END, K.SACCADE_END)
    return SaccadeEnd(
        eye=decode_eye(parts[1]),
        start_time=decode_decimal(parts[2]),
        end_time=decode_decimal(parts[3]),
        duration=decode_decimal(parts[4]),
        start_pos_x=decode_optional_decimal(parts[5]),
        start_pos_y=decode_optional_decimal(parts[6]),
        end_pos_x=decode_optional_decimal(parts[7]),
        end_pos_y=decode_optional_decimal(parts[8]),
        movement_angle=decode_optional_decimal(parts[9]),
        peak_velocity=decode_decimal(parts[10]),
        res_x=decode_decimal(parts[11]),
        res_y=decode_decimal(parts[12]),
    )


def _fixation_end(parts: List[str], line: str) -> Element:
    require_fields(parts, FieldCounts.FIXATION_END, K.FIXATION_END)
    return FixationEnd(
        eye=decode_eye(parts[1]),
        start_time=decode_decimal(parts[2]),
        end_time=decode_decimal(parts[3]),
        duration=decode_decimal(parts[4]),
        average_pos_x=decode_decimal(parts[5]),
        average_pos_y=decode_decimal(parts[6]),
        average_pupil_size=decode_decimal(parts[7]),
        res_x=decode_decimal(parts[8]),
        res_y=decode_decimal(parts[9]),
    )


def _blink_end(parts: List[str], line: str) -> Element:
    require_fields(parts, FieldCounts.BLINK_END, K.BLINK_END)
    return BlinkEnd(
        eye=decode_eye(parts[1]),
        start_time=decode_decimal(parts[2]),
        end_time=decode_decimal(parts[3]),
        duration=decode_decimal(parts[4]),
    )


def _start_block(parts: List[str], line: str) -> Element:
    require_fields(parts, 2, K.BLOCK_START)
    flags = set(parts[2:])
    return StartBlock(
        time=decode_decimal(parts[1]),
        eye_left="LEFT" in flags,
        eye_right="RIGHT" in flags,
        samples="SAMPLES" in flags,
        events="EVENTS" in flags,
    )


def _end_block(parts: List[str], line: str) -> Element:
    require_fields(parts, 2, K.BLOCK_END)
    resolution = None
    if "RES" in parts[2:]:
        pos = parts.index("RES", 2)
        require_fields(parts, pos + 3, f"{K.BLOCK_END} RES")
        resolution = (decode_decimal(parts[pos + 1]), decode_decimal(parts[pos + 2]))
    return EndBlock(
        time=decode_decimal(parts[1]),
        samples="SAMPLES" in parts[2:],
        events="EVENTS" in parts[2:],
        resolution=resolution,
    )


def _prescaler(cls, keyword: str) -> Callable[[List[str], str], Element]:
    def parse(parts: List[str], line: str) -> Element:
        require_fields(parts, 2, keyword)
        return cls(decode_decimal(parts[1]))

    return parse


def _option_value(parts: List[str], key: str) -> Optional[str]:
    if key not in parts:
        return None
    pos = parts.index(key)
    require_fields(parts, pos + 2, key)
    return parts[pos + 1]


def decode_data_options(parts: List[str]) -> DataOptions:
    rate = _option_value(parts, "RATE")
    tracking = _option_value(parts, "TRACKING")
    filter_level = _option_value(parts, "FILTER")
    return DataOptions(
        res="RES" in parts,
        rate=decode_decimal(rate) if rate is not None else None,
        tracking=decode_enum(TrackingMode, tracking, "tracking mode") if tracking is not None else None,
        filter=decode_enum(FilterType, filter_level, "filter type") if filter_level is not None else None,
    )


def _event_spec(parts: List[str], line: str) -> Element:
    require_fields(parts, 2, K.EVENT_SPEC)
    return EventSpec(
        data_type=decode_enum(DataType, parts[1], "data type"),
        left_eye="LEFT" in parts[2:],
        right_eye="RIGHT" in parts[2:],
        options=decode_data_options(parts[2:]),
    )


def _sample_spec(parts: List[str], line: str) -> Element:
    require_fields(parts, 2, K.SAMPLE_SPEC)
    return SampleSpec(
        data_type=decode_enum(DataType, parts[1], "data type"),
        left_eye="LEFT" in parts[2:],
        right_eye="RIGHT" in parts[2:],
        velocity="VEL" in parts[2:],
        options=decode_data_options(parts[2:]),
    )


def decode_sample(parts: List[str]) -> SampleLine:
    """Decode the 15-field binocular sample layout."""
    require_fields(parts, FieldCounts.SAMPLE, "sample")
    options = parts[14]
    if len(options) < FieldCounts.SAMPLE_OPTIONS:
        raise GrammarError(f"Invalid sample options {options!r}: expected 5 characters")
    (
        left_pos_x, left_pos_y, left_area,
        right_pos_x, right_pos_y, right_area,
        left_velocity_x, left_velocity_y,
        right_velocity_x, right_velocity_y,
        res_x, res_y, unknown,
    ) = (decode_optional_decimal(p) for p in parts[1:14])
    return SampleLine(
        time=decode_decimal(parts[0]),
        left_pos_x=left_pos_x,
        left_pos_y=left_pos_y,
        left_area=left_area,
        right_pos_x=right_pos_x,
        right_pos_y=right_pos_y,
        right_area=right_area,
        left_velocity_x=left_velocity_x,
        left_velocity_y=left_velocity_y,
        right_velocity_x=right_velocity_x,
        right_velocity_y=right_velocity_y,
        res_x=res_x,
        res_y=res_y,
        unknown=unknown,
        interpolated=options[0] == SampleOptions.INTERPOLATED,
        left_cr_missing=options[1] == SampleOptions.CR_MISSING,
        left_cr_recovering=options[2] == SampleOptions.CR_RECOVERING,
        right_cr_missing=options[3] == SampleOptions.CR_MISSING,
        right_cr_recovering=options[4] == SampleOptions.CR_RECOVERING,
    )


LINE_DECODERS: Dict[str, Callable[[List[str], str], Element]] = {
    K.PREAMBLE: _preamble,
    K.MSG: _msg,
    **{token: _comment for token in K.COMMENTS},
    K.INPUT: _input,
    K.SACCADE_START: _event_start(SaccadeStart, K.SACCADE_START),
    K.FIXATION_START: _event_start(FixationStart, K.FIXATION_START),
    K.BLINK_START: _event_start(BlinkStart, K.BLINK_START),
    K.SACCADE_END: _saccade_end,
    K.FIXATION_END: _fixation_end,
    K.BLINK_END: _blink_end,
    K.BLOCK_START: _start_block,
    K.BLOCK_END: _end_block,
    K.PRESCALER: _prescaler(PrescalerPosition, K.PRESCALER),
    K.VPRESCALER: _prescaler(PrescalerVelocity, K.VPRESCALER),
    K.EVENT_SPEC: _event_spec,
    K.SAMPLE_SPEC: _sample_spec,
}


def classify_line(line: str) -> Element:
    """Classify one line of an ASC export.

    Raises:
        NumericParseError: a numeric field failed to parse
        GrammarError: a known keyword with too few fields or an unknown literal
    """
    parts = line.split()
    if not parts:
        return Blank()
    decoder = LINE_DECODERS.get(parts[0])
    if decoder is not None:
        return decoder(parts, line)
    if is_decimal(parts[0]):
        return decode_sample(parts)
    return Other(line)
