"""Decoding of ``MSG`` payloads.

``decode_message`` receives the payload text that follows the message
timestamp and dispatches on its first token.
"""
from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, List, Sequence, Type, TypeVar

from ..config.constants import FieldCounts, MessageKeywords as K
from ..domain.common import CameraFrameVersion
from ..errors import GrammarError
from .messages import (
    CameraFrameMsg,
    CameraLensFocalLengthMsg,
    EyeSpecification,
    FilterType,
    GazeCoordinatesMsg,
    MessagePayload,
    MountConfiguration,
    MountConfigurationMsg,
    OtherMsg,
    PcrParameterMsg,
    PupilDataTypeMsg,
    RawDataMsg,
    RawEyeBlock,
    RecordingConfigurationMsg,
    Target,
    TargetPositionsMsg,
    ThresholdSpec,
    ThresholdsMsg,
    TrackingAlgorithm,
    TrackingAlgorithmMsg,
    TrackingMode,
    TrialDataMsg,
    TrialDataOtherMsg,
    TrialIdMsg,
    TrialResultMsg,
    TrialVarLabelsMsg,
    TrialVarValuesMsg,
    WindowSizesMsg,
)
from .numeric import U64_MAX, decode_decimal, decode_signed, decode_unsigned

E = TypeVar("E", bound=Enum)


def require_fields(parts: Sequence[str], count: int, keyword: str) -> None:
    """Fail with ``GrammarError`` unless ``parts`` holds ``count`` tokens."""
    if len(parts) < count:
        raise GrammarError(
            f"{keyword} expects {count - 1} fields, got {len(parts) - 1}"
        )


def decode_enum(enum_cls: Type[E], token: str, what: str) -> E:
    try:
        return enum_cls(token)
    except ValueError:
        raise GrammarError(f"Invalid {what}: {token!r}") from None


def _trial_id(parts: List[str], text: str) -> MessagePayload:
    require_fields(parts, 2, K.TRIAL_ID)
    return TrialIdMsg(decode_unsigned(parts[1]))


def _trial_result(parts: List[str], text: str) -> MessagePayload:
    require_fields(parts, 2, K.TRIAL_RESULT)
    return TrialResultMsg(decode_unsigned(parts[1]))


def _recording_configuration(parts: List[str], text: str) -> MessagePayload:
    require_fields(parts, 6, K.RECORDING_CONFIG)
    return RecordingConfigurationMsg(
        tracking_mode=decode_enum(TrackingMode, parts[1], "tracking mode"),
        sampling_rate=decode_decimal(parts[2]),
        file_sample_filter=decode_enum(FilterType, parts[3], "filter type"),
        link_sample_filter=decode_enum(FilterType, parts[4], "filter type"),
        eyes=decode_enum(EyeSpecification, parts[5], "eye specification"),
    )


def _mount_configuration(parts: List[str], text: str) -> MessagePayload:
    require_fields(parts, 2, K.MOUNT_CONFIG)
    return MountConfigurationMsg(
        decode_enum(MountConfiguration, parts[1], "mounting configuration")
    )


def _gaze_coordinates(parts: List[str], text: str) -> MessagePayload:
    require_fields(parts, 5, K.GAZE_COORDS)
    left, top, right, bottom = (decode_decimal(p) for p in parts[1:5])
    return GazeCoordinatesMsg(left=left, top=top, right=right, bottom=bottom)


def _thresholds(parts: List[str], text: str) -> MessagePayload:
    # THRESHOLDS L <pupil> <cr> R <pupil> <cr>
    require_fields(parts, 7, K.THRESHOLDS)
    return ThresholdsMsg(
        left=ThresholdSpec(pupil=decode_unsigned(parts[2]), cr=decode_unsigned(parts[3])),
        right=ThresholdSpec(pupil=decode_unsigned(parts[5]), cr=decode_unsigned(parts[6])),
    )


def _tracking_algorithm(parts: List[str], text: str) -> MessagePayload:
    require_fields(parts, 2, K.TRACKING_ALGORITHM)
    return TrackingAlgorithmMsg(
        decode_enum(TrackingAlgorithm, parts[1], "tracking algorithm")
    )


def _pcr_parameter(parts: List[str], text: str) -> MessagePayload:
    require_fields(parts, 3, K.PCR_PARAM)
    return PcrParameterMsg(index=decode_unsigned(parts[1]), value=decode_decimal(parts[2]))


def _focal_length(parts: List[str], text: str) -> MessagePayload:
    require_fields(parts, 2, K.FOCAL_LENGTH)
    return CameraLensFocalLengthMsg(decode_decimal(parts[1]))


def _window_sizes(parts: List[str], text: str) -> MessagePayload:
    require_fields(parts, 5, K.WINDOW_SIZES)
    a, b, c, d = (decode_unsigned(p) for p in parts[1:5])
    return WindowSizesMsg((a, b, c, d))


def _pupil_data_type(parts: List[str], text: str) -> MessagePayload:
    require_fields(parts, 2, K.PUPIL_DATA_TYPE)
    return PupilDataTypeMsg(parts[1])


def _trial_var_labels(parts: List[str], text: str) -> MessagePayload:
    return TrialVarLabelsMsg(list(parts[1:]))


def decode_target(group: Sequence[str]) -> Target:
    """Decode ``name (x, y) visible interpolate``; tokens are ``name``, ``(x,``, ``y)``, ..."""
    name, x_token, y_token, visible, interpolate = group
    if not (x_token.startswith("(") and x_token.endswith(",") and y_token.endswith(")")):
        raise GrammarError(f"Invalid target position: {x_token} {y_token}")
    return Target(
        name=name,
        position=(decode_signed(x_token[1:-1]), decode_signed(y_token[:-1])),
        visible=decode_signed(visible) == 1,
        interpolate=decode_signed(interpolate) == 1,
    )


def decode_trial_data(text: str) -> TrialDataMsg:
    """Decode the part of a ``!V`` message after the ``!V`` token."""
    parts = text.split()
    if not parts:
        return TrialDataOtherMsg(text)
    if parts[0] == K.TRIAL_VAR_DATA:
        return TrialVarValuesMsg(list(parts[1:]))
    if parts[0] == K.TARGET_POS:
        group = FieldCounts.TARGET_GROUP
        require_fields(parts, 1 + group, K.TARGET_POS)
        targets = [decode_target(parts[1:1 + group])]
        if len(parts) >= 1 + 2 * group:
            targets.append(decode_target(parts[1 + group:1 + 2 * group]))
        return TargetPositionsMsg(targets)
    return TrialDataOtherMsg(text)


def _trial_data(parts: List[str], text: str) -> MessagePayload:
    rest = text.split(None, 1)
    return decode_trial_data(rest[1] if len(rest) > 1 else "")


def decode_raw_eye_block(tokens: Sequence[str]) -> RawEyeBlock:
    values = [decode_decimal(t) for t in tokens[:FieldCounts.RAW_EYE_BLOCK]]
    return RawEyeBlock(*values)


def _raw_data(parts: List[str], text: str) -> MessagePayload:
    # L <time> <8 left> <separator> <8 right>
    require_fields(parts, FieldCounts.RAW_DATA, K.RAW_DATA)
    block = FieldCounts.RAW_EYE_BLOCK
    return RawDataMsg(
        time=decode_decimal(parts[1]),
        left=decode_raw_eye_block(parts[2:2 + block]),
        right=decode_raw_eye_block(parts[3 + block:3 + 2 * block]),
    )


def _camera_frame(parts: List[str], text: str) -> MessagePayload:
    fields = parts[1:]
    version = CameraFrameVersion.V1
    if fields and fields[0] == K.CAMERA_FRAME_V2:
        version = CameraFrameVersion.V2
        fields = fields[1:]
    required = 6 if version is CameraFrameVersion.V2 else 5
    if len(fields) < required:
        raise GrammarError(
            f"{K.CAMERA_FRAME} ({version.name}) expects {required} fields, got {len(fields)}"
        )
    eyelink_time = decode_decimal(fields[5]) if len(fields) > 5 else None
    return CameraFrameMsg(
        name=fields[0],
        version=version,
        frame_idx=decode_unsigned(fields[1]),
        cam_time=decode_unsigned(fields[2], U64_MAX),
        sys_time=decode_unsigned(fields[3], U64_MAX),
        process_time=decode_decimal(fields[4]),
        eyelink_time=eyelink_time,
    )


MESSAGE_DECODERS: Dict[str, Callable[[List[str], str], MessagePayload]] = {
    K.TRIAL_ID: _trial_id,
    K.TRIAL_RESULT: _trial_result,
    K.RECORDING_CONFIG: _recording_configuration,
    K.MOUNT_CONFIG: _mount_configuration,
    K.GAZE_COORDS: _gaze_coordinates,
    K.THRESHOLDS: _thresholds,
    K.TRACKING_ALGORITHM: _tracking_algorithm,
    K.PCR_PARAM: _pcr_parameter,
    K.FOCAL_LENGTH: _focal_length,
    K.WINDOW_SIZES: _window_sizes,
    K.PUPIL_DATA_TYPE: _pupil_data_type,
    K.TRIAL_VAR_LABELS: _trial_var_labels,
    K.TRIAL_DATA: _trial_data,
    K.RAW_DATA: _raw_data,
    K.CAMERA_FRAME: _camera_frame,
}


def decode_message(text: str) -> MessagePayload:
    """Decode a message payload; unknown first tokens become ``OtherMsg``."""
    parts = text.split()
    if not parts:
        return OtherMsg(text)
    decoder = MESSAGE_DECODERS.get(parts[0])
    if decoder is None:
        return OtherMsg(text)
    return decoder(parts, text)
