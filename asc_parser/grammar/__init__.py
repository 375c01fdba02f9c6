"""ASC line grammar: numeric decoders, line classifier, message sub-decoder."""

from .numeric import decode_decimal, decode_optional_decimal, decode_unsigned, decode_signed
from .classifier import classify_line, decode_eye, decode_sample
from .message_decoder import decode_message, decode_trial_data
from . import elements, messages

__all__ = [
    "decode_decimal",
    "decode_optional_decimal",
    "decode_unsigned",
    "decode_signed",
    "classify_line",
    "decode_eye",
    "decode_sample",
    "decode_message",
    "decode_trial_data",
    "elements",
    "messages",
]
