"""Configuration and grammar constants for ASC parsing."""

from .config import ParserConfig
from .constants import (
    LineKeywords,
    MessageKeywords,
    FieldCounts,
    SampleOptions,
    OPTIONAL_FIELD,
    PREAMBLE_DATE_TAG,
    PREAMBLE_DATE_PATTERN,
    WEEKDAY_NAMES,
    MONTH_NAMES,
)
from .config_builder import ConfigBuilder

__all__ = [
    "ParserConfig",
    "LineKeywords",
    "MessageKeywords",
    "FieldCounts",
    "SampleOptions",
    "OPTIONAL_FIELD",
    "PREAMBLE_DATE_TAG",
    "PREAMBLE_DATE_PATTERN",
    "WEEKDAY_NAMES",
    "MONTH_NAMES",
    "ConfigBuilder",
]
