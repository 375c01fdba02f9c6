# asc_parser/__init__.py
"""
EyeLink ASC Parser Package.

Contains:
- numeric decoders and the line/message grammar
- the experiment builder folding classified lines into trials
- persisted encodings (JSON, pickle) and pandas export
"""

from .config import ParserConfig
from .errors import AscError, NumericParseError, GrammarError, StructuralError
from .domain import Experiment, Trial, Sample, EventRecord
from .engine import AscParserEngine, parse_asc
from .builder import ExperimentBuilder, build_experiment
from .io import load_asc_from_file, load_experiment_file, save_experiment

__all__ = [
    "ParserConfig",
    "AscError",
    "NumericParseError",
    "GrammarError",
    "StructuralError",
    "Experiment",
    "Trial",
    "Sample",
    "EventRecord",
    "AscParserEngine",
    "parse_asc",
    "ExperimentBuilder",
    "build_experiment",
    "load_asc_from_file",
    "load_experiment_file",
    "save_experiment",
]
