# asc_parser/io/io.py
from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional, Union

import pandas as pd

from ..config import ParserConfig
from ..domain.experiment import Experiment
from ..engine import parse_asc
from .codecs import get_codec

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_asc_text(path: PathLike) -> str:
    """Read an ASC export as text (ASCII/UTF-8)."""
    return Path(path).read_text(encoding="utf-8")


def load_asc_from_file(path: PathLike, config: Optional[ParserConfig] = None) -> Experiment:
    """Read and parse an ASC export."""
    logger.info("Loading ASC file %s", path)
    return parse_asc(read_asc_text(path), config)


def save_experiment(experiment: Experiment, path: PathLike, fmt: Optional[str] = None) -> None:
    """Persist ``experiment``; the format follows ``fmt`` or the file suffix."""
    codec = get_codec(fmt, path)
    Path(path).write_bytes(codec.encode(experiment))
    logger.info("Wrote %s experiment to %s", codec.name, path)


def load_experiment_file(path: PathLike, fmt: Optional[str] = None) -> Experiment:
    """Load an experiment written by ``save_experiment``."""
    codec = get_codec(fmt, path)
    return codec.decode(Path(path).read_bytes())


def write_tsv(df: pd.DataFrame, path: PathLike) -> None:
    """Write a DataFrame as TSV; absent values become empty cells."""
    df.to_csv(path, sep="\t", index=False)
