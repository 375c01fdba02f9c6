# asc_parser/config/config.py
"""
Configuration for the ASC parsing pipeline.

Only the classification fan-out is configurable; the grammar itself has no
knobs.

Example:
    >>> from asc_parser.config import ParserConfig
    >>>
    >>> # all cores, default chunking
    >>> cfg = ParserConfig()
    >>>
    >>> # threads instead of processes, fixed chunks
    >>> cfg = ParserConfig(n_jobs=4, backend="threading", chunk_size=5000)
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Literal, Optional


@dataclass(frozen=True)
class ParserConfig:
    """
    Settings for parsing one ASC export.
    """

    # joblib worker count (-1 = all CPUs, 1 = sequential in-process)
    n_jobs: int = -1

    # joblib backend
    # - "loky":         separate processes (default, CPU-bound classification)
    # - "threading":    threads in this process
    # - "multiprocessing"
    backend: Literal["loky", "threading", "multiprocessing"] = "loky"

    # Lines per classification task; None = estimate from line count
    chunk_size: Optional[int] = None

    # Below this many lines classification stays in-process
    parallel_min_lines: int = 50_000

    # Trial.variables must match the declared TRIAL_VAR_LABELS length
    strict_variables: bool = True

    def __post_init__(self) -> None:
        if self.n_jobs == 0:
            raise ValueError("n_jobs must be non-zero (-1 = all CPUs).")
        if self.chunk_size is not None and self.chunk_size < 1:
            raise ValueError("chunk_size must be >= 1.")
        if self.parallel_min_lines < 0:
            raise ValueError("parallel_min_lines must be >= 0.")
