"""ASC parsing orchestration.

Lines are classified in independent chunks (optionally on joblib workers),
gathered back into line order by chunk start index and then folded into an
``Experiment`` by a single ``ExperimentBuilder``.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from joblib import Parallel, cpu_count, delayed

from .builder import ExperimentBuilder
from .config import ParserConfig
from .domain.experiment import Experiment
from .errors import AscError
from .grammar.classifier import classify_line
from .grammar.elements import Element

logger = logging.getLogger(__name__)


@dataclass
class ClassifiedChunk:
    """Classification output of one contiguous run of lines."""

    start: int
    elements: List[Element] = field(default_factory=list)
    error: Optional[AscError] = None


def classify_chunk(start: int, lines: Sequence[str]) -> ClassifiedChunk:
    """Classify ``lines``; stops at the first failing line and records its error."""
    chunk = ClassifiedChunk(start=start)
    for offset, line in enumerate(lines):
        try:
            chunk.elements.append(classify_line(line))
        except AscError as exc:
            chunk.error = exc.with_context(start + offset, line)
            break
    return chunk


def split_lines(text: str) -> List[str]:
    """Split on ``\\n``, dropping a trailing ``\\r`` and the empty tail after a final newline."""
    lines = text.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


def estimate_chunk_size(n_lines: int, n_jobs: int) -> int:
    """Aim for ~10 chunks per worker, never below 1000 lines per chunk."""
    if n_jobs < 0:
        n_jobs = max(1, cpu_count() + 1 + n_jobs)
    target_chunks = n_jobs * 10
    return max(1000, n_lines // target_chunks)


class AscParserEngine:
    """Runs classification and reduction for whole ASC exports.

    Example:
        >>> engine = AscParserEngine(ParserConfig(n_jobs=4))
        >>> experiment = engine.parse(text)
    """

    def __init__(self, config: Optional[ParserConfig] = None) -> None:
        self.config = config or ParserConfig()

    def _use_parallel(self, n_lines: int) -> bool:
        return self.config.n_jobs != 1 and n_lines >= self.config.parallel_min_lines

    def _classify_chunks(self, lines: Sequence[str]) -> List[ClassifiedChunk]:
        n_lines = len(lines)
        if not self._use_parallel(n_lines):
            logger.info("Classifying %d lines in-process", n_lines)
            return [classify_chunk(0, lines)]

        size = self.config.chunk_size or estimate_chunk_size(n_lines, self.config.n_jobs)
        logger.info(
            "Classifying %d lines in chunks of %d (n_jobs=%s, backend=%s)",
            n_lines,
            size,
            self.config.n_jobs,
            self.config.backend,
        )
        chunks = Parallel(n_jobs=self.config.n_jobs, backend=self.config.backend)(
            delayed(classify_chunk)(start, lines[start:start + size])
            for start in range(0, n_lines, size)
        )
        return sorted(chunks, key=lambda c: c.start)

    def classify_prefix(self, lines: Sequence[str]) -> Tuple[List[Element], Optional[AscError]]:
        """Classify in line order up to the first failing line.

        Returns the elements of every line before the failure together with
        that line's error (``None`` when all lines classified).
        """
        elements: List[Element] = []
        for chunk in self._classify_chunks(lines):
            logger.debug("Chunk at line %d: %d records", chunk.start, len(chunk.elements))
            elements.extend(chunk.elements)
            if chunk.error is not None:
                return elements, chunk.error
        return elements, None

    def classify(self, lines: Sequence[str]) -> List[Element]:
        """Classify every line, preserving order; raises the earliest line's error."""
        elements, error = self.classify_prefix(lines)
        if error is not None:
            raise error
        return elements

    def parse(self, text: str) -> Experiment:
        """Parse a whole ASC export; fails on the error of the earliest bad line.

        Lines preceding a classification failure are still folded, so a
        structural problem earlier in the file is reported first.
        """
        lines = split_lines(text)
        elements, error = self.classify_prefix(lines)
        builder = ExperimentBuilder(self.config)
        for line_number, (line, element) in enumerate(zip(lines, elements)):
            builder.feed(element, line_number, line)
        if error is not None:
            raise error
        return builder.finish()


def parse_asc(text: str, config: Optional[ParserConfig] = None) -> Experiment:
    """Parse ASC text into an ``Experiment``."""
    return AscParserEngine(config).parse(text)
