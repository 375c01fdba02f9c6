# asc_parser/config/config_builder.py
"""Build configuration objects from CLI arguments."""
from __future__ import annotations

import argparse

from .config import ParserConfig


class ConfigBuilder:
    """Maps parsed CLI arguments onto configuration dataclasses."""

    @staticmethod
    def build_parser_config(args: argparse.Namespace) -> ParserConfig:
        """Build the parser configuration from CLI arguments."""
        return ParserConfig(
            n_jobs=args.jobs,
            backend=args.backend,
            chunk_size=args.chunk_size,
            parallel_min_lines=args.parallel_min_lines,
            strict_variables=not args.lenient_variables,
        )
