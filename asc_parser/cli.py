"""Command line interface for ASC parsing."""
from __future__ import annotations

import argparse
import logging
from pathlib import Path

from .config import ConfigBuilder, ParserConfig
from .domain.experiment import Experiment
from .errors import AscError
from .export import trial_events_frame, trial_samples_frame, trial_variables_frame
from .io import CODECS, load_asc_from_file, save_experiment, write_tsv

logger = logging.getLogger(__name__)


def _add_parser_options(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--jobs", type=int, default=-1, help="Worker count for classification (-1 = all CPUs)")
    parser.add_argument(
        "--backend",
        choices=["loky", "threading", "multiprocessing"],
        default="loky",
        help="joblib backend used for classification",
    )
    parser.add_argument("--chunk-size", type=int, default=None, help="Lines per classification task")
    parser.add_argument(
        "--parallel-min-lines",
        type=int,
        default=ParserConfig.parallel_min_lines,
        help="Classify in-process below this many lines",
    )
    parser.add_argument(
        "--lenient-variables",
        action="store_true",
        help="Warn instead of failing when trial variables do not match the declared labels",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="EyeLink ASC export parser")
    parser.add_argument("-v", "--verbose", action="count", default=0, help="-v for info, -vv for debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    convert = sub.add_parser("convert", help="Parse an ASC file and persist the experiment")
    convert.add_argument("input", help="Path to the .asc export")
    convert.add_argument("output", help="Output path (.json, .pkl or .pickle)")
    convert.add_argument("--format", choices=sorted(CODECS), default=None, help="Override the output format")
    _add_parser_options(convert)

    summary = sub.add_parser("summary", help="Print one line per trial")
    summary.add_argument("input", help="Path to the .asc export")
    _add_parser_options(summary)

    export = sub.add_parser("export", help="Write per-trial sample and event TSV files")
    export.add_argument("input", help="Path to the .asc export")
    export.add_argument("output_dir", help="Directory for the TSV files")
    _add_parser_options(export)

    return parser


def summarize(experiment: Experiment) -> list[str]:
    lines = []
    for trial in experiment.trials:
        target_counts = {name: len(infos) for name, infos in trial.targets.items()}
        lines.append(
            f"Trial {trial.id}, n-samples: {len(trial.samples)}, n-events: {len(trial.events)}, "
            f"variables: {trial.variables}, targets: {target_counts}"
        )
    return lines


def export_experiment(experiment: Experiment, output_dir: Path) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    # trial ids may repeat; the position keeps file names unique
    for index, trial in enumerate(experiment.trials):
        stem = f"trial_{index:03d}_{trial.id}"
        write_tsv(trial_samples_frame(trial), output_dir / f"{stem}_samples.tsv")
        write_tsv(trial_events_frame(trial), output_dir / f"{stem}_events.tsv")
    write_tsv(trial_variables_frame(experiment), output_dir / "trial_variables.tsv")


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)
    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")

    config = ConfigBuilder.build_parser_config(args)
    try:
        experiment = load_asc_from_file(args.input, config)
    except AscError as exc:
        logger.error("Failed to parse %s: %s", args.input, exc)
        return 1

    if args.command == "convert":
        save_experiment(experiment, args.output, args.format)
        return 0

    if args.command == "summary":
        for line in summarize(experiment):
            print(line)
        return 0

    if args.command == "export":
        export_experiment(experiment, Path(args.output_dir))
        return 0

    return 2


if __name__ == "__main__":
    raise SystemExit(main())
