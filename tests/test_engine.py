from datetime import datetime
from decimal import Decimal

import pytest

from asc_parser import AscParserEngine, ParserConfig, parse_asc
from asc_parser.domain.common import CameraFrameVersion, CRStatus
from asc_parser.engine import classify_chunk, estimate_chunk_size, split_lines
from asc_parser.errors import GrammarError, NumericParseError, StructuralError

PARALLEL = ParserConfig(n_jobs=2, backend="threading", chunk_size=4, parallel_min_lines=0)


def test_split_lines():
    assert split_lines("a\r\nb\n\nc\n") == ["a", "b", "", "c"]
    assert split_lines("a\nb") == ["a", "b"]
    assert split_lines("") == []


def test_estimate_chunk_size():
    assert estimate_chunk_size(100, 4) == 1000
    assert estimate_chunk_size(1_000_000, 4) == 25_000
    assert estimate_chunk_size(10, -1) >= 1000


def test_classify_chunk_stops_at_first_error():
    chunk = classify_chunk(10, ["# ok", "SFIX X 1", "SFIX Y 2"])
    assert len(chunk.elements) == 1
    assert isinstance(chunk.error, GrammarError)
    assert chunk.error.line_number == 11
    assert chunk.error.line == "SFIX X 1"


def test_parse_experiment(experiment):
    assert experiment.meta.recording_datetime == datetime(2023, 3, 8, 9, 25, 20)
    assert experiment.meta.preamble_lines == [
        "CONVERTED FROM sub01.edf using edfapi 4.2.1",
        "TYPE: EDF_FILE BINARY EVENT SAMPLE TAGGED",
    ]
    assert experiment.variable_labels == ["condition", "target_side"]
    assert [t.id for t in experiment.trials] == [1, 2]


def test_parse_first_trial(experiment):
    trial = experiment.trial(1)
    assert trial.time_record.start == Decimal(1005)
    assert trial.time_record.end == Decimal(1033)
    assert len(trial.samples) == 2
    assert trial.samples[1].left is None
    assert trial.samples[1].right.velocity == (Decimal("0.9"), Decimal("0.2"))
    assert len(trial.raw_samples) == 1
    assert len(trial.events) == 3
    assert [f.version for f in trial.camera_frames] == [CameraFrameVersion.V1, CameraFrameVersion.V2]
    assert trial.variables == ["congruent", "left"]
    assert sorted(trial.targets) == ["TARG1", "TARG2"]
    assert [t.time for t in trial.targets["TARG1"]] == [Decimal(1013), Decimal(1014)]


def test_parse_second_trial(experiment):
    trial = experiment.trial(2)
    assert trial.time_record.end == Decimal(0)
    (sample,) = trial.samples
    assert sample.resolution is None
    assert sample.left.velocity is None
    assert sample.left.cr is CRStatus.MISSING
    assert sample.right.cr is CRStatus.MISSING
    assert trial.variables == ["incongruent", "right"]
    assert trial.events == []


def test_parallel_matches_sequential(asc_text, experiment):
    assert parse_asc(asc_text, PARALLEL) == experiment


def test_engine_reports_earliest_error_in_parallel():
    lines = ["# ok"] * 20
    lines[14] = "SFIX X 1"
    lines[3] = "MSG abc TRIALID 1"
    with pytest.raises(NumericParseError) as info:
        AscParserEngine(PARALLEL).parse("\n".join(lines))
    assert info.value.line_number == 3
    assert info.value.line == "MSG abc TRIALID 1"


def test_engine_reports_structural_error_line():
    text = "# header\n100 1.0 2.0 3.0 . . . . . . . . . . .....\n"
    with pytest.raises(StructuralError) as info:
        parse_asc(text, ParserConfig(n_jobs=1))
    assert info.value.line_number == 1


def test_earlier_structural_error_beats_later_grammar_error():
    text = "100 1.0 2.0 3.0 . . . . . . . . . . .....\nSFIX X 1\n"
    with pytest.raises(StructuralError) as info:
        parse_asc(text, PARALLEL)
    assert info.value.line_number == 0


def test_earlier_grammar_error_beats_later_structural_error():
    text = "SFIX X 1\n100 1.0 2.0 3.0 . . . . . . . . . . .....\n"
    with pytest.raises(GrammarError) as info:
        parse_asc(text, ParserConfig(n_jobs=1))
    assert info.value.line_number == 0


def test_classify_raises_first_error():
    with pytest.raises(GrammarError):
        AscParserEngine(PARALLEL).classify(["# a", "# b", "# c", "# d", "SFIX X 1"])


def test_empty_input():
    experiment = parse_asc("")
    assert experiment.trials == []
    assert experiment.variable_labels == []
    assert experiment.meta.recording_datetime is None
