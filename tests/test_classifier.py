from datetime import datetime
from decimal import Decimal

import pytest

from asc_parser.domain.common import Eye
from asc_parser.errors import GrammarError, NumericParseError
from asc_parser.grammar import elements as el
from asc_parser.grammar import messages as msg
from asc_parser.grammar.classifier import classify_line, decode_recording_date


def _sample(time="100", options=".....", fields=None):
    fields = fields or ["1.0", "2.0", "3.0", "4.0", "5.0", "6.0", "0.1", "0.2", "0.3", "0.4", "38.5", "37.2", "127.0"]
    return "\t".join([time, *fields, options])


def test_blank_lines():
    assert classify_line("") == el.Blank()
    assert classify_line("  \t ") == el.Blank()


def test_preamble_variants():
    assert classify_line("** TYPE: EDF_FILE BINARY") == el.Preamble(el.PreambleOther("TYPE: EDF_FILE BINARY"))
    assert classify_line("**") == el.Preamble(el.PreambleEmpty())
    dated = classify_line("** DATE: Wed Mar  8 09:25:20 2023")
    assert dated == el.Preamble(el.PreambleDateTime(datetime(2023, 3, 8, 9, 25, 20)))


def test_preamble_bad_date():
    with pytest.raises(GrammarError):
        classify_line("** DATE: yesterday")


def test_message_line():
    element = classify_line("MSG\t1005 TRIALID 7")
    assert element == el.Msg(Decimal(1005), msg.TrialIdMsg(7))


def test_message_without_payload():
    assert classify_line("MSG 1005") == el.Msg(Decimal(1005), msg.OtherMsg(""))


def test_message_bad_time():
    with pytest.raises(NumericParseError):
        classify_line("MSG abc TRIALID 1")


@pytest.mark.parametrize("line, text", [("# note", "note"), ("; note two", "note two"), ("// x", "x")])
def test_comments(line, text):
    assert classify_line(line) == el.Comment(text)


def test_input():
    assert classify_line("INPUT\t1011\t127") == el.Input(Decimal(1011), 127)


def test_event_starts():
    assert classify_line("SFIX L   1012") == el.FixationStart(Eye.LEFT, Decimal(1012))
    assert classify_line("SSACC R 1016") == el.SaccadeStart(Eye.RIGHT, Decimal(1016))
    assert classify_line("SBLINK R 1021") == el.BlinkStart(Eye.RIGHT, Decimal(1021))


def test_invalid_eye():
    with pytest.raises(GrammarError):
        classify_line("SFIX X 1012")


def test_fixation_end():
    element = classify_line("EFIX L   1012\t1015\t3\t  512.3\t  384.1\t   1200\t38.50\t37.20")
    assert element == el.FixationEnd(
        eye=Eye.LEFT,
        start_time=Decimal(1012),
        end_time=Decimal(1015),
        duration=Decimal(3),
        average_pos_x=Decimal("512.3"),
        average_pos_y=Decimal("384.1"),
        average_pupil_size=Decimal(1200),
        res_x=Decimal("38.50"),
        res_y=Decimal("37.20"),
    )


def test_saccade_end_with_missing_positions():
    element = classify_line("ESACC R 1016 1020 4 . . 700.2 390.1 . 312.0 38.50 37.20")
    assert element.start_pos_x is None
    assert element.start_pos_y is None
    assert element.end_pos_x == Decimal("700.2")
    assert element.movement_angle is None
    assert element.peak_velocity == Decimal("312.0")


def test_blink_end():
    assert classify_line("EBLINK R 1021 1030 9") == el.BlinkEnd(Eye.RIGHT, Decimal(1021), Decimal(1030), Decimal(9))


@pytest.mark.parametrize(
    "line",
    [
        "EFIX L 1012 1015 3 512.3 384.1 1200 38.50",
        "ESACC R 1016 1020 4",
        "EBLINK R 1021 1030",
        "SFIX L",
        "INPUT 1011",
    ],
)
def test_short_keyword_lines(line):
    with pytest.raises(GrammarError):
        classify_line(line)


def test_sample_line_full():
    element = classify_line(_sample())
    assert isinstance(element, el.SampleLine)
    assert element.time == Decimal(100)
    assert element.left_pos_x == Decimal("1.0")
    assert element.right_area == Decimal("6.0")
    assert element.right_velocity_y == Decimal("0.4")
    assert (element.res_x, element.res_y) == (Decimal("38.5"), Decimal("37.2"))
    assert element.unknown == Decimal("127.0")
    assert not element.interpolated


def test_sample_line_all_absent():
    element = classify_line(_sample(options="00000", fields=["."] * 13))
    assert element.left_pos_x is None
    assert element.right_area is None
    assert element.res_x is None and element.res_y is None
    assert not any(
        [
            element.interpolated,
            element.left_cr_missing,
            element.left_cr_recovering,
            element.right_cr_missing,
            element.right_cr_recovering,
        ]
    )


def test_sample_options_read_left_to_right():
    element = classify_line(_sample(options="I.RC."))
    assert element.interpolated
    assert not element.left_cr_missing
    assert element.left_cr_recovering
    assert element.right_cr_missing
    assert not element.right_cr_recovering


def test_sample_options_icrcr():
    element = classify_line(_sample(options="ICRCR"))
    assert element.interpolated
    assert element.left_cr_missing and element.left_cr_recovering
    assert element.right_cr_missing and element.right_cr_recovering


def test_sample_options_too_short():
    with pytest.raises(GrammarError):
        classify_line(_sample(options="..."))


def test_sample_too_few_fields():
    with pytest.raises(GrammarError):
        classify_line("100 1.0 2.0 3.0")


def test_sample_bad_number():
    with pytest.raises(NumericParseError):
        classify_line(_sample(fields=["1.0", "x"] + ["."] * 11))


def test_unknown_line_is_other():
    line = "BUTTON 1012 1 1"
    assert classify_line(line) == el.Other(line)


def test_start_and_end_blocks():
    start = classify_line("START\t1010 \tLEFT\tRIGHT\tSAMPLES\tEVENTS")
    assert start == el.StartBlock(Decimal(1010), True, True, True, True)
    end = classify_line("END\t1032 \tSAMPLES\tEVENTS\tRES\t  38.50\t  37.20")
    assert end == el.EndBlock(Decimal(1032), True, True, (Decimal("38.50"), Decimal("37.20")))
    assert classify_line("END 1032 EVENTS").resolution is None


def test_prescalers():
    assert classify_line("PRESCALER\t1") == el.PrescalerPosition(Decimal(1))
    assert classify_line("VPRESCALER\t1") == el.PrescalerVelocity(Decimal(1))


def test_sample_and_event_specs():
    samples = classify_line("SAMPLES\tGAZE\tLEFT\tRIGHT\tVEL\tRES\tRATE\t1000.00\tTRACKING\tCR\tFILTER\t2")
    assert samples == el.SampleSpec(
        data_type=el.DataType.GAZE,
        left_eye=True,
        right_eye=True,
        velocity=True,
        options=el.DataOptions(res=True, rate=Decimal("1000.00"), tracking=msg.TrackingMode.CR, filter=msg.FilterType.EXTRA),
    )
    events = classify_line("EVENTS\tGAZE\tLEFT\tRATE\t500.00")
    assert events.left_eye and not events.right_eye
    assert events.options.rate == Decimal(500)
    assert events.options.tracking is None


def test_spec_bad_data_type():
    with pytest.raises(GrammarError):
        classify_line("SAMPLES\tFOO\tLEFT")


def test_preamble_text_is_verbatim():
    line = "**   VERSION: EYELINK II 1"
    assert classify_line(line) == el.Preamble(el.PreambleOther("  VERSION: EYELINK II 1"))


def test_recording_date_uses_english_names():
    assert decode_recording_date("Thu Jan  1 00:00:00 2009") == datetime(2009, 1, 1)
    assert decode_recording_date("Sun Dec 31 23:59:59 2023") == datetime(2023, 12, 31, 23, 59, 59)


@pytest.mark.parametrize(
    "text",
    [
        "Mer Mar  8 09:25:20 2023",
        "Wed Mär  8 09:25:20 2023",
        "Wed Feb 30 09:25:20 2023",
        "Wed Mar  8 25:25:20 2023",
        "Wed Mar  8 2023",
    ],
)
def test_invalid_recording_dates(text):
    with pytest.raises(GrammarError):
        decode_recording_date(text)
