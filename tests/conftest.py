from pathlib import Path

import pytest

from asc_parser import parse_asc
from asc_parser.config import ParserConfig
from asc_parser.domain import Experiment

ASC_TEXT = "\n".join(
    [
        "** CONVERTED FROM sub01.edf using edfapi 4.2.1",
        "** DATE: Wed Mar  8 09:25:20 2023",
        "** TYPE: EDF_FILE BINARY EVENT SAMPLE TAGGED",
        "**",
        "MSG\t1000 RECCFG CR 1000 2 1 LR",
        "MSG\t1000 ELCLCFG BTABLER",
        "MSG\t1000 GAZE_COORDS 0.00 0.00 1919.00 1079.00",
        "MSG\t1000 THRESHOLDS L 102 242 R 99 242",
        "MSG\t1000 ELCL_PROC CENTROID (3)",
        "MSG\t1000 ELCL_PCR_PARAM 5 3.0",
        "MSG\t1000 ELCL_WINDOW_SIZES 176 188 0 0",
        "MSG\t1000 TRIAL_VAR_LABELS condition target_side",
        "PRESCALER\t1",
        "VPRESCALER\t1",
        "EVENTS\tGAZE\tLEFT\tRIGHT\tRATE\t1000.00\tTRACKING\tCR\tFILTER\t2",
        "SAMPLES\tGAZE\tLEFT\tRIGHT\tVEL\tRES\tRATE\t1000.00\tTRACKING\tCR\tFILTER\t2",
        "MSG\t1005 TRIALID 1",
        "START\t1010 \tLEFT\tRIGHT\tSAMPLES\tEVENTS",
        "INPUT\t1011\t127",
        "SFIX L   1012",
        "1012\t  512.3\t  384.1\t 1200.0\t  515.0\t  380.2\t 1180.0\t    1.2\t   -0.5\t    0.8\t    0.3\t   38.50\t   37.20\t 127.0\t.....",
        "1013\t    .\t    .\t    0.0\t  515.5\t  380.0\t 1181.0\t    .\t    .\t    0.9\t    0.2\t   38.50\t   37.20\t 127.0\tI.C..",
        "MSG\t1013 !V TARGET_POS TARG1 (512, 384) 1 0",
        "MSG\t1014 !V TARGET_POS TARG1 (600, 384) 1 0 TARG2 (-10, 20) 0 1",
        "MSG\t1014 L 1014 510.0 380.0 1200 40.0 42.0 520.0 390.0 30.0 R 512.0 381.0 1190 41.0 43.0 522.0 391.0 31.0",
        "MSG\t1014 CAM_FRAME EYE 17 123456789 987654321 2.5",
        "MSG\t1015 CAM_FRAME V2 SCENE 18 123456800 987654400 1.25 1015.5",
        "EFIX L   1012\t1015\t3\t  512.3\t  384.1\t   1200\t38.50\t37.20",
        "SSACC R  1016",
        "ESACC R  1016\t1020\t4\t  515.0\t  380.0\t  700.2\t  390.1\t   5.12\t  312.0\t38.50\t37.20",
        "SBLINK R 1021",
        "EBLINK R 1021\t1030\t9",
        "MSG\t1031 !V TRIAL_VAR_DATA congruent left",
        "END\t1032 \tSAMPLES\tEVENTS\tRES\t  38.50\t  37.20",
        "MSG\t1033 TRIAL_RESULT 0",
        "",
        "MSG\t1040 TRIALID 2",
        "1041\t  600.0\t  300.0\t 1100.0\t  601.0\t  301.0\t 1101.0\t    .\t    .\t    .\t    .\t    .\t    .\t 127.0\tICRCR",
        "MSG\t1042 !V TRIAL_VAR_DATA incongruent right",
        "MSG\t1043 CUSTOM_MESSAGE hello world",
        "# end of recording",
    ]
) + "\n"


@pytest.fixture
def asc_text() -> str:
    return ASC_TEXT


@pytest.fixture
def asc_file(tmp_path: Path) -> Path:
    path = tmp_path / "sub01.asc"
    path.write_text(ASC_TEXT, encoding="utf-8")
    return path


@pytest.fixture
def experiment() -> Experiment:
    return parse_asc(ASC_TEXT, ParserConfig(n_jobs=1))

