"""I/O utilities: ASC loading and persisted experiment encodings."""

from .io import read_asc_text, load_asc_from_file, save_experiment, load_experiment_file, write_tsv
from .codecs import (
    ExperimentCodec,
    JsonCodec,
    PickleCodec,
    CODECS,
    get_codec,
    experiment_to_dict,
    experiment_from_dict,
)

__all__ = [
    "read_asc_text",
    "load_asc_from_file",
    "save_experiment",
    "load_experiment_file",
    "write_tsv",
    "ExperimentCodec",
    "JsonCodec",
    "PickleCodec",
    "CODECS",
    "get_codec",
    "experiment_to_dict",
    "experiment_from_dict",
]
