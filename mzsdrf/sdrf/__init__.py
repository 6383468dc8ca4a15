"""Reading and classifying SDRF sample annotation tables."""

from .columns import ColumnClass, canonical_name, classify_column, normalize_header
from .model import DATA_FILE, INSTRUMENT, Field, SampleRow
from .reader import read_sdrf

__all__ = [
    "ColumnClass",
    "DATA_FILE",
    "Field",
    "INSTRUMENT",
    "SampleRow",
    "canonical_name",
    "classify_column",
    "normalize_header",
    "read_sdrf",
]
