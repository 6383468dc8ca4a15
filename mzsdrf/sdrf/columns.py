# mzsdrf/sdrf/columns.py
"""
SDRF column header classification.

Headers follow the SDRF-Proteomics grammar: ``source name`` identifies the
sample, ``characteristics[...]``, ``comment[...]`` and ``factor value[...]``
carry bracketed property names, and everything else is an innate column whose
header is used verbatim.
"""
import re
from enum import Enum
from typing import Tuple

from ..core.exceptions import ColumnFormatError

SOURCE_NAME = "source name"

_BRACKET_INNER_SPACE = re.compile(r"\[\s+|\s+\]")


class ColumnClass(Enum):
    """Semantic class of an SDRF column."""

    SOURCE_NAME = "source name"
    INNATE = "innate"
    CHARACTERISTIC = "characteristic"
    COMMENT = "comment"
    FACTOR = "factor"


# Ordered so the longer "characteristics[" prefix is tried first
COLUMN_PREFIXES: Tuple[Tuple[str, ColumnClass], ...] = (
    ("characteristics[", ColumnClass.CHARACTERISTIC),
    ("characteristic[", ColumnClass.CHARACTERISTIC),
    ("comment[", ColumnClass.COMMENT),
    ("factor value[", ColumnClass.FACTOR),
)


def normalize_header(header: str) -> str:
    """Strip stray whitespace around the header and just inside its brackets."""
    return _BRACKET_INNER_SPACE.sub(
        lambda m: "[" if m.group(0).startswith("[") else "]", header.strip()
    )


def classify_column(header: str) -> Tuple[ColumnClass, str]:
    """
    Classify a (normalized) column header.

    Args:
        header: Column header text

    Returns:
        Tuple of (column class, raw name). The raw name is the header itself.
    """
    if header == SOURCE_NAME:
        return ColumnClass.SOURCE_NAME, header
    for prefix, column_class in COLUMN_PREFIXES:
        if header.startswith(prefix):
            return column_class, header
    return ColumnClass.INNATE, header


def canonical_name(raw_name: str, column_class: ColumnClass) -> str:
    """
    Extract the property name used for ontology mapping.

    ``characteristics[organism part]`` becomes ``organism part``. Innate
    columns are returned unchanged.

    Raises:
        ColumnFormatError: If a bracketed header has no closing bracket
    """
    if column_class in (ColumnClass.INNATE, ColumnClass.SOURCE_NAME):
        return raw_name

    _, bracket, rest = raw_name.partition("[")
    inner, closing, _ = rest.rpartition("]")
    if not bracket or not closing:
        raise ColumnFormatError(raw_name)
    return inner.strip()
