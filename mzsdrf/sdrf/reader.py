# mzsdrf/sdrf/reader.py
import csv
import logging
import re
from pathlib import Path
from typing import Dict, List, Sequence, Tuple, Union

from ..core.exceptions import ColumnFormatError, TableFormatError
from ..core.value import Value
from .columns import (
    SOURCE_NAME,
    ColumnClass,
    canonical_name,
    classify_column,
    normalize_header,
)
from .model import Field, SampleRow

logger = logging.getLogger(__name__)

# Characters outside the XML 1.0 Char production cannot be written to mzML
_XML_INCOMPATIBLE = re.compile(
    "[^\x09\x0a\x0d\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]"
)

_BUCKETS = {
    ColumnClass.INNATE: "fields",
    ColumnClass.CHARACTERISTIC: "characteristics",
    ColumnClass.COMMENT: "comments",
    ColumnClass.FACTOR: "factors",
}


def _load_table(sdrf_path: Path) -> List[List[str]]:
    """Tokenize the TSV into rows of strings, header row included."""
    try:
        with open(sdrf_path, newline="", encoding="utf-8-sig") as handle:
            reader = csv.reader(handle, delimiter="\t")
            # Fully blank lines carry no sample
            return [row for row in reader if any(cell.strip() for cell in row)]
    except csv.Error as e:
        raise TableFormatError(f"Failed to tokenize SDRF file {sdrf_path}: {e}") from e
    except (OSError, UnicodeDecodeError) as e:
        raise TableFormatError(f"Unable to read SDRF file {sdrf_path}: {e}") from e


def _classify_headers(raw_headers: Sequence[str]) -> List[Tuple[ColumnClass, str]]:
    """Normalize and classify headers, validating bracketed names up front."""
    columns = []
    for raw in raw_headers:
        column_class, name = classify_column(normalize_header(raw))
        if _XML_INCOMPATIBLE.search(name):
            raise TableFormatError(
                "Header row: contains characters not allowed in XML", column=name
            )
        try:
            canonical_name(name, column_class)
        except ColumnFormatError as e:
            raise TableFormatError(f"Header row: {e}", column=name) from e
        columns.append((column_class, name))

    if not any(c is ColumnClass.SOURCE_NAME for c, _ in columns):
        raise TableFormatError(f"SDRF table has no '{SOURCE_NAME}' column")
    return columns


def _parse_row(
    index: int, cells: Sequence[str], columns: List[Tuple[ColumnClass, str]]
) -> SampleRow:
    if len(cells) != len(columns):
        raise TableFormatError(
            f"Expected {len(columns)} cells, found {len(cells)}", row_index=index
        )

    name = None
    buckets: Dict[str, List[Field]] = {bucket: [] for bucket in _BUCKETS.values()}
    for (column_class, header), cell in zip(columns, cells):
        bad_char = _XML_INCOMPATIBLE.search(cell)
        if bad_char is not None:
            raise TableFormatError(
                f"Character {bad_char.group(0)!r} is not allowed in XML",
                row_index=index,
                column=header,
            )
        if column_class is ColumnClass.SOURCE_NAME:
            name = cell.strip()
            continue
        buckets[_BUCKETS[column_class]].append(
            Field(name=header, field_class=column_class, value=Value.parse(cell))
        )

    if not name:
        raise TableFormatError("Empty source name", row_index=index, column=SOURCE_NAME)

    return SampleRow(
        name=name,
        index=index,
        **{bucket: tuple(values) for bucket, values in buckets.items()},
    )


def read_sdrf(sdrf_path: Union[str, Path]) -> List[SampleRow]:
    """
    Read an SDRF file into row-level samples.

    Makes no effort to aggregate replicates.

    Args:
        sdrf_path: Path to the tab-separated SDRF file

    Returns:
        Parsed rows in file order. Row indices count data rows from 0.

    Raises:
        TableFormatError: If the file is unreadable or a header/row is malformed
    """
    sdrf_path = Path(sdrf_path)
    table = _load_table(sdrf_path)
    if not table:
        raise TableFormatError(f"SDRF file has no header row: {sdrf_path}")

    columns = _classify_headers(table[0])
    rows = [_parse_row(index, cells, columns) for index, cells in enumerate(table[1:])]
    logger.info(f"Read {len(rows)} SDRF rows with {len(columns)} columns from {sdrf_path}")
    return rows
